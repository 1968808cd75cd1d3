"""
Preenchimento e triangulação de polígonos por scanline (ET/AET)

Estrutura modular:
- polygon_fill.py: Edge Table / Active Edge Table, fill e triangulate
- polygon_manager.py: Estado do polígono em edição
- geometry3d.py: Extrusão de polígonos e normais
- canvas_2d.py, opengl_viewer.py, widgets.py: Interface PyQt5
"""
from scanfill.polygon_fill import (
    Edge, PixelPoint, Span, build_edge_table, fill, triangulate
)

__version__ = "1.0.0"

__all__ = [
    "Edge",
    "PixelPoint",
    "Span",
    "build_edge_table",
    "fill",
    "triangulate",
]
