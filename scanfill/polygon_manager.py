"""
Estado do polígono em edição (independente de Qt)
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from scanfill import polygon_fill
from scanfill.config import AppConfig
from scanfill.palette import COLOR_PALETTE, PRESET_FILL_COLORS, ColorRGB

logger = logging.getLogger(__name__)

Point = Tuple[int, int]


class ApplicationState(Enum):
    DRAWING_POLYGON = "drawing_polygon"
    POLYGON_READY = "polygon_ready"
    POLYGON_FILLED = "polygon_filled"


@dataclass(frozen=True)
class SavedPolygon:
    vertices: Tuple[Point, ...]
    fill_color: ColorRGB
    line_color: ColorRGB
    line_thickness: int
    fragments: Tuple[polygon_fill.Fragment, ...] = field(default_factory=tuple)

    @property
    def is_filled(self) -> bool:
        return bool(self.fragments)


def are_points_collinear(points: Sequence[Point], tolerance: float = 1e-6) -> bool:
    """
    Verifica se todos os pontos estão na mesma reta

    Usa a área do triângulo formado pelos dois primeiros pontos e cada um dos
    demais (produto vetorial). Dois primeiros pontos coincidentes não definem
    reta e contam como colineares.
    """
    if len(points) < 3:
        return False

    x1, y1 = points[0]
    x2, y2 = points[1]
    if abs(x2 - x1) < tolerance and abs(y2 - y1) < tolerance:
        return True

    for x3, y3 in points[2:]:
        area = abs((x2 - x1) * (y3 - y1) - (x3 - x1) * (y2 - y1))
        if area > tolerance:
            return False
    return True


class PolygonManager:
    """Vértices, cores e polígonos salvos do editor 2D"""

    def __init__(self, config: Optional[AppConfig] = None):
        self.config = config or AppConfig()
        self.vertices: List[Point] = []
        self.is_closed: bool = False
        self.fill_color: ColorRGB = self.config.fill_color
        self.line_color: ColorRGB = self.config.line_color
        self.line_thickness: int = self.config.line_thickness
        self.show_vertices: bool = True
        self.fragments: List[polygon_fill.Fragment] = []
        self.saved_polygons: List[SavedPolygon] = []
        self.state = ApplicationState.DRAWING_POLYGON

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def is_filled(self) -> bool:
        return self.state == ApplicationState.POLYGON_FILLED

    def add_vertex(self, x: int, y: int):
        """Adiciona um vértice; um polígono já fechado dá lugar a um novo"""
        if self.is_closed:
            self.clear_polygon()
        self.vertices.append((int(x), int(y)))
        self.state = ApplicationState.DRAWING_POLYGON
        logger.info("Vértice adicionado: (%d, %d)", x, y)

    def close_polygon(self) -> bool:
        if len(self.vertices) < 3:
            logger.warning("Polígono precisa de pelo menos 3 vértices (tem %d)", len(self.vertices))
            return False
        if are_points_collinear(self.vertices):
            logger.warning("Vértices colineares, polígono sem área")
            return False
        self.is_closed = True
        if self.state != ApplicationState.POLYGON_FILLED:
            self.state = ApplicationState.POLYGON_READY
        logger.info("Polígono fechado com %d vértices", len(self.vertices))
        return True

    def clear_polygon(self):
        self.vertices.clear()
        self.is_closed = False
        self.fragments = []
        self.state = ApplicationState.DRAWING_POLYGON
        logger.info("Polígono limpo")

    def undo(self):
        """Desfaz o preenchimento, ou remove o último vértice"""
        if self.is_filled:
            self.fragments = []
            self.state = (ApplicationState.POLYGON_READY if self.is_closed
                          else ApplicationState.DRAWING_POLYGON)
            return
        if self.vertices:
            self.vertices.pop()
            if len(self.vertices) < 3:
                self.is_closed = False
                self.state = ApplicationState.DRAWING_POLYGON

    def can_be_filled(self) -> bool:
        return self.is_closed and len(self.vertices) >= 3

    def fill_polygon(self, bound_height: int, bound_width: int) -> bool:
        """Preenche o polígono fechado usando ET/AET dentro da área de desenho"""
        if not self.can_be_filled():
            logger.warning("Polígono deve estar fechado para ser preenchido")
            return False
        self.fragments = polygon_fill.fill(self.vertices, self.fill_color, bound_height, bound_width)
        self.state = ApplicationState.POLYGON_FILLED
        logger.info("Polígono preenchido: %d fragmentos", len(self.fragments))
        return True

    def refill(self, bound_height: int, bound_width: int):
        """Refaz o preenchimento atual (ex.: após mudar a cor ou o tamanho)"""
        if self.is_filled:
            self.fragments = polygon_fill.fill(self.vertices, self.fill_color,
                                               bound_height, bound_width)

    def toggle_vertex_visibility(self):
        self.show_vertices = not self.show_vertices
        logger.info("Vértices %s", "mostrados" if self.show_vertices else "ocultos")

    def adjust_line_thickness(self, increase: bool):
        step = 1 if increase else -1
        self.line_thickness = max(self.config.min_line_thickness,
                                  min(self.config.max_line_thickness, self.line_thickness + step))
        logger.info("Espessura: %d", self.line_thickness)

    def set_fill_color(self, color: ColorRGB):
        self.fill_color = ColorRGB(*color)

    def set_line_color(self, color: ColorRGB):
        self.line_color = ColorRGB(*color)

    def apply_preset_fill_color(self, index: int) -> bool:
        if index not in PRESET_FILL_COLORS:
            return False
        name, color = PRESET_FILL_COLORS[index]
        self.set_fill_color(color)
        logger.info("Cor alterada para: %s", name)
        return True

    def select_palette_color(self, index: int) -> bool:
        """Cor da paleta 4x4: vale para preenchimento e contorno"""
        if not 0 <= index < len(COLOR_PALETTE):
            return False
        self.set_fill_color(COLOR_PALETTE[index])
        self.set_line_color(COLOR_PALETTE[index])
        logger.info("Cor selecionada: %d", index)
        return True

    def save_current_polygon(self) -> bool:
        """Guarda o polígono fechado (com o preenchimento, se houver) e inicia outro"""
        if not self.can_be_filled():
            logger.warning("Polígono deve estar fechado para ser salvo")
            return False
        self.saved_polygons.append(SavedPolygon(
            vertices=tuple(self.vertices),
            fill_color=self.fill_color,
            line_color=self.line_color,
            line_thickness=self.line_thickness,
            fragments=tuple(self.fragments) if self.is_filled else (),
        ))
        self.clear_polygon()
        logger.info("Polígono salvo (%d no total)", len(self.saved_polygons))
        return True

    def clear_saved_polygons(self):
        self.saved_polygons.clear()
