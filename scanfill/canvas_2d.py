"""
Canvas 2D para desenho de polígonos e preenchimento com scanline
"""
import logging
from typing import Iterable, Optional, Sequence

from PyQt5.QtCore import Qt, QPoint
from PyQt5.QtGui import QPainter, QPen, QColor
from PyQt5.QtWidgets import QWidget, QMessageBox

from scanfill import polygon_fill
from scanfill.config import AppConfig
from scanfill.palette import ColorRGB
from scanfill.polygon_manager import PolygonManager, Point, are_points_collinear

logger = logging.getLogger(__name__)


def to_qcolor(color: ColorRGB) -> QColor:
    return QColor(*ColorRGB(*color).to_rgb255())


class Canvas(QWidget):
    """Canvas 2D: cliques adicionam vértices, o preenchimento usa ET/AET"""

    def __init__(self, parent=None, config: Optional[AppConfig] = None):
        super().__init__(parent)
        self.manager = PolygonManager(config)
        self.on_polygon_changed = None  # Callback para notificar mudanças
        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.StrongFocus)
        self.setMinimumSize(600, 400)

    def _notify_changed(self):
        if self.on_polygon_changed:
            self.on_polygon_changed()

    def _show_alert(self, title: str, message: str):
        """Mostra um alerta ao usuário"""
        msg_box = QMessageBox(self)
        msg_box.setIcon(QMessageBox.Warning)
        msg_box.setWindowTitle(title)
        msg_box.setText(message)
        msg_box.setStandardButtons(QMessageBox.Ok)
        msg_box.exec_()

    def clear(self):
        self.manager.clear_polygon()
        self._notify_changed()
        self.update()

    def undo(self):
        self.manager.undo()
        self._notify_changed()
        self.update()

    def close_polygon(self):
        """Fecha o polígono com validações"""
        if self.manager.vertex_count < 3:
            self._show_alert(
                "Polígono Inválido",
                "Um polígono precisa de pelo menos 3 pontos.\n"
                "Adicione mais pontos antes de fechar o polígono."
            )
            return
        if are_points_collinear(self.manager.vertices):
            self._show_alert(
                "Polígono Inválido",
                "Os pontos são colineares (estão todos na mesma linha).\n"
                "Um polígono válido precisa de pontos que formem uma área."
            )
            return
        self.manager.close_polygon()
        self._notify_changed()
        self.update()

    def fill_polygon(self):
        """Preenche o polígono dentro da área visível do canvas"""
        if not self.manager.can_be_filled():
            self._show_alert(
                "Polígono Não Fechado",
                "O polígono precisa estar fechado antes de preencher.\n"
                "Clique com o botão direito ou use 'Fechar' para fechar."
            )
            return
        self.manager.fill_polygon(self.height(), self.width())
        self.update()

    def save_polygon(self):
        if not self.manager.save_current_polygon():
            self._show_alert("Polígono Não Fechado",
                             "O polígono deve estar fechado para ser salvo.")
            return
        self._notify_changed()
        self.update()

    def toggle_vertices(self):
        self.manager.toggle_vertex_visibility()
        self.update()

    def adjust_line_thickness(self, increase: bool):
        self.manager.adjust_line_thickness(increase)
        self.update()

    def set_stroke_width(self, width: int):
        cfg = self.manager.config
        self.manager.line_thickness = max(cfg.min_line_thickness,
                                          min(cfg.max_line_thickness, int(width)))
        self.update()

    def set_stroke_color(self, color: ColorRGB):
        self.manager.set_line_color(color)
        self.update()

    def set_fill_color(self, color: ColorRGB):
        self.manager.set_fill_color(color)
        self.manager.refill(self.height(), self.width())
        self.update()

    def apply_preset_color(self, index: int):
        if self.manager.apply_preset_fill_color(index):
            self.manager.refill(self.height(), self.width())
            self.update()

    def select_palette_color(self, index: int):
        if self.manager.select_palette_color(index):
            self.manager.refill(self.height(), self.width())
            self.update()

    def mousePressEvent(self, event):
        if event.button() == Qt.LeftButton:
            self.manager.add_vertex(event.x(), event.y())
            self.update()
        elif event.button() == Qt.RightButton:
            self.close_polygon()
        self.setFocus()

    def keyPressEvent(self, event):
        key = event.key()
        text = event.text()
        if key == Qt.Key_F:
            self.close_polygon()
        elif key == Qt.Key_C:
            self.clear()
        elif key == Qt.Key_P:
            self.fill_polygon()
        elif key == Qt.Key_V:
            self.toggle_vertices()
        elif key == Qt.Key_S:
            self.save_polygon()
        elif key in (Qt.Key_Z, Qt.Key_Backspace):
            self.undo()
        elif text in ('+', '='):
            self.adjust_line_thickness(True)
        elif text == '-':
            self.adjust_line_thickness(False)
        elif text in ('1', '2', '3', '4', '5', '6'):
            self.apply_preset_color(int(text))
        else:
            super().keyPressEvent(event)

    def _paint_fragments(self, painter: QPainter, fragments: Iterable[polygon_fill.Fragment],
                         color: ColorRGB):
        pen = QPen(to_qcolor(color))
        pen.setWidth(1)
        painter.setPen(pen)
        for fragment in fragments:
            if isinstance(fragment, polygon_fill.Span):
                painter.drawLine(fragment.x_start, fragment.y, fragment.x_end, fragment.y)
            else:
                painter.drawPoint(fragment.x, fragment.y)

    def _paint_outline(self, painter: QPainter, vertices: Sequence[Point], color: ColorRGB,
                       thickness: int, closed: bool):
        if len(vertices) < 2:
            return
        pen = QPen(to_qcolor(color))
        pen.setWidth(thickness)
        painter.setPen(pen)
        for (x0, y0), (x1, y1) in zip(vertices, vertices[1:]):
            painter.drawLine(x0, y0, x1, y1)
        if closed and len(vertices) > 2:
            x0, y0 = vertices[-1]
            x1, y1 = vertices[0]
            painter.drawLine(x0, y0, x1, y1)

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.fillRect(self.rect(), Qt.white)

        for saved in self.manager.saved_polygons:
            self._paint_fragments(painter, saved.fragments, saved.fill_color)
            self._paint_outline(painter, saved.vertices, saved.line_color,
                                saved.line_thickness, closed=True)

        manager = self.manager
        # Spans sem antialiasing: pixel a pixel
        self._paint_fragments(painter, manager.fragments, manager.fill_color)

        painter.setRenderHint(QPainter.Antialiasing, True)
        self._paint_outline(painter, manager.vertices, manager.line_color,
                            manager.line_thickness, manager.is_closed)

        if manager.show_vertices:
            painter.setPen(Qt.NoPen)
            painter.setBrush(QColor(255, 200, 0))
            r = max(3, manager.line_thickness)
            for (x, y) in manager.vertices:
                painter.drawEllipse(QPoint(x, y), r, r)
        painter.end()
