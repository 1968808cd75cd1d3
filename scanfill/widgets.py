"""
Janela principal: editor 2D, visualizador OpenGL e painel de controles

Organização:
- Abas: Desenho 2D (canvas_2d.Canvas) e OpenGL (opengl_viewer.OpenGLViewer)
- Barra de ferramentas: ações do editor, cores e extrusão
- Painel lateral: paleta de cores, projeção e iluminação
"""
import logging
from typing import Optional

from PyQt5.QtCore import Qt
from PyQt5.QtWidgets import (
    QWidget, QMainWindow, QAction, QColorDialog, QSpinBox, QLabel,
    QToolBar, QMessageBox, QStatusBar, QDoubleSpinBox, QComboBox,
    QPushButton, QVBoxLayout, QHBoxLayout, QGroupBox, QGridLayout,
    QSplitter, QCheckBox, QTabWidget, QScrollArea, QInputDialog
)

from scanfill import geometry3d as geo3d
from scanfill.canvas_2d import Canvas, to_qcolor
from scanfill.config import AppConfig
from scanfill.opengl_viewer import OpenGLViewer, SHADING_MODELS
from scanfill.palette import COLOR_PALETTE, ColorRGB

logger = logging.getLogger(__name__)


def _button_style(color: ColorRGB) -> str:
    r, g, b = ColorRGB(*color).to_rgb255()
    return f"background-color: rgb({r}, {g}, {b});"


class MainWindow(QMainWindow):
    """Janela principal da aplicação"""

    def __init__(self, config: Optional[AppConfig] = None):
        super().__init__()
        self.config = config or AppConfig()
        self.setWindowTitle("Preenchimento de Polígonos - ET/AET")

        self.extruded_object: Optional[geo3d.Object3D] = None
        self.extrusion_depth = self.config.extrusion_depth

        splitter = QSplitter(Qt.Horizontal, self)

        self.viewer_tabs = QTabWidget()
        self.canvas = Canvas(self, self.config)
        self.viewer_tabs.addTab(self.canvas, "Desenho 2D")
        self.opengl_viewer = OpenGLViewer(self)
        self.viewer_tabs.addTab(self.opengl_viewer, "OpenGL (Iluminação)")

        self.opengl_viewer.on_light_position_changed = self._sync_light_controls
        self.canvas.on_polygon_changed = self._on_polygon_2d_changed

        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setHorizontalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        scroll.setWidget(self._create_controls())

        splitter.addWidget(self.viewer_tabs)
        splitter.addWidget(scroll)
        splitter.setStretchFactor(0, 3)
        splitter.setStretchFactor(1, 1)

        self.setCentralWidget(splitter)
        self.status = QStatusBar(self)
        self.setStatusBar(self.status)
        self._create_toolbar()
        self.resize(*self.config.window_size)

    def _create_toolbar(self):
        tb = QToolBar("Ferramentas", self)
        self.addToolBar(tb)

        tb.addWidget(QLabel("Desenho:"))
        for text, slot in (
            ("Fechar", self.canvas.close_polygon),
            ("Limpar", self.canvas.clear),
            ("Desfazer", self.canvas.undo),
            ("Preencher", self.canvas.fill_polygon),
            ("Vértices", self.canvas.toggle_vertices),
            ("Salvar", self.canvas.save_polygon),
        ):
            action = QAction(text, self)
            action.triggered.connect(slot)
            tb.addAction(action)

        tb.addSeparator()
        tb.addWidget(QLabel("Cores:"))

        act_stroke = QAction("Contorno", self)
        act_stroke.triggered.connect(self._choose_stroke_color)
        tb.addAction(act_stroke)

        act_fill = QAction("Preenchimento", self)
        act_fill.triggered.connect(self._choose_fill_color)
        tb.addAction(act_fill)

        tb.addWidget(QLabel("Espessura:"))
        self.thickness_spin = QSpinBox(self)
        self.thickness_spin.setRange(self.config.min_line_thickness, self.config.max_line_thickness)
        self.thickness_spin.setValue(self.canvas.manager.line_thickness)
        self.thickness_spin.setMaximumWidth(60)
        self.thickness_spin.valueChanged.connect(self.canvas.set_stroke_width)
        tb.addWidget(self.thickness_spin)

        tb.addSeparator()

        act_extrude = QAction("Extrudar", self)
        act_extrude.triggered.connect(self._extrude_polygon)
        tb.addAction(act_extrude)

        act_clear_3d = QAction("Limpar 3D", self)
        act_clear_3d.triggered.connect(self._clear_3d_objects)
        tb.addAction(act_clear_3d)

    def _create_controls(self) -> QWidget:
        widget = QWidget()
        layout = QVBoxLayout(widget)
        layout.setSpacing(10)

        # Paleta 4x4
        palette_group = QGroupBox("Paleta")
        grid = QGridLayout()
        for index, color in enumerate(COLOR_PALETTE):
            btn = QPushButton()
            btn.setFixedSize(32, 32)
            btn.setStyleSheet(_button_style(color))
            btn.clicked.connect(lambda _checked, i=index: self._on_palette_clicked(i))
            grid.addWidget(btn, index // 4, index % 4)
        palette_group.setLayout(grid)
        layout.addWidget(palette_group)

        # Projeção
        proj_group = QGroupBox("Projeção")
        proj_layout = QVBoxLayout()
        self.proj_combo = QComboBox()
        self.proj_combo.addItems(["Perspectiva", "Ortográfica"])
        self.proj_combo.currentIndexChanged.connect(self._on_projection_changed)
        proj_layout.addWidget(self.proj_combo)
        self.distance_spin = QDoubleSpinBox()
        self.distance_spin.setRange(100.0, 2000.0)
        self.distance_spin.setValue(500.0)
        self.distance_spin.setSuffix(" px")
        self.distance_spin.valueChanged.connect(self._on_projection_changed)
        proj_layout.addWidget(QLabel("Distância (Perspectiva):"))
        proj_layout.addWidget(self.distance_spin)
        proj_group.setLayout(proj_layout)
        layout.addWidget(proj_group)

        # Iluminação
        light_group = QGroupBox("Iluminação")
        light_layout = QVBoxLayout()
        self.shading_combo = QComboBox()
        self.shading_combo.addItems([m.capitalize() for m in SHADING_MODELS])
        self.shading_combo.currentIndexChanged.connect(
            lambda index: self.opengl_viewer.set_shading_model(SHADING_MODELS[index]))
        light_layout.addWidget(QLabel("Modelo:"))
        light_layout.addWidget(self.shading_combo)

        light_pos_layout = QHBoxLayout()
        self.light_spins = []
        for axis, value in zip("XYZ", self.opengl_viewer.light_position[:3]):
            spin = QDoubleSpinBox()
            spin.setRange(-1000.0, 1000.0)
            spin.setValue(value)
            spin.valueChanged.connect(self._update_light_position)
            light_pos_layout.addWidget(QLabel(f"{axis}:"))
            light_pos_layout.addWidget(spin)
            self.light_spins.append(spin)
        light_layout.addWidget(QLabel("Posição da Luz:"))
        light_layout.addLayout(light_pos_layout)

        self.light_color_btn = QPushButton("Cor da Luz")
        self.light_color_btn.clicked.connect(self._choose_light_color)
        light_layout.addWidget(self.light_color_btn)

        self.object_color_btn = QPushButton("Cor do Objeto 3D")
        self.object_color_btn.setStyleSheet(_button_style(self.opengl_viewer.object_color))
        self.object_color_btn.clicked.connect(self._choose_object_color)
        light_layout.addWidget(self.object_color_btn)

        show_light = QCheckBox("Mostrar Fonte de Luz")
        show_light.setChecked(True)
        show_light.toggled.connect(self._toggle_light_representation)
        light_layout.addWidget(show_light)

        light_layout.addWidget(QLabel("Rotação: arraste com botão esquerdo"))
        light_layout.addWidget(QLabel("Zoom: roda do mouse"))
        light_layout.addWidget(QLabel("Mover luz: setas e PgUp/PgDn"))
        light_group.setLayout(light_layout)
        layout.addWidget(light_group)

        layout.addStretch()
        return widget

    def _pick_color(self, current: ColorRGB, title: str) -> Optional[ColorRGB]:
        color = QColorDialog.getColor(to_qcolor(current), self, title)
        if not color.isValid():
            return None
        return ColorRGB.from_rgb255(color.red(), color.green(), color.blue())

    def _choose_stroke_color(self):
        color = self._pick_color(self.canvas.manager.line_color, "Cor do Contorno")
        if color:
            self.canvas.set_stroke_color(color)

    def _choose_fill_color(self):
        color = self._pick_color(self.canvas.manager.fill_color, "Cor de Preenchimento")
        if color:
            self.canvas.set_fill_color(color)

    def _choose_light_color(self):
        color = self._pick_color(self.opengl_viewer.light_color, "Cor da Luz")
        if color:
            self.opengl_viewer.set_light_color(*color)

    def _choose_object_color(self):
        color = self._pick_color(self.opengl_viewer.object_color, "Cor do Objeto 3D")
        if color:
            self.opengl_viewer.set_object_color(*color)
            self.object_color_btn.setStyleSheet(_button_style(color))

    def _on_palette_clicked(self, index: int):
        self.canvas.select_palette_color(index)
        self.status.showMessage(f"Cor selecionada: {index}", 2000)

    def _on_projection_changed(self, *_args):
        self.opengl_viewer.set_projection(self.proj_combo.currentIndex() == 0,
                                          self.distance_spin.value())

    def _update_light_position(self):
        self.opengl_viewer.set_light_position(*(spin.value() for spin in self.light_spins))

    def _sync_light_controls(self, x: float, y: float, z: float):
        """Atualiza os spins quando a luz é movida pelo teclado"""
        for spin, value in zip(self.light_spins, (x, y, z)):
            spin.blockSignals(True)
            spin.setValue(value)
            spin.blockSignals(False)

    def _toggle_light_representation(self, checked: bool):
        self.opengl_viewer.show_light_representation = checked
        self.opengl_viewer.update()

    def _build_extruded_object(self) -> geo3d.Object3D:
        obj = geo3d.extrude_polygon_2d(
            self.canvas.manager.vertices, self.extrusion_depth,
            scale=self.config.extrusion_scale,
            cap_height=self.config.cap_triangulation_height,
        )
        obj.color = (*self.opengl_viewer.object_color, 1.0)
        return obj

    def _extrude_polygon(self):
        """Extrui o polígono 2D atual para 3D"""
        if not self.canvas.manager.can_be_filled():
            QMessageBox.warning(self, "Erro", "Feche o polígono primeiro antes de extrudar.")
            return

        depth, ok = QInputDialog.getDouble(
            self, "Profundidade", "Digite a profundidade da extrusão:",
            self.extrusion_depth, 1.0, 1000.0, 1
        )
        if not ok:
            return

        self.extrusion_depth = depth
        try:
            obj = self._build_extruded_object()
        except ValueError as e:
            QMessageBox.critical(self, "Erro", f"Erro ao extrudar polígono: {e}")
            return

        if self.extruded_object is not None:
            self.opengl_viewer.replace_object(self.extruded_object, obj)
        else:
            self.opengl_viewer.add_object(obj)
        self.extruded_object = obj
        self.viewer_tabs.setCurrentWidget(self.opengl_viewer)
        self.status.showMessage(f"Polígono extrudado com profundidade {depth}", 3000)

    def _on_polygon_2d_changed(self):
        """Re-extrui automaticamente quando o polígono editado muda"""
        if self.extruded_object is None or not self.canvas.manager.can_be_filled():
            return
        try:
            obj = self._build_extruded_object()
        except ValueError:
            logger.warning("Re-extrusão ignorada: polígono inválido")
            return
        obj.color = self.extruded_object.color
        self.opengl_viewer.replace_object(self.extruded_object, obj)
        self.extruded_object = obj

    def _clear_3d_objects(self):
        self.opengl_viewer.clear_objects()
        self.extruded_object = None
        self.status.showMessage("Objetos 3D removidos", 2000)
