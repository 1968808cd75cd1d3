"""
Widget OpenGL para renderização 3D dos objetos extrudados
"""
import logging
from typing import List

from PyQt5.QtCore import Qt
from PyQt5.QtGui import QSurfaceFormat
from PyQt5.QtWidgets import QOpenGLWidget
from OpenGL.GL import *
from OpenGL.GLU import *

from scanfill import geometry3d as geo3d

logger = logging.getLogger(__name__)

SHADING_MODELS = ('flat', 'gouraud', 'phong')


class OpenGLViewer(QOpenGLWidget):
    """Widget OpenGL com iluminação fixa (flat, Gouraud ou Phong aproximado)"""

    def __init__(self, parent=None):
        super().__init__(parent)

        fmt = QSurfaceFormat()
        fmt.setVersion(2, 1)
        fmt.setDepthBufferSize(24)
        self.setFormat(fmt)

        self.objects: List[geo3d.Object3D] = []

        # Luz posicional (w=1.0) fixa no espaço do mundo
        self.light_position = [200.0, 200.0, 200.0, 1.0]
        self.light_color = (1.0, 1.0, 1.0)
        self.object_color = (0.7, 0.7, 0.7)
        self.material_shininess = 50.0

        self.shading_model = 'flat'

        self.is_perspective = True
        self.distance = 500.0

        self.camera_rot_x = 30.0
        self.camera_rot_y = 45.0
        self.camera_distance = 400.0
        self.last_mouse_pos = None
        self.mouse_sensitivity = 0.5

        self.show_light_representation = True
        self.on_light_position_changed = None

        self.setFocusPolicy(Qt.StrongFocus)
        self.setMinimumSize(400, 300)

    def initializeGL(self):
        glEnable(GL_DEPTH_TEST)
        glDepthFunc(GL_LEQUAL)
        glEnable(GL_LIGHTING)
        glEnable(GL_LIGHT0)
        glDisable(GL_COLOR_MATERIAL)
        glEnable(GL_NORMALIZE)
        glLightModeli(GL_LIGHT_MODEL_TWO_SIDE, GL_TRUE)
        glClearColor(0.1, 0.1, 0.15, 1.0)
        glDisable(GL_CULL_FACE)

    def resizeGL(self, width, height):
        glViewport(0, 0, width, height)

    def _apply_projection(self):
        glMatrixMode(GL_PROJECTION)
        glLoadIdentity()
        aspect = self.width() / self.height() if self.height() > 0 else 1.0
        if self.is_perspective:
            # Distância maior = FOV menor; 500 equivale a 45 graus
            fov_degrees = max(10.0, min(90.0, 45.0 * (500.0 / self.distance)))
            gluPerspective(fov_degrees, aspect, 1.0, 5000.0)
        else:
            glOrtho(-300.0 * aspect, 300.0 * aspect, -300.0, 300.0, -2000.0, 2000.0)
        glMatrixMode(GL_MODELVIEW)

    def _apply_lighting(self):
        r, g, b = self.light_color
        glLightfv(GL_LIGHT0, GL_POSITION, self.light_position)
        glLightfv(GL_LIGHT0, GL_AMBIENT, [r * 0.2, g * 0.2, b * 0.2, 1.0])
        glLightfv(GL_LIGHT0, GL_DIFFUSE, [r, g, b, 1.0])
        glLightfv(GL_LIGHT0, GL_SPECULAR, [r, g, b, 1.0])

    def paintGL(self):
        glClear(GL_COLOR_BUFFER_BIT | GL_DEPTH_BUFFER_BIT)
        self._apply_projection()

        glLoadIdentity()
        glTranslatef(0.0, 0.0, -self.camera_distance)
        glRotatef(self.camera_rot_x, 1.0, 0.0, 0.0)
        glRotatef(self.camera_rot_y, 0.0, 1.0, 0.0)
        # GL_POSITION depois da câmera: a luz acompanha o mundo
        self._apply_lighting()

        glShadeModel(GL_FLAT if self.shading_model == 'flat' else GL_SMOOTH)

        for obj in self.objects:
            self._draw_object(obj)

        if self.show_light_representation:
            self._draw_light_representation()

    def _apply_material(self, color):
        r, g, b = color[:3]
        alpha = color[3] if len(color) > 3 else 1.0
        specular = 1.0 if self.shading_model != 'phong' else 1.2
        glMaterialfv(GL_FRONT_AND_BACK, GL_AMBIENT, [r * 0.3, g * 0.3, b * 0.3, alpha])
        glMaterialfv(GL_FRONT_AND_BACK, GL_DIFFUSE,
                     [min(1.0, r * 1.2), min(1.0, g * 1.2), min(1.0, b * 1.2), alpha])
        glMaterialfv(GL_FRONT_AND_BACK, GL_SPECULAR, [specular, specular, specular, alpha])
        glMaterialfv(GL_FRONT_AND_BACK, GL_SHININESS, [self.material_shininess])

    def _draw_object(self, obj: geo3d.Object3D):
        if not obj.vertices:
            return

        face_normals = obj.face_normals()
        vertex_normals = None
        if self.shading_model != 'flat':
            vertex_normals = obj.vertex_normals(face_normals)

        self._apply_material(obj.color)

        vertices = obj.vertices
        glBegin(GL_TRIANGLES)
        for face, face_normal in zip(obj.faces, face_normals):
            if len(face) < 3:
                continue
            if vertex_normals is None:
                glNormal3f(*face_normal)
            # Faces convexas (quads laterais e triângulos das tampas): leque
            for i in range(1, len(face) - 1):
                for idx in (face[0], face[i], face[i + 1]):
                    if vertex_normals is not None:
                        glNormal3f(*vertex_normals[idx])
                    glVertex3f(*vertices[idx])
        glEnd()

    def _draw_light_representation(self):
        """Desenha a fonte de luz como uma cruz amarela"""
        glPushMatrix()
        glTranslatef(*self.light_position[:3])

        glDisable(GL_LIGHTING)
        glColor3f(1.0, 1.0, 0.6)
        size = 8.0
        glBegin(GL_LINES)
        for axis in range(3):
            start = [0.0, 0.0, 0.0]
            end = [0.0, 0.0, 0.0]
            start[axis] = -size
            end[axis] = size
            glVertex3f(*start)
            glVertex3f(*end)
        glEnd()
        glEnable(GL_LIGHTING)

        glPopMatrix()

    def add_object(self, obj: geo3d.Object3D):
        self.objects.append(obj)
        self.update()

    def replace_object(self, old: geo3d.Object3D, new: geo3d.Object3D):
        """Substitui um objeto (mantém a posição na lista)"""
        if old in self.objects:
            self.objects[self.objects.index(old)] = new
        else:
            self.objects.append(new)
        self.update()

    def clear_objects(self):
        self.objects.clear()
        self.update()

    def set_light_position(self, x: float, y: float, z: float):
        self.light_position = [float(x), float(y), float(z), 1.0]
        self.update()

    def set_light_color(self, r: float, g: float, b: float):
        self.light_color = (float(r), float(g), float(b))
        self.update()

    def set_object_color(self, r: float, g: float, b: float):
        """Aplica a cor a todos os objetos da cena"""
        self.object_color = (float(r), float(g), float(b))
        for obj in self.objects:
            obj.color = (r, g, b, 1.0)
        self.update()

    def set_shading_model(self, model: str):
        model = model.lower()
        if model not in SHADING_MODELS:
            logger.warning("Modelo de iluminação desconhecido: %s", model)
            return
        self.shading_model = model
        # Phong sem shaders: smooth com brilho especular mais concentrado
        self.material_shininess = 128.0 if model == 'phong' else 50.0
        self.update()

    def set_projection(self, is_perspective: bool, distance: float = 500.0):
        self.is_perspective = is_perspective
        self.distance = distance
        self.update()

    def _zoom(self, factor: float):
        self.camera_distance = max(50.0, min(3000.0, self.camera_distance * factor))
        self.update()

    def mousePressEvent(self, event):
        if event.button() == Qt.LeftButton:
            self.last_mouse_pos = event.pos()
            self.setFocus()

    def mouseMoveEvent(self, event):
        if event.buttons() & Qt.LeftButton and self.last_mouse_pos is not None:
            dx = event.x() - self.last_mouse_pos.x()
            dy = event.y() - self.last_mouse_pos.y()
            self.camera_rot_y += dx * self.mouse_sensitivity
            self.camera_rot_x = max(-90.0, min(90.0, self.camera_rot_x + dy * self.mouse_sensitivity))
            self.last_mouse_pos = event.pos()
            self.update()

    def mouseReleaseEvent(self, event):
        if event.button() == Qt.LeftButton:
            self.last_mouse_pos = None

    def wheelEvent(self, event):
        self._zoom(0.9 if event.angleDelta().y() > 0 else 1.1)

    def keyPressEvent(self, event):
        """Setas e PgUp/PgDn movem a luz"""
        step = 10.0
        moves = {
            Qt.Key_Left: (0, -step),
            Qt.Key_Right: (0, step),
            Qt.Key_Up: (1, step),
            Qt.Key_Down: (1, -step),
            Qt.Key_PageUp: (2, step),
            Qt.Key_PageDown: (2, -step),
        }
        if event.key() not in moves:
            super().keyPressEvent(event)
            return

        axis, delta = moves[event.key()]
        self.light_position[axis] = max(-1000.0, min(1000.0, self.light_position[axis] + delta))
        if self.on_light_position_changed:
            self.on_light_position_changed(*self.light_position[:3])
        self.update()
