"""
Módulo para geometria 3D: objetos, normais e extrusão de polígonos 2D
"""
import logging
from typing import List, Optional, Sequence, Tuple

import numpy as np

from scanfill.polygon_fill import triangulate

logger = logging.getLogger(__name__)

Point3D = Tuple[float, float, float]
Point2D = Tuple[float, float]

_DEFAULT_NORMAL = np.array([0.0, 0.0, 1.0])


class Object3D:
    """Malha 3D: vértices, faces (listas de índices) e cor RGBA"""
    def __init__(self, vertices: List[Point3D], faces: Optional[List[List[int]]] = None,
                 color: Optional[Tuple[float, float, float, float]] = None):
        self.vertices = list(vertices)
        self.faces = faces if faces else []
        # Cor do objeto (R, G, B, Alpha) - valores de 0.0 a 1.0
        self.color = color if color is not None else (0.7, 0.7, 0.7, 1.0)

    def face_normals(self) -> np.ndarray:
        """Normal de cada face pelos três primeiros vértices (ordem CCW aponta para fora)"""
        normals = np.tile(_DEFAULT_NORMAL, (len(self.faces), 1))
        points = np.asarray(self.vertices, dtype=float)
        for i, face in enumerate(self.faces):
            if len(face) < 3:
                continue
            v0, v1, v2 = points[face[0]], points[face[1]], points[face[2]]
            normal = np.cross(v1 - v0, v2 - v0)
            length = np.linalg.norm(normal)
            if length > 1e-4:
                normals[i] = normal / length
        return normals

    def vertex_normals(self, face_normals: Optional[np.ndarray] = None) -> np.ndarray:
        """Média normalizada das normais das faces adjacentes a cada vértice"""
        if face_normals is None:
            face_normals = self.face_normals()
        accum = np.zeros((len(self.vertices), 3))
        for face, normal in zip(self.faces, face_normals):
            for idx in face:
                accum[idx] += normal
        lengths = np.linalg.norm(accum, axis=1)
        result = np.tile(_DEFAULT_NORMAL, (len(self.vertices), 1))
        valid = lengths > 1e-4
        result[valid] = accum[valid] / lengths[valid, None]
        return result


def extrude_polygon_2d(points_2d: Sequence[Point2D], depth: float = 100.0,
                       scale: float = 1.0, cap_height: int = 2000) -> Object3D:
    """
    Extrusão de um polígono 2D para criar um objeto 3D

    As tampas vêm da triangulação por scanline, o que cobre polígonos côncavos
    e com auto-interseção.

    Args:
        points_2d: Lista de pontos 2D (x, y) em coordenadas de tela
        depth: Profundidade da extrusão (ao longo do eixo Z)
        scale: Fator aplicado às coordenadas após centralizar
        cap_height: Linhas varridas pela triangulação das tampas

    Returns:
        Object3D criado pela extrusão
    """
    if len(points_2d) < 3:
        raise ValueError("Polígono precisa de pelo menos 3 pontos")

    n = len(points_2d)
    center_x = sum(p[0] for p in points_2d) / n
    center_y = sum(p[1] for p in points_2d) / n
    half = depth * scale / 2.0

    def to_3d(x: float, y: float, z: float) -> Point3D:
        # Centralizar e inverter Y (tela -> 3D: Y cresce para cima)
        return (float(x - center_x) * scale, float(center_y - y) * scale, z)

    vertices: List[Point3D] = []
    faces: List[List[int]] = []

    # Anéis frontal (z=+half) e traseiro (z=-half) das paredes laterais
    vertices.extend(to_3d(x, y, half) for x, y in points_2d)
    vertices.extend(to_3d(x, y, -half) for x, y in points_2d)
    for i in range(n):
        next_i = (i + 1) % n
        faces.append([i, next_i, n + next_i, n + i])

    triangles = triangulate(points_2d, cap_height)

    # Tampa frontal: ordem invertida para a normal apontar para +Z
    for tri in triangles:
        start = len(vertices)
        vertices.extend(to_3d(x, y, half) for x, y in reversed(tri))
        faces.append([start, start + 1, start + 2])

    # Tampa traseira
    for tri in triangles:
        start = len(vertices)
        vertices.extend(to_3d(x, y, -half) for x, y in tri)
        faces.append([start, start + 1, start + 2])

    logger.info("Extrusão: %d vértices, %d faces (%d triângulos por tampa)",
                len(vertices), len(faces), len(triangles))
    return Object3D(vertices, faces)
