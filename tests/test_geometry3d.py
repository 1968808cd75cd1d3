import numpy as np
import pytest

from scanfill.geometry3d import Object3D, extrude_polygon_2d

SQUARE = [(0, 0), (10, 0), (10, 10), (0, 10)]


@pytest.fixture
def extruded_square():
    return extrude_polygon_2d(SQUARE, depth=20)


def test_extrude_vertex_and_face_counts(extruded_square):
    # 10 linhas varridas, 2 triângulos por linha, 2 tampas
    assert len(extruded_square.vertices) == 8 + 20 * 3 * 2
    assert len(extruded_square.faces) == 4 + 20 * 2


def test_extrude_centers_and_flips_y(extruded_square):
    assert extruded_square.vertices[0] == pytest.approx((-5.0, 5.0, 10.0))
    assert extruded_square.vertices[4] == pytest.approx((-5.0, 5.0, -10.0))
    assert extruded_square.vertices[2] == pytest.approx((5.0, -5.0, 10.0))


def test_extrude_scale_applies_to_all_axes():
    obj = extrude_polygon_2d(SQUARE, depth=20, scale=0.5)
    assert obj.vertices[0] == pytest.approx((-2.5, 2.5, 5.0))


def test_side_faces_are_quads(extruded_square):
    assert extruded_square.faces[:4] == [[0, 1, 5, 4], [1, 2, 6, 5], [2, 3, 7, 6], [3, 0, 4, 7]]


def test_side_normals_point_outwards(extruded_square):
    normals = extruded_square.face_normals()
    # lado superior na tela (y=0) fica em +Y após inverter o eixo
    assert normals[0] == pytest.approx([0.0, 1.0, 0.0])
    assert normals[1] == pytest.approx([1.0, 0.0, 0.0])


def test_cap_normals_face_away_from_each_other(extruded_square):
    normals = extruded_square.face_normals()
    front, back = normals[4:24], normals[24:44]
    assert np.allclose(front[:, 2], 1.0)
    assert np.allclose(back[:, 2], -1.0)


def test_caps_lie_on_their_planes(extruded_square):
    points = np.asarray(extruded_square.vertices)
    assert np.allclose(points[8:68, 2], 10.0)
    assert np.allclose(points[68:, 2], -10.0)


def test_concave_polygon_caps_cover_its_area():
    l_shape = [(0, 0), (6, 0), (6, 2), (2, 2), (2, 6), (0, 6)]
    obj = extrude_polygon_2d(l_shape, depth=4)
    points = np.asarray(obj.vertices)
    front = [f for f in obj.faces[len(l_shape):] if points[f[0], 2] > 0]
    area = sum(np.linalg.norm(np.cross(points[b] - points[a], points[c] - points[a])) / 2.0
               for a, b, c in front)
    assert area == pytest.approx(20.0)


def test_vertex_normals_are_unit_length(extruded_square):
    normals = extruded_square.vertex_normals()
    assert normals.shape == (len(extruded_square.vertices), 3)
    assert np.allclose(np.linalg.norm(normals, axis=1), 1.0)


def test_degenerate_face_gets_default_normal():
    obj = Object3D([(0, 0, 0), (1, 1, 1), (2, 2, 2)], [[0, 1, 2]])
    assert obj.face_normals()[0] == pytest.approx([0.0, 0.0, 1.0])


def test_object_default_color():
    assert Object3D([]).color == (0.7, 0.7, 0.7, 1.0)


@pytest.mark.parametrize("points", [[], [(0, 0), (1, 1)]])
def test_extrude_requires_three_points(points):
    with pytest.raises(ValueError, match="pelo menos 3 pontos"):
        extrude_polygon_2d(points)
