import pytest

from scanfill.config import AppConfig
from scanfill.palette import COLOR_PALETTE, PRESET_FILL_COLORS
from scanfill.polygon_fill import Span
from scanfill.polygon_manager import (
    ApplicationState, PolygonManager, are_points_collinear
)

SQUARE = [(2, 3), (7, 3), (7, 8), (2, 8)]


def closed_manager(vertices=SQUARE, config=None):
    manager = PolygonManager(config)
    for x, y in vertices:
        manager.add_vertex(x, y)
    assert manager.close_polygon()
    return manager


@pytest.mark.parametrize("points, expected", [
    ([(0, 0), (1, 1)], False),
    ([(0, 0), (1, 1), (2, 2)], True),
    ([(0, 0), (5, 0), (9, 0), (20, 0)], True),
    ([(0, 0), (5, 0), (5, 5)], False),
    ([(3, 3), (3, 3), (8, 1)], True),
])
def test_are_points_collinear(points, expected):
    assert are_points_collinear(points) is expected


def test_initial_state():
    manager = PolygonManager()
    assert manager.state == ApplicationState.DRAWING_POLYGON
    assert manager.vertex_count == 0
    assert manager.fill_color == AppConfig().fill_color
    assert manager.show_vertices


def test_close_requires_three_points():
    manager = PolygonManager()
    manager.add_vertex(0, 0)
    manager.add_vertex(10, 0)
    assert not manager.close_polygon()
    assert not manager.is_closed


def test_close_rejects_collinear_points():
    manager = PolygonManager()
    for x in (0, 5, 10):
        manager.add_vertex(x, x)
    assert not manager.close_polygon()
    assert manager.state == ApplicationState.DRAWING_POLYGON


def test_close_and_fill():
    manager = closed_manager()
    assert manager.state == ApplicationState.POLYGON_READY
    assert manager.fill_polygon(20, 20)
    assert manager.is_filled
    assert manager.fragments == [Span(y, 2, 7) for y in range(3, 8)]


def test_fill_requires_closed_polygon():
    manager = PolygonManager()
    for x, y in SQUARE:
        manager.add_vertex(x, y)
    assert not manager.fill_polygon(20, 20)
    assert manager.fragments == []


def test_add_vertex_after_close_starts_new_polygon():
    manager = closed_manager()
    manager.fill_polygon(20, 20)
    manager.add_vertex(1, 1)
    assert manager.vertices == [(1, 1)]
    assert not manager.is_closed
    assert manager.fragments == []


def test_undo_removes_fill_before_vertices():
    manager = closed_manager()
    manager.fill_polygon(20, 20)

    manager.undo()
    assert manager.fragments == []
    assert manager.state == ApplicationState.POLYGON_READY
    assert manager.vertex_count == 4

    manager.undo()
    assert manager.vertex_count == 3
    assert manager.is_closed

    manager.undo()
    assert manager.vertex_count == 2
    assert not manager.is_closed
    assert manager.state == ApplicationState.DRAWING_POLYGON


def test_undo_on_empty_manager_is_noop():
    manager = PolygonManager()
    manager.undo()
    assert manager.vertices == []


def test_line_thickness_is_clamped():
    config = AppConfig(line_thickness=2, min_line_thickness=1, max_line_thickness=3)
    manager = PolygonManager(config)
    for _ in range(5):
        manager.adjust_line_thickness(True)
    assert manager.line_thickness == 3
    for _ in range(5):
        manager.adjust_line_thickness(False)
    assert manager.line_thickness == 1


def test_preset_colors():
    manager = PolygonManager()
    assert manager.apply_preset_fill_color(2)
    assert manager.fill_color == PRESET_FILL_COLORS[2][1]
    assert not manager.apply_preset_fill_color(7)
    assert manager.fill_color == PRESET_FILL_COLORS[2][1]


def test_palette_color_sets_fill_and_line():
    manager = PolygonManager()
    assert manager.select_palette_color(5)
    assert manager.fill_color == manager.line_color == COLOR_PALETTE[5]
    assert not manager.select_palette_color(len(COLOR_PALETTE))


def test_refill_only_when_filled():
    manager = closed_manager()
    manager.refill(20, 20)
    assert manager.fragments == []

    manager.fill_polygon(20, 20)
    manager.refill(20, 5)
    assert manager.fragments == [Span(y, 2, 4) for y in range(3, 8)]


def test_save_current_polygon():
    manager = closed_manager()
    manager.fill_polygon(20, 20)
    assert manager.save_current_polygon()

    saved, = manager.saved_polygons
    assert saved.vertices == tuple(SQUARE)
    assert saved.is_filled
    assert saved.fragments[0] == Span(3, 2, 7)
    assert manager.vertices == []
    assert manager.state == ApplicationState.DRAWING_POLYGON

    manager.clear_saved_polygons()
    assert manager.saved_polygons == []


def test_save_unfilled_polygon_keeps_no_fragments():
    manager = closed_manager()
    assert manager.save_current_polygon()
    assert not manager.saved_polygons[0].is_filled


def test_save_requires_closed_polygon():
    manager = PolygonManager()
    manager.add_vertex(0, 0)
    assert not manager.save_current_polygon()
    assert manager.saved_polygons == []


def test_undo_after_fill_without_fragments_keeps_vertices():
    manager = closed_manager()
    # largura 1: o quadrado fica todo à direita da área
    assert manager.fill_polygon(20, 1)
    assert manager.fragments == []
    assert manager.is_filled

    manager.undo()
    assert manager.state == ApplicationState.POLYGON_READY
    assert manager.vertex_count == 4
