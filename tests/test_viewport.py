import pytest

from portmap.widgets.map_view import MapCanvas, _clip_line
from portmap.widgets.viewport import CELL_ASPECT, Viewport


def test_center_maps_to_middle_cell():
    viewport = Viewport(center_x=100.0, center_y=200.0, resolution=10.0)

    assert viewport.to_cell((100.0, 200.0), 40, 20) == (20, 10)


def test_rows_grow_downwards():
    viewport = Viewport(resolution=1.0)

    _, row_north = viewport.to_cell((0.0, 10.0), 40, 20)
    _, row_south = viewport.to_cell((0.0, -10.0), 40, 20)
    assert row_north < row_south


def test_cell_round_trip():
    viewport = Viewport(center_x=-50.0, center_y=75.0, resolution=3.0)

    coordinate = viewport.to_map(7, 4, 40, 20)

    assert viewport.to_cell(coordinate, 40, 20) == (7, 4)


def test_fit_contains_extent():
    viewport = Viewport()
    viewport.fit((0.0, 0.0, 1000.0, 100.0), 50, 20, margin=0)

    assert (viewport.center_x, viewport.center_y) == (500.0, 50.0)
    assert viewport.resolution == pytest.approx(20.0)
    assert viewport.to_cell((0.0, 0.0), 50, 20)[0] == 0


def test_fit_tall_extent_uses_row_aspect():
    viewport = Viewport()
    viewport.fit((0.0, 0.0, 10.0, 400.0), 50, 20, margin=0)

    assert viewport.resolution == pytest.approx(400.0 / (20 * CELL_ASPECT))


def test_zoom_and_pan():
    viewport = Viewport(resolution=8.0)

    viewport.zoom(2.0)
    assert viewport.resolution == 4.0

    viewport.pan(2, 1)
    assert (viewport.center_x, viewport.center_y) == (8.0, -8.0)


def test_clip_line_outside_is_dropped():
    assert _clip_line(-10, -10, -5, -1, 20, 10) is None


def test_clip_line_is_cut_to_canvas():
    x0, y0, x1, y1 = _clip_line(-10, 5, 30, 5, 20, 10)

    assert (x0, y0, x1, y1) == (0, 5, 20, 5)


def test_canvas_draws_clipped_line_and_text():
    canvas = MapCanvas(5, 2)
    canvas.line((-3.0, 0.0), (10.0, 0.0), "-", "blue")
    canvas.text(3, 1, "abc", "")

    assert "".join(canvas.chars[0]) == "-----"
    assert "".join(canvas.chars[1]) == "   ab"
    assert canvas.to_text().plain == "-----\n   ab"
