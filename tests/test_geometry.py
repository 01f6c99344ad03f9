import pytest

from portmap.measure.geometry import interior_point, line_length, midpoint, polygon_area, segments
from portmap.projection import from_lon_lat, to_lon_lat


def test_projection_round_trip():
    lon, lat = to_lon_lat(from_lon_lat(72.9492, 18.949))

    assert lon == pytest.approx(72.9492)
    assert lat == pytest.approx(18.949)


def test_one_degree_along_equator():
    line = [from_lon_lat(0.0, 0.0), from_lon_lat(1.0, 0.0)]

    assert line_length(line) == pytest.approx(111319.49, rel=1e-5)


def test_length_is_geodesic_not_planar():
    # Web Mercator stretches distances away from the equator
    a, b = from_lon_lat(10.0, 60.0), from_lon_lat(10.01, 60.0)
    planar = abs(b[0] - a[0])

    assert line_length([a, b]) == pytest.approx(planar / 2, rel=0.01)


def test_length_of_single_point_is_zero():
    assert line_length([(0.0, 0.0)]) == 0.0


def test_area_of_small_square():
    # Roughly 1 km by 1 km at the equator
    d = 1000 / 111319.49
    ring = [from_lon_lat(lon, lat) for lon, lat in ((0, 0), (d, 0), (d, d), (0, d), (0, 0))]

    assert polygon_area(ring) == pytest.approx(1e6, rel=0.02)


def test_area_ignores_winding():
    ring = [(0.0, 0.0), (1000.0, 0.0), (1000.0, 1000.0), (0.0, 0.0)]

    assert polygon_area(ring) == pytest.approx(polygon_area(list(reversed(ring))))
    assert polygon_area(ring) > 0


def test_interior_point_lies_inside():
    # L-shaped ring whose centroid falls outside it
    ring = [(0, 0), (10, 0), (10, 1), (1, 1), (1, 10), (0, 10), (0, 0)]
    x, y = interior_point(ring)

    assert (0 <= x <= 1 and 0 <= y <= 10) or (0 <= x <= 10 and 0 <= y <= 1)


def test_interior_point_of_degenerate_ring():
    assert interior_point([(0.0, 0.0), (4.0, 2.0), (0.0, 0.0)]) == pytest.approx((4 / 3, 2 / 3))


def test_midpoint_and_segments():
    assert midpoint((0.0, 0.0), (4.0, -2.0)) == (2.0, -1.0)
    assert list(segments([(0, 0), (1, 0), (1, 1)])) == [((0, 0), (1, 0)), ((1, 0), (1, 1))]
