"""Geodesic measurement of map plane geometries."""

from itertools import pairwise
from typing import Iterable, Iterator

from pyproj import Geod
from shapely.geometry import Polygon

from portmap.projection import to_lon_lat
from portmap.routes.curve import Coordinate

_GEOD = Geod(ellps="WGS84")


def _lon_lats(coordinates: Iterable[Coordinate]) -> tuple[list[float], list[float]]:
    lons, lats = [], []
    for coordinate in coordinates:
        lon, lat = to_lon_lat(coordinate)
        lons.append(lon)
        lats.append(lat)
    return lons, lats


def line_length(coordinates: list[Coordinate]) -> float:
    """Get the geodesic length in meters of a map plane polyline."""
    if len(coordinates) < 2:
        return 0.0
    lons, lats = _lon_lats(coordinates)
    return abs(_GEOD.line_length(lons, lats))


def polygon_area(ring: list[Coordinate]) -> float:
    """Get the geodesic area in square meters enclosed by a map plane ring."""
    if len(ring) < 3:
        return 0.0
    lons, lats = _lon_lats(ring)
    area, _ = _GEOD.polygon_area_perimeter(lons, lats)
    return abs(area)


def interior_point(ring: list[Coordinate]) -> Coordinate:
    """Get a point guaranteed to lie inside the ring.

    Rings too small or too thin to enclose anything fall back to the vertex
    average.
    """
    if len(ring) >= 4:
        point = Polygon(ring).representative_point()
        if not point.is_empty:
            return (point.x, point.y)

    xs = [x for x, _ in ring]
    ys = [y for _, y in ring]
    return (sum(xs) / len(xs), sum(ys) / len(ys))


def midpoint(a: Coordinate, b: Coordinate) -> Coordinate:
    """Get the parametric midpoint of a segment."""
    return ((a[0] + b[0]) / 2, (a[1] + b[1]) / 2)


def segments(coordinates: list[Coordinate]) -> Iterator[tuple[Coordinate, Coordinate]]:
    """Iterate over consecutive vertex pairs."""
    return pairwise(coordinates)
