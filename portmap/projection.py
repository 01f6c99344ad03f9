"""Conversion between lon/lat and the Web Mercator map plane."""

from pyproj import Transformer

from portmap.routes.curve import Coordinate

MAP_CRS = "EPSG:3857"
LONLAT_CRS = "EPSG:4326"

_TO_MAP = Transformer.from_crs(LONLAT_CRS, MAP_CRS, always_xy=True)
_TO_LONLAT = Transformer.from_crs(MAP_CRS, LONLAT_CRS, always_xy=True)


def from_lon_lat(lon: float, lat: float) -> Coordinate:
    """Project a lon/lat pair onto the map plane."""
    x, y = _TO_MAP.transform(lon, lat)
    return (x, y)


def to_lon_lat(coordinate: Coordinate) -> tuple[float, float]:
    """Inverse-project a map plane coordinate to (lon, lat)."""
    lon, lat = _TO_LONLAT.transform(coordinate[0], coordinate[1])
    return (lon, lat)
