"""Port and station table loading, and route set construction."""

import json
from dataclasses import dataclass
from pathlib import Path

from portmap.config import get_config_dir
from portmap.debug import debug_log
from portmap.errors import DegenerateRouteError
from portmap.projection import from_lon_lat
from portmap.routes.curve import DEFAULT_CURVATURE, DEFAULT_STEPS, Coordinate, sample_curve
from portmap.routes.route import Route, RouteSet


@dataclass(frozen=True)
class Place:
    """A named location given in lon/lat."""
    name: str
    lon: float
    lat: float

    @property
    def coordinate(self) -> Coordinate:
        """Get the location on the map plane."""
        return from_lon_lat(self.lon, self.lat)


@dataclass(frozen=True)
class PortLink:
    """A port and the two nearby stations it is linked to."""
    port: Place
    station_a: Place
    station_b: Place


# Ports and nearby stations (example locations)
DEFAULT_PORT_TABLE = {
    "curvature": DEFAULT_CURVATURE,
    "ports": [
        {
            "name": "JNPT",
            "lonlat": [72.9492, 18.949],
            "stations": [
                {"name": "JNPT Station 1", "lonlat": [72.85, 19.0]},
                {"name": "JNPT Station 2", "lonlat": [73.05, 18.9]},
            ],
        },
        {
            "name": "Chennai Port",
            "lonlat": [80.2949, 13.1022],
            "stations": [
                {"name": "Chennai Station 1", "lonlat": [80.2, 13.0]},
                {"name": "Chennai Station 2", "lonlat": [80.3, 13.2]},
            ],
        },
        {
            "name": "Visakhapatnam Port",
            "lonlat": [83.2875, 17.6868],
            "stations": [
                {"name": "Visakhapatnam Station 1", "lonlat": [83.2, 17.75]},
                {"name": "Visakhapatnam Station 2", "lonlat": [83.35, 17.6]},
            ],
        },
        {
            "name": "Cochin Port",
            "lonlat": [76.2673, 9.9658],
            "stations": [
                {"name": "Cochin Station 1", "lonlat": [76.35, 9.9]},
                {"name": "Cochin Station 2", "lonlat": [76.2, 10.05]},
            ],
        },
        {
            "name": "Kandla Port",
            "lonlat": [70.2167, 23.0333],
            "stations": [
                {"name": "Kandla Station 1", "lonlat": [70.15, 23.1]},
                {"name": "Kandla Station 2", "lonlat": [70.3, 22.95]},
            ],
        },
        {
            "name": "Mundra Port",
            "lonlat": [69.7047, 22.8387],
            "stations": [
                {"name": "Mundra Station 1", "lonlat": [69.65, 22.9]},
                {"name": "Mundra Station 2", "lonlat": [69.75, 22.75]},
            ],
        },
    ],
}


def get_ports_file() -> Path:
    """Get the path of the port table file."""
    return get_config_dir() / "ports.json"


def _parse_place(data: dict) -> Place:
    lon, lat = data["lonlat"]
    return Place(name=data["name"], lon=float(lon), lat=float(lat))


def parse_port_table(data: dict) -> tuple[list[PortLink], float]:
    """Parse a port table dictionary.

    Args:
        data: Dictionary with "ports" and an optional "curvature"

    Returns:
        Tuple of (port links, curvature)

    Raises:
        KeyError, TypeError, ValueError: If the table is malformed
    """
    curvature = float(data.get("curvature", DEFAULT_CURVATURE))
    if curvature <= 0:
        raise ValueError(f"curvature must be positive, got {curvature}")

    links = []
    for entry in data["ports"]:
        station_a, station_b = entry["stations"]
        links.append(
            PortLink(
                port=_parse_place(entry),
                station_a=_parse_place(station_a),
                station_b=_parse_place(station_b),
            )
        )
    return links, curvature


def load_port_table_from_file(filepath: Path) -> tuple[list[PortLink], float]:
    """Load a port table from a JSON file."""
    with open(filepath, "r") as f:
        data = json.load(f)
    return parse_port_table(data)


def load_port_table() -> tuple[list[PortLink], float]:
    """Load the port table, falling back to the built-in one."""
    filepath = get_ports_file()
    if filepath.exists():
        try:
            return load_port_table_from_file(filepath)
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            debug_log(f"Failed to load port table from {filepath}: {e}")

    return parse_port_table(DEFAULT_PORT_TABLE)


def create_default_port_table() -> None:
    """Write the built-in port table if no table exists yet."""
    filepath = get_ports_file()
    if filepath.exists():
        return

    with open(filepath, "w") as f:
        json.dump(DEFAULT_PORT_TABLE, f, indent=2)


def build_route_set(
    links: list[PortLink],
    curvature: float = DEFAULT_CURVATURE,
    steps: int = DEFAULT_STEPS,
) -> RouteSet:
    """
    Build the animated routes for a list of port links.

    Each link gives two routes, port to station A bowing one way and port to
    station B bowing the other. Routes whose endpoints coincide are skipped.

    Args:
        links: Ports with their stations
        curvature: Control point offset in map units
        steps: Samples per route

    Returns:
        RouteSet in link order (possibly empty)
    """
    routes = []
    for link in links:
        port = link.port.coordinate
        for station, curve_sign in ((link.station_a, 1), (link.station_b, -1)):
            try:
                coordinates = sample_curve(port, station.coordinate, curve_sign, curvature, steps)
            except DegenerateRouteError as e:
                debug_log(f"Skipping route {link.port.name} -> {station.name}: {e}")
                continue
            routes.append(Route(name=f"{link.port.name} → {station.name}", coordinates=tuple(coordinates)))

    return RouteSet(routes)
