"""Route data model."""

import math
from dataclasses import dataclass
from typing import Iterator

from portmap.errors import InvalidFractionError
from portmap.routes.curve import Coordinate


@dataclass(frozen=True)
class Route:
    """A curved path between a port and one of its stations."""
    name: str
    coordinates: tuple[Coordinate, ...]

    def __post_init__(self) -> None:
        if len(self.coordinates) < 2:
            raise ValueError(f"Route {self.name!r} needs at least 2 coordinates")

    @property
    def first_coordinate(self) -> Coordinate:
        return self.coordinates[0]

    @property
    def last_coordinate(self) -> Coordinate:
        return self.coordinates[-1]

    def coordinate_at(self, fraction: float) -> Coordinate:
        """Get the interpolated coordinate at a fraction of the route.

        The fraction is spread evenly over the sampled segments, not over
        arc length.

        Raises:
            InvalidFractionError: If fraction is not within [0, 1]
        """
        if not math.isfinite(fraction) or fraction < 0 or fraction > 1:
            raise InvalidFractionError(f"Fraction {fraction} is outside [0, 1]")

        if fraction == 1:
            return self.coordinates[-1]

        segment_count = len(self.coordinates) - 1
        position = fraction * segment_count
        index = min(int(position), segment_count - 1)
        ratio = position - index

        x1, y1 = self.coordinates[index]
        x2, y2 = self.coordinates[index + 1]
        return (x1 + ratio * (x2 - x1), y1 + ratio * (y2 - y1))


class RouteSet:
    """Ordered routes; insertion order is the animation order."""

    def __init__(self, routes=()):
        self._routes: tuple[Route, ...] = tuple(routes)

    def __len__(self) -> int:
        return len(self._routes)

    def __iter__(self) -> Iterator[Route]:
        return iter(self._routes)

    def __getitem__(self, index: int) -> Route:
        return self._routes[index]

    def coordinate_at_fraction(self, route_index: int, fraction: float) -> Coordinate:
        """Get the coordinate at a fraction of one route.

        Args:
            route_index: Index of the route in this set
            fraction: Progress along the route in [0, 1]

        Raises:
            IndexError: If route_index is out of range
            InvalidFractionError: If fraction is not within [0, 1]
        """
        if not 0 <= route_index < len(self._routes):
            raise IndexError(f"Route index {route_index} out of range (0..{len(self._routes) - 1})")
        return self._routes[route_index].coordinate_at(fraction)

    def extent(self) -> tuple[float, float, float, float] | None:
        """Get (min_x, min_y, max_x, max_y) over all routes, or None if empty."""
        if not self._routes:
            return None

        xs = [x for route in self._routes for x, _ in route.coordinates]
        ys = [y for route in self._routes for _, y in route.coordinates]
        return (min(xs), min(ys), max(xs), max(ys))
