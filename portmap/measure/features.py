"""Measured features and the store holding committed ones."""

import math
from dataclasses import dataclass, field
from typing import Iterator

from portmap.routes.curve import Coordinate
from portmap.state.state import DrawKind


@dataclass(eq=False)
class Feature:
    """A drawn geometry.

    Points hold one coordinate, lines their vertices, and polygons their
    closed outer ring (first coordinate repeated at the end).
    """
    kind: DrawKind
    coordinates: list[Coordinate] = field(default_factory=list)

    @property
    def is_closed(self) -> bool:
        return self.kind is DrawKind.POLYGON


class FeatureStore:
    """Committed measurement features, in the order they were drawn."""

    def __init__(self):
        self._features: list[Feature] = []

    def __len__(self) -> int:
        return len(self._features)

    def __iter__(self) -> Iterator[Feature]:
        return iter(list(self._features))

    def add(self, feature: Feature) -> None:
        self._features.append(feature)

    def clear(self) -> None:
        self._features.clear()

    def nearest_vertex(self, coordinate: Coordinate, tolerance: float) -> tuple[Feature, int] | None:
        """Find the committed vertex closest to a coordinate.

        Args:
            coordinate: Map plane coordinate
            tolerance: Maximum distance in map units

        Returns:
            Tuple of (feature, vertex index) or None if nothing is close enough
        """
        best = None
        best_distance = tolerance
        for feature in self._features:
            # The closing vertex of a ring duplicates the first one
            count = len(feature.coordinates) - 1 if feature.is_closed else len(feature.coordinates)
            for index in range(count):
                x, y = feature.coordinates[index]
                distance = math.hypot(x - coordinate[0], y - coordinate[1])
                if distance <= best_distance:
                    best = (feature, index)
                    best_distance = distance
        return best

    def move_vertex(self, feature: Feature, index: int, coordinate: Coordinate) -> None:
        """Move one vertex of a committed feature, keeping rings closed."""
        feature.coordinates[index] = coordinate
        if feature.is_closed and index == 0:
            feature.coordinates[-1] = coordinate
