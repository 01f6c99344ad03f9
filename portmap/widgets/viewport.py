"""Mapping between the map plane and terminal cells."""

import math
from dataclasses import dataclass

from portmap.routes.curve import Coordinate

# Terminal cells are roughly twice as tall as they are wide
CELL_ASPECT = 2.0
ZOOM_STEP = 1.5


@dataclass
class Viewport:
    """Visible window of the map plane.

    `resolution` is map units per cell column; a row spans
    `resolution * CELL_ASPECT` map units.
    """
    center_x: float = 0.0
    center_y: float = 0.0
    resolution: float = 1.0

    def to_screen(self, coordinate: Coordinate, width: int, height: int) -> tuple[float, float]:
        """Get the fractional (column, row) position of a map coordinate."""
        col = (coordinate[0] - self.center_x) / self.resolution + width / 2
        row = (self.center_y - coordinate[1]) / (self.resolution * CELL_ASPECT) + height / 2
        return (col, row)

    def to_cell(self, coordinate: Coordinate, width: int, height: int) -> tuple[int, int]:
        """Get the (column, row) of a map coordinate; may lie off screen."""
        col, row = self.to_screen(coordinate, width, height)
        return (math.floor(col), math.floor(row))

    def to_map(self, col: int, row: int, width: int, height: int) -> Coordinate:
        """Get the map coordinate at the center of a cell."""
        x = self.center_x + (col + 0.5 - width / 2) * self.resolution
        y = self.center_y - (row + 0.5 - height / 2) * self.resolution * CELL_ASPECT
        return (x, y)

    def fit(self, extent: tuple[float, float, float, float], width: int, height: int, margin: int = 2) -> None:
        """Center on an extent and zoom so it fills the view."""
        min_x, min_y, max_x, max_y = extent
        self.center_x = (min_x + max_x) / 2
        self.center_y = (min_y + max_y) / 2

        usable_width = max(width - 2 * margin, 1)
        usable_height = max(height - 2 * margin, 1)
        resolution = max(
            (max_x - min_x) / usable_width,
            (max_y - min_y) / (usable_height * CELL_ASPECT),
        )
        self.resolution = resolution if resolution > 0 else 1.0

    def zoom(self, factor: float) -> None:
        """Zoom in for factor > 1, out for factor < 1."""
        self.resolution /= factor

    def pan(self, cols: float, rows: float) -> None:
        """Move the view by a number of cells."""
        self.center_x += cols * self.resolution
        self.center_y -= rows * self.resolution * CELL_ASPECT

    def center_on(self, coordinate: Coordinate) -> None:
        self.center_x, self.center_y = coordinate
