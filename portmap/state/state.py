"""State blocks for the route animation and the measurement tool."""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from portmap.measure.features import Feature


class DrawKind(str, Enum):
    """Geometry kinds the measurement tool can draw."""

    POINT = "Point"
    LINE_STRING = "LineString"
    POLYGON = "Polygon"

    def next(self) -> "DrawKind":
        """Get the following kind, wrapping around."""
        kinds = list(DrawKind)
        return kinds[(kinds.index(self) + 1) % len(kinds)]


@dataclass
class AnimationState:
    """Progress of the marker through the route set."""

    route_index: int = 0
    distance: float = 0.0  # Fraction of the current route's sample span
    last_frame_timestamp: float | None = None  # Milliseconds
    running: bool = False


class MeasureMode(Enum):
    """Phases of the measurement tool."""

    IDLE = "idle"  # Tool selected, nothing drawn yet
    DRAWING = "drawing"  # Sketch in progress
    EDITING = "editing"  # Committed geometry may be reshaped


@dataclass
class DrawSession:
    """One selection of the measurement tool."""

    kind: DrawKind
    tip: str
    segments: bool = False
    clear_on_start: bool = False
    in_progress: "Feature | None" = None
