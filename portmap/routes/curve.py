"""Curved route geometry from a pair of endpoints."""

import math

from portmap.errors import DegenerateRouteError

# A point on the projected map plane
Coordinate = tuple[float, float]

DEFAULT_CURVATURE = 0.3
DEFAULT_STEPS = 11  # t = 0.0, 0.1, ..., 1.0


def control_point(
    start: Coordinate,
    end: Coordinate,
    curve_sign: int = 1,
    curvature: float = DEFAULT_CURVATURE,
) -> Coordinate:
    """Get the Bezier control point bowing the chord from start to end.

    The control point sits on the perpendicular through the chord midpoint,
    `curvature` map units away, on the side chosen by `curve_sign`.

    Raises:
        DegenerateRouteError: If start and end coincide
    """
    dx = end[0] - start[0]
    dy = end[1] - start[1]
    mid_x = (start[0] + end[0]) / 2
    mid_y = (start[1] + end[1]) / 2

    # Chord rotated by 90 degrees
    normal_x, normal_y = -dy, dx
    normal_length = math.hypot(normal_x, normal_y)
    if normal_length == 0:
        raise DegenerateRouteError(f"Route endpoints coincide at {start}")

    return (
        mid_x + curve_sign * curvature * normal_x / normal_length,
        mid_y + curve_sign * curvature * normal_y / normal_length,
    )


def sample_curve(
    start: Coordinate,
    end: Coordinate,
    curve_sign: int = 1,
    curvature: float = DEFAULT_CURVATURE,
    steps: int = DEFAULT_STEPS,
) -> list[Coordinate]:
    """
    Sample a quadratic Bezier arc between two endpoints.

    Args:
        start: First endpoint (the port)
        end: Last endpoint (the station)
        curve_sign: +1 or -1, which side of the chord the arc bows to
        curvature: Distance of the control point from the chord midpoint
        steps: Number of samples, including both endpoints

    Returns:
        Ordered list of coordinates; the first equals start and the last equals end

    Raises:
        DegenerateRouteError: If start and end coincide
        ValueError: If curve_sign, curvature or steps are out of range
    """
    if curve_sign not in (1, -1):
        raise ValueError(f"curve_sign must be +1 or -1, got {curve_sign}")
    if not curvature > 0:
        raise ValueError(f"curvature must be positive, got {curvature}")
    if steps < 2:
        raise ValueError(f"steps must be at least 2, got {steps}")

    cx, cy = control_point(start, end, curve_sign, curvature)

    points = []
    for i in range(steps):
        # i / (steps - 1) is exactly 0.0 and 1.0 at the ends, so the
        # endpoints come out of the formula unchanged
        t = i / (steps - 1)
        a = (1 - t) * (1 - t)
        b = 2 * (1 - t) * t
        c = t * t
        x = a * start[0] + b * cx + c * end[0]
        y = a * start[1] + b * cy + c * end[1]
        points.append((x, y))

    return points
