"""Human-readable lengths and areas."""

import math


def _round_2dp(value: float) -> float:
    """Round half up to two decimal places."""
    return math.floor(value * 100 + 0.5) / 100


def _number(value: float) -> str:
    """Format a number without a trailing ".0"."""
    if value.is_integer():
        return str(int(value))
    return repr(value)


def format_length(meters: float) -> str:
    """Format a length, switching to kilometers above 100 m.

    Example: 50 → '50 m', 1500 → '1.5 km'
    """
    if meters > 100:
        return f"{_number(_round_2dp(meters / 1000))} km"
    return f"{_number(_round_2dp(meters))} m"


def format_area(square_meters: float) -> str:
    """Format an area, switching to square kilometers above 10000 m².

    Example: 5000 → '5000 m²', 20000 → '0.02 km²'
    """
    if square_meters > 10000:
        return f"{_number(_round_2dp(square_meters / 1000000))} km²"
    return f"{_number(_round_2dp(square_meters))} m²"
