"""Errors raised by route generation and animation."""


class PortmapError(Exception):
    """Base class for portmap errors."""


class DegenerateRouteError(PortmapError):
    """Raised when a route's endpoints coincide, so no curve normal exists."""


class EmptyRouteSetError(PortmapError):
    """Raised when the animation is started without any routes."""


class InvalidFractionError(PortmapError):
    """Raised when a fraction outside [0, 1] is used to interpolate a route."""
