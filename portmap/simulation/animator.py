"""Marker animation along the cyclic sequence of routes."""

from typing import Callable

from portmap.config import DEFAULT_SPEED
from portmap.debug import debug_log
from portmap.errors import EmptyRouteSetError
from portmap.routes.curve import Coordinate
from portmap.routes.route import RouteSet
from portmap.state.state import AnimationState

# Speed is scaled so that speed * elapsed_ms / DISTANCE_SCALE is route fraction
DISTANCE_SCALE = 1e6


class RouteAnimator:
    """Moves a marker along each route in turn, one frame at a time.

    The animator never schedules frames itself. The owner calls `tick` once
    per rendered frame with a monotonic timestamp in milliseconds, and the
    `on_frame` callback asks the owner for the next frame.
    """

    def __init__(
        self,
        routes: RouteSet,
        speed: float = DEFAULT_SPEED,
        on_frame: Callable[[Coordinate], None] | None = None,
    ):
        self.routes = routes
        self.speed = speed
        self.on_frame = on_frame
        self.state = AnimationState()
        self.position: Coordinate | None = routes[0].first_coordinate if len(routes) else None

    @property
    def running(self) -> bool:
        return self.state.running

    def start(self, now: float) -> None:
        """Start the animation from the current position.

        Raises:
            EmptyRouteSetError: If there are no routes to animate along
        """
        if len(self.routes) == 0:
            raise EmptyRouteSetError("No routes to animate")
        if self.state.running:
            return

        # Distance and route index carry over from the last run
        self.state.running = True
        self.state.last_frame_timestamp = now

    def stop(self) -> None:
        """Stop the animation; the marker stays where it is."""
        self.state.running = False

    def toggle(self, now: float) -> bool:
        """Start or stop the animation.

        Returns:
            True if the animation is running afterwards
        """
        if self.state.running:
            self.stop()
        else:
            self.start(now)
        return self.state.running

    def on_speed_changed(self, speed: float, now: float) -> None:
        """Apply a new speed without moving the marker.

        A running animation is restarted so the next frame measures elapsed
        time from now instead of from the last frame.
        """
        if speed < 0:
            raise ValueError(f"Speed must not be negative, got {speed}")

        self.speed = speed
        if self.state.running:
            self.stop()
            self.start(now)

    def tick(self, now: float, speed: float | None = None) -> Coordinate | None:
        """Advance the marker for one frame.

        Args:
            now: Frame timestamp in milliseconds
            speed: Speed for this frame, defaults to the configured speed

        Returns:
            New marker coordinate, or None if stopped or the frame failed
        """
        if not self.state.running:
            return None

        try:
            coordinate = self._advance(now, self.speed if speed is None else speed)
        except Exception as e:
            # A bad frame is dropped; the next frame starts from unchanged state
            debug_log(f"Animation frame at {now} dropped: {type(e).__name__}: {e}")
            return None

        if self.on_frame is not None:
            try:
                self.on_frame(coordinate)
            except Exception as e:
                debug_log(f"Frame callback at {now} failed: {type(e).__name__}: {e}")
        return coordinate

    def _advance(self, now: float, speed: float) -> Coordinate:
        """Compute the next position and commit it to the state."""
        state = self.state
        last = state.last_frame_timestamp if state.last_frame_timestamp is not None else now
        elapsed = max(now - last, 0.0)

        # Accumulate modulo 2, then hop to the next route once past 1
        distance = (state.distance + speed * elapsed / DISTANCE_SCALE) % 2
        route_index = state.route_index
        if distance > 1:
            distance = 0.0
            route_index = (route_index + 1) % len(self.routes)

        coordinate = self.routes.coordinate_at_fraction(route_index, distance)

        state.distance = distance
        state.route_index = route_index
        state.last_frame_timestamp = now
        self.position = coordinate
        return coordinate

    @property
    def current_route_name(self) -> str | None:
        if len(self.routes) == 0:
            return None
        return self.routes[self.state.route_index].name
