"""Controls panel widget for animation and measurement settings."""

from rich.text import Text
from textual.app import ComposeResult
from textual.widget import Widget
from textual.widgets import Static

from portmap.measure.controller import DrawMeasureController
from portmap.simulation.animator import RouteAnimator
from portmap.state.state import MeasureMode


def _check(enabled: bool) -> str:
    return "☑" if enabled else "☐"


class ControlsPanel(Widget):
    """Widget that shows the animation and measurement tool state."""

    def __init__(self, animator: RouteAnimator, controller: DrawMeasureController, **kwargs):
        super().__init__(**kwargs)
        self.animator = animator
        self.controller = controller

    def compose(self) -> ComposeResult:
        """Create child widgets."""
        yield Static(id="controls-content")

    def on_mount(self) -> None:
        """Handle mount - start update timer."""
        self.update_panel()
        self.set_interval(0.2, self.update_panel)  # Update 5 times per second

    def update_panel(self) -> None:
        """Refresh the displayed state."""
        state = self.animator.state
        session = self.controller.session

        if len(self.animator.routes) == 0:
            animation = "Unavailable (no routes)"
        else:
            animation = "Running" if state.running else "Stopped"

        lines = [
            f"Animation: {animation}",
            f"Speed: {self.animator.speed:.0f}",
        ]
        if len(self.animator.routes):
            lines += [
                f"Route: {state.route_index + 1}/{len(self.animator.routes)}",
                f"  {self.animator.current_route_name}",
                f"Progress: {min(state.distance, 1.0) * 100:.0f}%",
            ]

        mode = {
            MeasureMode.IDLE: "Idle",
            MeasureMode.DRAWING: "Drawing",
            MeasureMode.EDITING: "Editing",
        }[self.controller.mode]

        lines += [
            "",
            f"Measure: {session.kind.value}",
            f"State: {mode}",
            f"{_check(session.segments)} Segment lengths",
            f"{_check(session.clear_on_start)} Clear previous",
            f"Measurements: {len(self.controller.store)}",
        ]

        self.query_one("#controls-content", Static).update(Text("\n".join(lines)))
