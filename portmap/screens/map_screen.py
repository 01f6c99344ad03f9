"""Map screen with the route animation and the measurement tool."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal
from textual.screen import ModalScreen, Screen
from textual.widgets import Button, Footer, Header, Label, Static

from portmap.config import (
    MAX_SPEED,
    MIN_SPEED,
    get_clear_previous,
    get_draw_kind,
    get_show_segments,
    set_animation_speed,
    set_clear_previous,
    set_draw_kind,
    set_show_segments,
)
from portmap.debug import debug_log
from portmap.errors import EmptyRouteSetError
from portmap.measure.controller import DrawMeasureController
from portmap.routes.route import RouteSet
from portmap.routes.route_loader import PortLink
from portmap.screens.speed import SpeedModal
from portmap.simulation.animator import RouteAnimator
from portmap.widgets.controls_panel import ControlsPanel
from portmap.widgets.map_view import MapView, now_ms

SPEED_STEP = 10.0
PAN_STEP_CELLS = 8


class HelpModal(ModalScreen):
    """Modal screen showing keyboard shortcuts."""

    BINDINGS = [
        ("escape", "dismiss", "Close"),
        ("h", "dismiss", "Close"),
    ]

    CSS = """
    HelpModal {
        align: center middle;
        background: transparent;
    }

    #help-dialog {
        width: 50%;
        height: auto;
        max-height: 90%;
        border: round white;
        background: $background 60%;
        padding: 1;
    }

    #header {
        width: 100%;
        height: auto;
        content-align: center middle;
        padding-bottom: 1;
        border-bottom: solid white;
    }

    #help-content {
        width: 100%;
        height: auto;
        padding: 1 2;
    }

    #buttons {
        width: 100%;
        height: auto;
        align: center middle;
        padding: 1;
    }

    Button {
        margin: 0 1;
        background: transparent;
        border: round $surface;
        color: white;
    }

    Button:focus {
        border: round white;
    }
    """

    def compose(self) -> ComposeResult:
        """Create the help dialog."""
        with Container(id="help-dialog"):
            yield Label("Keyboard Shortcuts", id="header")
            yield Static(self._build_help_text(), id="help-content", markup=False)
            with Horizontal(id="buttons"):
                yield Button("Close", id="close-btn")
        yield Footer()

    def on_button_pressed(self, event) -> None:
        """Handle button press."""
        self.dismiss()

    def _build_help_text(self) -> str:
        """Build the help text content."""
        return """
Animation
  SPACE       Start / Stop animation
  + / -       Speed up / slow down
  v           Enter speed

Measurement (mouse on map)
  click       Add vertex (first click starts)
  dbl-click   Finish line / polygon
  drag        Move a vertex after drawing
  ENTER       Finish line / polygon
  u           Undo last vertex
  ESC         Cancel current sketch
  k           Cycle Point / LineString / Polygon
  s           Toggle segment lengths
  c           Toggle clear previous
  x           Remove all measurements

View
  arrows      Pan
  [ / ]       Zoom out / in
  f           Fit all routes
  p           Zoom to current route
  h           Show this help
"""


class MapScreen(Screen):
    """Main screen with the map and the controls panel."""

    BINDINGS = [
        ("space", "toggle_animation", "Start/Stop"),
        ("v", "enter_speed", "Speed"),
        ("k", "cycle_draw_kind", "Kind"),
        ("s", "toggle_segments", "Segments"),
        ("c", "toggle_clear_previous", "Clear Prev"),
        ("h", "show_help", "Help"),
        Binding("plus", "speed_up", "Faster", show=False),
        Binding("equals_sign", "speed_up", "Faster", show=False),
        Binding("minus", "speed_down", "Slower", show=False),
        Binding("enter", "finish_sketch", "Finish", show=False),
        Binding("u", "undo_vertex", "Undo", show=False),
        Binding("escape", "abort_sketch", "Cancel", show=False),
        Binding("x", "clear_measurements", "Clear", show=False),
        Binding("left_square_bracket", "zoom_out", "Zoom Out", show=False),
        Binding("right_square_bracket", "zoom_in", "Zoom In", show=False),
        Binding("f", "fit_view", "Fit", show=False),
        Binding("p", "focus_route", "Route", show=False),
        Binding("left", "pan(-1, 0)", "Pan", show=False),
        Binding("right", "pan(1, 0)", "Pan", show=False),
        Binding("up", "pan(0, -1)", "Pan", show=False),
        Binding("down", "pan(0, 1)", "Pan", show=False),
    ]

    CSS = """
    MapScreen {
        layout: vertical;
    }

    #main-container {
        layout: horizontal;
        height: 1fr;
    }

    #map-panel {
        width: 3fr;
        border: round white;
    }

    #side-panel {
        width: 1fr;
        layout: vertical;
    }

    #route-info {
        height: auto;
        border: round white;
        padding: 1;
        margin-bottom: 1;
    }

    ControlsPanel {
        height: auto;
        border: round white;
        padding: 1;
    }
    """

    def __init__(self, routes: RouteSet, links: list[PortLink], speed: float, autostart: bool = True, **kwargs):
        super().__init__(**kwargs)
        self.routes = routes
        self.links = links
        self.autostart = autostart
        self.animator = RouteAnimator(routes, speed)
        self.controller = DrawMeasureController(
            kind=get_draw_kind(),
            segments=get_show_segments(),
            clear_on_start=get_clear_previous(),
        )

    def compose(self) -> ComposeResult:
        """Create child widgets."""
        yield Header(show_clock=True)
        with Container(id="main-container"):
            yield MapView(self.routes, self.links, self.animator, self.controller, id="map-panel")
            with Container(id="side-panel"):
                yield Static(
                    f"{len(self.links)} ports\n{len(self.routes)} routes",
                    id="route-info",
                )
                yield ControlsPanel(self.animator, self.controller)
        yield Footer()

    def on_mount(self) -> None:
        """Handle mount - start the animation unless paused."""
        if len(self.routes) == 0:
            self.notify("No routes to animate", severity="warning")
            return
        if self.autostart:
            self.action_toggle_animation()

    def check_action(self, action: str, parameters: tuple[object, ...]) -> bool | None:
        """Disable the animation controls when there is nothing to animate."""
        if action in ("toggle_animation", "focus_route") and len(self.routes) == 0:
            return False
        return True

    @property
    def map_view(self) -> MapView:
        return self.query_one(MapView)

    # Animation

    def action_toggle_animation(self) -> None:
        """Start or stop the marker animation."""
        try:
            running = self.animator.toggle(now_ms())
        except EmptyRouteSetError as e:
            self.notify(str(e), severity="warning")
            return
        debug_log(f"Animation {'started' if running else 'stopped'}")

    def action_speed_up(self) -> None:
        self._apply_speed(self.animator.speed + SPEED_STEP)

    def action_speed_down(self) -> None:
        self._apply_speed(self.animator.speed - SPEED_STEP)

    def action_enter_speed(self) -> None:
        """Show the speed input dialog."""
        self.app.push_screen(SpeedModal(self.animator.speed), self.handle_speed_choice)

    def handle_speed_choice(self, speed: float | None) -> None:
        if speed is not None:
            self._apply_speed(speed)

    def _apply_speed(self, speed: float) -> None:
        speed = min(max(speed, MIN_SPEED), MAX_SPEED)
        self.animator.on_speed_changed(speed, now_ms())
        set_animation_speed(speed)

    # Measurement

    def action_cycle_draw_kind(self) -> None:
        """Switch to the next geometry kind, cancelling any sketch."""
        kind = self.controller.session.kind.next()
        self.controller.on_draw_kind_changed(kind)
        set_draw_kind(kind)
        self.map_view.refresh()

    def action_toggle_segments(self) -> None:
        enabled = not self.controller.session.segments
        self.controller.on_segments_toggled(enabled)
        set_show_segments(enabled)
        self.map_view.refresh()

    def action_toggle_clear_previous(self) -> None:
        enabled = not self.controller.session.clear_on_start
        self.controller.on_clear_previous_toggled(enabled)
        set_clear_previous(enabled)

    def action_finish_sketch(self) -> None:
        if self.controller.on_finish() is None and self.controller.draw.drawing:
            self.notify("Not enough vertices to finish", severity="warning")
        self.map_view.refresh()

    def action_undo_vertex(self) -> None:
        self.controller.on_undo()
        self.map_view.refresh()

    def action_abort_sketch(self) -> None:
        self.controller.on_abort()
        self.map_view.refresh()

    def action_clear_measurements(self) -> None:
        self.controller.on_clear()
        self.map_view.refresh()

    # View

    def action_zoom_in(self) -> None:
        self.map_view.zoom(True)

    def action_zoom_out(self) -> None:
        self.map_view.zoom(False)

    def action_fit_view(self) -> None:
        self.map_view.fit_view()

    def action_focus_route(self) -> None:
        self.map_view.focus_current_route()

    def action_pan(self, cols: int, rows: int) -> None:
        self.map_view.pan(cols * PAN_STEP_CELLS, rows * PAN_STEP_CELLS)

    def action_show_help(self) -> None:
        """Show the help modal."""
        self.app.push_screen(HelpModal())
