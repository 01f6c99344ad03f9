"""Main application entry point."""

import argparse

from textual.app import App, ComposeResult
from textual.containers import Container, Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, Label, Static

from portmap.config import MAX_SPEED, MIN_SPEED, get_animation_speed
from portmap.debug import DEBUG_LOG_FILE
from portmap.routes.route_loader import build_route_set, create_default_port_table, load_port_table
from portmap.screens.map_screen import MapScreen

# Global flags
DEBUG_MODE = False
START_PAUSED = False
SPEED_OVERRIDE: float | None = None


class ConfirmQuitScreen(ModalScreen[bool]):
    """Modal dialog to confirm quitting the app."""

    BINDINGS = [
        ("escape", "cancel", "Cancel"),
        ("left", "navigate_left", "Left"),
        ("right", "navigate_right", "Right"),
    ]

    CSS = """
    ConfirmQuitScreen {
        align: center middle;
    }

    #dialog {
        width: 50;
        height: 9;
        border: round white;
        background: $surface;
        padding: 1 2;
    }

    #question {
        width: 100%;
        height: auto;
        content-align: center middle;
        margin-bottom: 1;
    }

    #buttons {
        width: 100%;
        height: auto;
        align: center middle;
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
        """Create dialog widgets."""
        with Container(id="dialog"):
            yield Label("Quit portmap?", id="question")
            with Horizontal(id="buttons"):
                yield Button("No", id="no")
                yield Button("Yes", id="yes")

    def action_cancel(self) -> None:
        """Cancel the quit action."""
        self.dismiss(False)

    def action_navigate_left(self) -> None:
        """Navigate to No button (left side)."""
        self.query_one("#no", Button).focus()

    def action_navigate_right(self) -> None:
        """Navigate to Yes button (right side)."""
        self.query_one("#yes", Button).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button press."""
        self.dismiss(event.button.id == "yes")


class PortMap(App):
    """A Textual app for animated port routes and map measurements."""

    TITLE = "portmap"

    BINDINGS = [
        ("q", "quit", "Quit"),
    ]

    def compose(self) -> ComposeResult:
        """Create child widgets for the app."""
        # Empty main screen - the map screen is always shown on top
        yield Static("")

    def action_quit(self) -> None:
        """Override quit action to show confirmation dialog."""
        self.push_screen(ConfirmQuitScreen(), self.handle_quit_confirmation)

    def handle_quit_confirmation(self, confirmed: bool) -> None:
        """Handle the quit confirmation result."""
        if confirmed:
            self.exit()

    def on_mount(self) -> None:
        """Handle app mount - build routes and show the map."""
        create_default_port_table()
        links, curvature = load_port_table()
        routes = build_route_set(links, curvature)

        speed = SPEED_OVERRIDE if SPEED_OVERRIDE is not None else get_animation_speed()
        self.push_screen(MapScreen(routes, links, speed, autostart=not START_PAUSED))


def _speed(value: str) -> float:
    speed = float(value)
    if not MIN_SPEED <= speed <= MAX_SPEED:
        raise argparse.ArgumentTypeError(f"speed must be between {MIN_SPEED:.0f} and {MAX_SPEED:.0f}")
    return speed


def main():
    """Run the application."""
    global DEBUG_MODE, START_PAUSED, SPEED_OVERRIDE

    parser = argparse.ArgumentParser(description="portmap - Animated port routes and map measurements")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging to portmap-debug.log")
    parser.add_argument("--speed", type=_speed, default=None, help="Animation speed (default: last used, or 60)")
    parser.add_argument("--paused", action="store_true", help="Do not start the animation on launch")
    args = parser.parse_args()

    DEBUG_MODE = args.debug
    START_PAUSED = args.paused
    SPEED_OVERRIDE = args.speed

    if DEBUG_MODE:
        # Clear the debug log at startup
        with open(DEBUG_LOG_FILE, "w") as f:
            f.write("=== portmap Debug Log ===\n")

    app = PortMap()
    app.run()


if __name__ == "__main__":
    main()
