"""Speed input dialog."""

from textual.app import ComposeResult
from textual.containers import Container, Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Footer, Input, Label, Static

from portmap.config import MAX_SPEED, MIN_SPEED


def parse_speed(value: str) -> float:
    """Parse and validate a speed entered by the user.

    Raises:
        ValueError: If the value is not a number within the allowed range
    """
    speed = float(value)
    if not MIN_SPEED <= speed <= MAX_SPEED:
        raise ValueError(f"Speed must be between {MIN_SPEED:.0f} and {MAX_SPEED:.0f}")
    return speed


class SpeedModal(ModalScreen[float | None]):
    """Modal dialog for entering the animation speed."""

    BINDINGS = [
        ("escape", "close_modal", "Close"),
        ("enter", "save_speed", "Save"),
        ("left", "navigate_left", "Left"),
        ("right", "navigate_right", "Right"),
    ]

    CSS = """
    SpeedModal {
        align: center middle;
    }

    #speed-dialog {
        width: 50;
        height: auto;
        border: round white;
        background: $background 60%;
        padding: 1 2;
    }

    #header {
        width: 100%;
        height: auto;
        content-align: center middle;
        padding-bottom: 1;
        border-bottom: solid white;
        text-style: bold;
    }

    #speed-content {
        width: 100%;
        height: auto;
        padding: 1 1;
    }

    .setting-input {
        width: 100%;
        height: 3;
        border: round $surface;
    }

    .setting-input:focus {
        border: round white;
    }

    #buttons {
        width: 100%;
        height: auto;
        align: center middle;
        padding-top: 1;
        border-top: solid white;
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

    #status-message {
        width: 100%;
        height: auto;
        content-align: center middle;
        padding: 1;
        color: red;
    }
    """

    def __init__(self, speed: float, **kwargs):
        super().__init__(**kwargs)
        self.speed = speed

    def compose(self) -> ComposeResult:
        """Create dialog widgets."""
        with Container(id="speed-dialog"):
            yield Label("Animation Speed", id="header")
            with Vertical(id="speed-content"):
                yield Label(f"Speed ({MIN_SPEED:.0f}-{MAX_SPEED:.0f})")
                yield Input(
                    value=f"{self.speed:g}",
                    placeholder="60",
                    id="speed-input",
                    classes="setting-input",
                )
            yield Static("", id="status-message")
            with Horizontal(id="buttons"):
                yield Button("Save", id="save-btn")
                yield Button("Cancel", id="cancel-btn")
        yield Footer()

    def on_mount(self) -> None:
        """Focus the input when mounted."""
        self.query_one("#speed-input", Input).focus()

    def action_save_speed(self) -> None:
        self.save_speed()

    def action_close_modal(self) -> None:
        """Close without changing the speed."""
        self.dismiss(None)

    def action_navigate_left(self) -> None:
        self.query_one("#save-btn", Button).focus()

    def action_navigate_right(self) -> None:
        self.query_one("#cancel-btn", Button).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.save_speed()

    def save_speed(self) -> None:
        """Validate the input and return the new speed."""
        speed_input = self.query_one("#speed-input", Input)
        status_message = self.query_one("#status-message", Static)

        try:
            speed = parse_speed(speed_input.value)
        except ValueError as e:
            message = str(e) if str(e).startswith("Speed") else "Please enter a valid number"
            status_message.update(message)
            return

        self.dismiss(speed)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button press."""
        if event.button.id == "save-btn":
            self.save_speed()
        elif event.button.id == "cancel-btn":
            self.dismiss(None)
