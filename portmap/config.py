"""Configuration management for portmap."""

import json
from pathlib import Path

from portmap.debug import debug_log
from portmap.state.state import DrawKind

DEFAULT_SPEED = 60.0
MIN_SPEED = 10.0
MAX_SPEED = 999.0


def get_config_dir() -> Path:
    """Get the config directory path."""
    config_dir = Path.home() / ".local" / "share" / "portmap"
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_config_file() -> Path:
    """Get the config file path."""
    return get_config_dir() / "config.json"


def load_config() -> dict:
    """Load configuration from file."""
    config_file = get_config_file()
    if config_file.exists():
        try:
            with open(config_file, "r") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError):
            return {}
    return {}


def save_config(config: dict) -> None:
    """Save configuration to file."""
    config_file = get_config_file()
    try:
        with open(config_file, "w") as f:
            json.dump(config, f, indent=2)
    except OSError as e:
        debug_log(f"Failed to save config: {e}")


def get_animation_speed() -> float:
    """Get the saved animation speed, clamped to the allowed range."""
    config = load_config()
    try:
        speed = float(config.get("animation_speed", DEFAULT_SPEED))
    except (TypeError, ValueError):
        return DEFAULT_SPEED
    return min(max(speed, MIN_SPEED), MAX_SPEED)


def set_animation_speed(speed: float) -> None:
    """Save the animation speed."""
    config = load_config()
    config["animation_speed"] = speed
    save_config(config)


def get_draw_kind() -> DrawKind:
    """Get the saved measurement geometry kind."""
    config = load_config()
    try:
        return DrawKind(config.get("draw_kind", DrawKind.LINE_STRING.value))
    except ValueError:
        return DrawKind.LINE_STRING


def set_draw_kind(kind: DrawKind) -> None:
    """Save the measurement geometry kind."""
    config = load_config()
    config["draw_kind"] = kind.value
    save_config(config)


def get_show_segments() -> bool:
    """Get whether segment lengths are shown."""
    return bool(load_config().get("show_segments", False))


def set_show_segments(enabled: bool) -> None:
    """Save whether segment lengths are shown."""
    config = load_config()
    config["show_segments"] = enabled
    save_config(config)


def get_clear_previous() -> bool:
    """Get whether previous measurements are cleared when a new one starts."""
    return bool(load_config().get("clear_previous", False))


def set_clear_previous(enabled: bool) -> None:
    """Save whether previous measurements are cleared when a new one starts."""
    config = load_config()
    config["clear_previous"] = enabled
    save_config(config)
