"""Debug logging helper."""

from datetime import datetime

DEBUG_LOG_FILE = "portmap-debug.log"


def debug_log(msg: str) -> None:
    """Log debug message to portmap-debug.log if debug mode is enabled."""
    from portmap.app import DEBUG_MODE

    if not DEBUG_MODE:
        return

    timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
    with open(DEBUG_LOG_FILE, "a") as f:
        f.write(f"[{timestamp}] {msg}\n")
        f.flush()
