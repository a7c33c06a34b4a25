"""Runtime configuration for Prompt Studio.

Architectural role:
    Centralizes environment-driven settings consumed by the interaction layer
    (`prompt_studio.core.session`), the clipboard adapter, and the HTTP/CLI
    adapters.

Determinism:
    Deterministic for a fixed process environment. Values are resolved at
    import time after `load_dotenv()`.

Failure behavior:
    Malformed numeric settings fall back to their defaults instead of failing
    startup.
"""

import logging
import os
import shlex

from dotenv import load_dotenv

load_dotenv()

# Opt-in debug logging for adapters.
DEBUG = os.getenv("DEBUG") == "true"

# Slider domain and reset value of the creativity field.
DEFAULT_CREATIVITY = "4"
CREATIVITY_MIN = 0
CREATIVITY_MAX = 10

# Template applied when a session starts.
DEFAULT_TEMPLATE = os.getenv("DEFAULT_TEMPLATE", "blank")

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
STATIC_DIR = os.path.join(BASE_DIR, "api", "static")


def _read_float(name, default):
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


# How long the copy acknowledgment stays visible.
TOAST_SECONDS = _read_float("TOAST_SECONDS", 1.5)


def load_clipboard_command():
    """Return the clipboard command override as an argv list, or `None`.

    Resolution:
        `CLIPBOARD_COMMAND` is split with shell rules, so
        `CLIPBOARD_COMMAND="xclip -selection clipboard"` yields three args.

    Edge cases:
        - Unset or blank variable returns `None` (tool discovery is used).
    """
    raw = os.getenv("CLIPBOARD_COMMAND", "").strip()
    if not raw:
        return None
    return shlex.split(raw)


def configure_logging(debug=None):
    """Configure root logging once for an adapter process."""
    if debug is None:
        debug = DEBUG
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
