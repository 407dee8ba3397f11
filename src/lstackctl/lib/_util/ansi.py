"""ANSI colour helpers and the tagged status lines printed by every command."""

import os
import sys


def supports_color(stream=None) -> bool:
    """Check if *stream* (default stdout) supports color output.

    Follows the NO_COLOR (https://no-color.org/) and FORCE_COLOR conventions.
    NO_COLOR always wins. FORCE_COLOR (when set and not ``"0"``) forces color
    on even when the stream is not a TTY. Otherwise falls back to ``isatty()``.
    """
    if "NO_COLOR" in os.environ:
        return False
    force = os.environ.get("FORCE_COLOR")
    if force is not None and force != "0":
        return True
    stream = stream if stream is not None else sys.stdout
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        return False


def color(text: str, code: str, enabled: bool) -> str:
    """Wrap *text* in ANSI escape codes when *enabled* is True."""
    if not enabled:
        return text
    return f"\x1b[{code}m{text}\x1b[0m"


GREEN = "0;32"
YELLOW = "1;33"
RED = "0;31"


def _tagged(tag: str, code: str, message: str, stream) -> None:
    prefix = color(f"[{tag}]", code, supports_color(stream))
    print(f"{prefix} {message}", file=stream, flush=True)


def status(tag: str, message: str) -> None:
    """Print ``[TAG] message`` in green on stdout."""
    _tagged(tag, GREEN, message, sys.stdout)


def warn(message: str) -> None:
    """Print ``[WARN] message`` in yellow on stdout."""
    _tagged("WARN", YELLOW, message, sys.stdout)


def error(message: str) -> None:
    """Print ``[ERROR] message`` in red on stderr."""
    _tagged("ERROR", RED, message, sys.stderr)
