"""Rich Console factory and theme for travelctl output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

TRAVEL_THEME = Theme(
    {
        "travel.ok": "bold green",
        "travel.error": "bold red",
        "travel.warning": "bold yellow",
        "travel.op": "bold cyan",
        "travel.key": "dim",
        "travel.id": "bold blue",
        "travel.path": "dim",
        "travel.title": "bold",
        "travel.status.visited": "green",
        "travel.status.wishlist": "magenta",
        "travel.status.none": "dim",
        "travel.urgency.critical": "bold red",
        "travel.urgency.warning": "yellow",
        "travel.urgency.normal": "green",
        "travel.number": "magenta",
    }
)

_STATUS_STYLES: dict[str, str] = {
    "visited": "travel.status.visited",
    "wishlist": "travel.status.wishlist",
    "none": "travel.status.none",
}

_URGENCY_STYLES: dict[str, str] = {
    "critical": "travel.urgency.critical",
    "warning": "travel.urgency.warning",
    "normal": "travel.urgency.normal",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=TRAVEL_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_status(status: str) -> str:
    """Return the Rich style name for a country status."""
    return _STATUS_STYLES.get(status, "")


def style_for_urgency(urgency: str) -> str:
    return _URGENCY_STYLES.get(urgency, "")
