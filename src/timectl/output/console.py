"""Rich Console factory and theme for timectl output.

Consoles render to a StringIO buffer, preserving the
``format_result() -> str`` contract. In non-TTY environments (tests,
pipes) Rich disables color codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

TIME_THEME = Theme(
    {
        "time.ok": "bold green",
        "time.error": "bold red",
        "time.warning": "bold yellow",
        "time.op": "bold cyan",
        "time.key": "dim",
        "time.value": "bold",
        "time.layout": "magenta",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes.
        width: Override terminal width (keeps table output stable in tests).
    """
    return Console(
        file=StringIO(),
        theme=TIME_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
