"""Command: print the current time."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from timectl.commands._base import TimeCommand, format_option, timezone_option

if TYPE_CHECKING:
    from timectl.commands._context import AppContext


@click.command(
    cls=TimeCommand,
    examples="""\
  timectl now
  timectl now -z Asia/Tokyo
  timectl now -z America/New_York -f RFC1123
  timectl -q now -f "Monday 15:04\"""",
)
@timezone_option
@format_option
@click.pass_obj
def now(app: AppContext, timezone: str, fmt: str) -> None:
    """Print the current time (default zone and format come from config)."""
    app.emit(app.service.current(timezone, fmt))
