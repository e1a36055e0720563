"""Command: resolve a natural-language relative expression."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from timectl.commands._base import TimeCommand, format_option, time_option, timezone_option

if TYPE_CHECKING:
    from timectl.commands._context import AppContext


@click.command(
    cls=TimeCommand,
    examples="""\
  timectl relative yesterday
  timectl relative "three days ago" -t 2025-07-08T12:34:56Z
  timectl relative "last sunday at 5:30pm" -t 2025-07-08T12:34:56+02:00
  timectl relative "next january" -f DateOnly
  timectl relative -- "-2 weeks\"""",
)
@click.argument("text", nargs=-1, required=True)
@time_option
@timezone_option
@format_option
@click.pass_obj
def relative(app: AppContext, text: tuple[str, ...], time_: str, timezone: str, fmt: str) -> None:
    """Resolve TEXT (e.g. "in 2 hours", "december 25th at 7:30am") against a time."""
    app.emit(app.service.relative(time_, " ".join(text), timezone, fmt))
