"""Command: shift a time by a fixed duration."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from timectl.commands._base import TimeCommand, format_option, time_option, timezone_option

if TYPE_CHECKING:
    from timectl.commands._context import AppContext


@click.command(
    cls=TimeCommand,
    # Lets negative durations such as "-1h" through as the argument.
    context_settings={"ignore_unknown_options": True},
    examples="""\
  timectl add 1h30m -t 2025-07-08T12:34:56Z
  timectl add -1h -t "2025-07-08 12:34:56"
  timectl add 250ms -f RFC3339Nano""",
)
@click.argument("duration")
@time_option
@timezone_option
@format_option
@click.pass_obj
def add(app: AppContext, duration: str, time_: str, timezone: str, fmt: str) -> None:
    """Add DURATION (e.g. 1h30m, -45s, 1.5h; units ns us ms s m h) to a time."""
    app.emit(app.service.add(time_, duration, timezone, fmt))
