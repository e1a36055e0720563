"""Command: convert a time between timezones."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from timectl.commands._base import TimeCommand, format_option

if TYPE_CHECKING:
    from timectl.commands._context import AppContext


@click.command(
    cls=TimeCommand,
    examples="""\
  # Wall time in New York, shown in Paris
  timectl convert "2025-07-08T12:34:56" --from America/New_York --to Europe/Paris

  # An embedded offset wins over --from
  timectl convert "2025-07-08T12:34:56-04:00" --to Asia/Tokyo -f Kitchen""",
)
@click.argument("time_", metavar="TIME", required=False, default="")
@click.option("-i", "--from", "input_timezone", default="", help="IANA zone the input is written in.")
@click.option("-o", "--to", "output_timezone", default="", help="IANA zone to render in.")
@format_option
@click.pass_obj
def convert(app: AppContext, time_: str, input_timezone: str, output_timezone: str, fmt: str) -> None:
    """Convert TIME (default: now) from one timezone to another.

    Without --format the output keeps the shape of TIME.
    """
    app.emit(app.service.convert(time_, input_timezone, output_timezone, fmt))
