"""Command: order two times."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from timectl.commands._base import TimeCommand

if TYPE_CHECKING:
    from timectl.commands._context import AppContext


@click.command(
    cls=TimeCommand,
    examples="""\
  timectl compare 2025-01-01T00:00:00Z 2024-12-31T19:00:00-05:00
  timectl -q compare 1751978096 "2025-07-08 12:34:56"
  timectl --json compare "Jul 8, 2025" 2025-07-09""",
)
@click.argument("time_a")
@click.argument("time_b")
@click.pass_obj
def compare(app: AppContext, time_a: str, time_b: str) -> None:
    """Print -1, 0 or 1 as TIME_A is before, equal to, or after TIME_B."""
    app.emit(app.service.compare(time_a, time_b))
