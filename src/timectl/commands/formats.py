"""Command: list named layouts."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from timectl.commands._base import TimeCommand

if TYPE_CHECKING:
    from timectl.commands._context import AppContext


@click.command(
    cls=TimeCommand,
    examples="""\
  timectl formats
  timectl -q formats
  timectl --json formats""",
)
@click.pass_obj
def formats(app: AppContext) -> None:
    """List the layout names accepted by --format, with their patterns."""
    app.emit(app.service.formats())
