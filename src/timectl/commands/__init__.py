"""Subcommand modules for timectl.

Provides register_commands(), which imports each command module only
when the root group is built.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the time operations plus ``formats`` and ``serve``."""
    from timectl.commands.add import add
    from timectl.commands.compare import compare
    from timectl.commands.convert import convert
    from timectl.commands.formats import formats
    from timectl.commands.now import now
    from timectl.commands.relative import relative
    from timectl.commands.serve import serve

    cli.add_command(now)
    cli.add_command(convert)
    cli.add_command(add)
    cli.add_command(relative)
    cli.add_command(compare)
    cli.add_command(formats)
    cli.add_command(serve)
