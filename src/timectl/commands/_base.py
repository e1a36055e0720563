"""Click base class with ``--examples`` support.

TimeCommand accepts an ``examples`` parameter. Passing ``--examples``
prints them and exits, keeping ``--help`` short.
"""

from __future__ import annotations

from typing import Any

import click


def _add_examples_option(cmd: click.Command, examples: str) -> None:
    """Attach an eager ``--examples`` flag to a Click command."""

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples.",
        )
    )


class TimeCommand(click.Command):
    """Click Command subclass that supports an ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


# Shared by every command that renders a time.
timezone_option = click.option(
    "-z",
    "--timezone",
    default="",
    help="IANA timezone for the output (default: keep the input's zone).",
)
format_option = click.option(
    "-f",
    "--format",
    "fmt",
    default="",
    help="Layout name (see 'timectl formats') or literal layout such as '2006-01-02 15:04'.",
)
time_option = click.option(
    "-t",
    "--time",
    "time_",
    default="",
    help="Reference time (default: now).",
)
