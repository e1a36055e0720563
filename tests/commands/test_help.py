"""Parametrized help tests for all CLI commands."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from timectl.cli import cli

# (CLI args, expected keywords in output)
HELP_COMMANDS: list[tuple[list[str], list[str]]] = [
    (["--help"], ["now", "convert", "add", "relative", "compare", "formats", "serve", "--json", "--config"]),
    (["now", "--help"], ["--timezone", "--format", "--examples"]),
    (["convert", "--help"], ["TIME", "--from", "--to", "--format"]),
    (["add", "--help"], ["DURATION", "--time", "--timezone", "--format"]),
    (["relative", "--help"], ["TEXT", "--time", "--timezone", "--format"]),
    (["compare", "--help"], ["TIME_A", "TIME_B"]),
    (["formats", "--help"], ["layout names"]),
    (["serve", "--help"], ["MCP server", "--transport", "--host", "--port"]),
]


def _help_id(args_keywords: tuple[list[str], list[str]]) -> str:
    """Generate a readable test ID from args."""
    args, _ = args_keywords
    return "_".join(a for a in args if a != "--help") or "root"


@pytest.mark.parametrize(
    "args,expected_keywords",
    HELP_COMMANDS,
    ids=[_help_id(item) for item in HELP_COMMANDS],
)
def test_command_help(cli_runner: CliRunner, args: list[str], expected_keywords: list[str]) -> None:
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0
    for kw in expected_keywords:
        assert kw in result.output, f"Expected '{kw}' in help output for {args}"
