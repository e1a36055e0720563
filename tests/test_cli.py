"""Tests for the root timectl CLI."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from tests.conftest import REFERENCE
from timectl import __version__
from timectl.cli import cli


def test_cli_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "timectl" in result.output


def test_cli_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_cli_no_args(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, [])
    assert result.exit_code == 0
    assert "Usage" in result.output


# --- Global flags ---


@pytest.mark.parametrize("flag", ["--json", "-q", "--quiet", "-v", "--verbose", "--log-json"])
def test_global_flag_accepted(cli_runner: CliRunner, flag: str) -> None:
    result = cli_runner.invoke(cli, [flag, "--version"])
    assert result.exit_code == 0


def test_unknown_command(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["teleport"])
    assert result.exit_code == 2


def test_missing_config_file(cli_runner: CliRunner, tmp_path: Path) -> None:
    result = cli_runner.invoke(cli, ["--config", str(tmp_path / "nope.toml"), "now"])
    assert result.exit_code == 1
    assert "Config file not found" in result.output


def test_invalid_config_file(cli_runner: CliRunner, tmp_path: Path) -> None:
    toml = tmp_path / "timectl.toml"
    toml.write_text("not = [valid")
    result = cli_runner.invoke(cli, ["--config", str(toml), "now"])
    assert result.exit_code == 1
    assert "Invalid TOML" in result.output


def test_quiet_env_var(cli_runner: CliRunner, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TIMECTL_QUIET", "true")
    result = cli_runner.invoke(cli, ["add", "1s", "-t", REFERENCE])
    assert result.output.strip() == "2025-07-08T12:34:57Z"


# --- Verbose telemetry ---


def test_verbose_shows_span_tree(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--verbose", "add", "1h", "-t", REFERENCE])
    assert result.exit_code == 0, result.output
    assert "time: 2025-07-08T13:34:56Z" in result.output
    assert "meta:" in result.output
    assert "TimeService.add" in result.output
    assert "shift" in result.output


def test_verbose_json_includes_telemetry(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--json", "--verbose", "compare", REFERENCE, REFERENCE])
    assert result.exit_code == 0
    assert '"telemetry"' in result.output
    assert '"TimeService.compare"' in result.output
