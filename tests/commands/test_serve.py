"""Tests for the serve command."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

from click.testing import CliRunner

from timectl.cli import cli


class TestServeCommand:
    def test_serve_registered(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--help"])
        assert "serve" in result.output

    def test_serve_help_shows_transports(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["serve", "--help"])
        assert "stdio" in result.output
        assert "sse" in result.output
        assert "streamable-http" in result.output

    def test_serve_passes_transport_options(self, cli_runner: CliRunner) -> None:
        server = MagicMock()
        with (
            patch("timectl.mcp.server.mcp_available", True),
            patch("timectl.mcp.server.create_server", return_value=server) as create_server,
        ):
            result = cli_runner.invoke(
                cli,
                ["serve", "--transport", "sse", "--host", "0.0.0.0", "--port", "9000"],
            )

        assert result.exit_code == 0, result.output
        create_server.assert_called_once()
        assert create_server.call_args.kwargs == {"host": "0.0.0.0", "port": 9000}
        server.run.assert_called_once_with(transport="sse")

    def test_serve_falls_back_to_config(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        toml = tmp_path / "timectl.toml"
        toml.write_text('[defaults]\ntimezone = "Asia/Tokyo"\n[mcp]\ntransport = "streamable-http"\nport = 8123\n')
        server = MagicMock()
        with (
            patch("timectl.mcp.server.mcp_available", True),
            patch("timectl.mcp.server.create_server", return_value=server) as create_server,
        ):
            result = cli_runner.invoke(cli, ["--config", str(toml), "serve"])

        assert result.exit_code == 0, result.output
        config = create_server.call_args.args[0]
        assert config.default_timezone == "Asia/Tokyo"
        assert create_server.call_args.kwargs == {"host": "127.0.0.1", "port": 8123}
        server.run.assert_called_once_with(transport="streamable-http")

    def test_serve_without_mcp(self, cli_runner: CliRunner) -> None:
        with patch("timectl.mcp.server.mcp_available", False):
            result = cli_runner.invoke(cli, ["serve"])
        assert result.exit_code == 1
        assert "MCP not installed" in result.output

    def test_serve_rejects_unknown_transport(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["serve", "--transport", "carrier-pigeon"])
        assert result.exit_code == 2
