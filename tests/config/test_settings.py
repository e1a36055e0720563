"""Tests for TimeSettings: CLI flags, env vars, and TOML in one object."""

from __future__ import annotations

from pathlib import Path

import click
import pytest

from timectl.config.settings import TimeSettings


class TestTimeSettingsDefaults:
    def test_all_defaults(self) -> None:
        """With no TOML and no env vars, all fields use code defaults."""
        settings = TimeSettings.from_cli()
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.quiet is False
        assert settings.verbose is False
        assert settings.defaults.timezone == "UTC"
        assert settings.defaults.format == "RFC3339"
        assert settings.mcp.transport == "stdio"
        assert settings.mcp.port == 8000

    def test_frozen(self) -> None:
        settings = TimeSettings.from_cli()
        with pytest.raises(Exception):
            settings.quiet = True  # type: ignore[misc]

    def test_cli_flags(self) -> None:
        settings = TimeSettings.from_cli(json_output=True, verbose=True)
        assert settings.json_output is True
        assert settings.verbose is True


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        toml = tmp_path / "timectl.toml"
        toml.write_text('[defaults]\ntimezone = "Europe/Paris"\n[mcp]\nport = 9000\n')
        settings = TimeSettings.from_cli(config_path=str(toml))
        assert settings.defaults.timezone == "Europe/Paris"
        assert settings.defaults.format == "RFC3339"  # default preserved
        assert settings.mcp.port == 9000
        assert settings.config_path == toml

    def test_empty_toml_uses_defaults(self, tmp_path: Path) -> None:
        toml = tmp_path / "timectl.toml"
        toml.write_text("")
        settings = TimeSettings.from_cli(config_path=str(toml))
        assert settings.defaults.timezone == "UTC"

    def test_discovered_via_env_var(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        toml = tmp_path / "elsewhere.toml"
        toml.write_text('[defaults]\nformat = "Kitchen"\n')
        monkeypatch.setenv("TIMECTL_CONFIG", str(toml))
        assert TimeSettings.from_cli().defaults.format == "Kitchen"

    def test_discovered_by_walk_up(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "timectl.toml").write_text('[defaults]\ntimezone = "Asia/Tokyo"\n')
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        monkeypatch.delenv("TIMECTL_CONFIG")
        monkeypatch.chdir(nested)
        settings = TimeSettings.from_cli()
        assert settings.defaults.timezone == "Asia/Tokyo"
        assert settings.config_path == tmp_path.resolve() / "timectl.toml"

    def test_missing_explicit_config(self, tmp_path: Path) -> None:
        with pytest.raises(click.ClickException, match="Config file not found"):
            TimeSettings.from_cli(config_path=str(tmp_path / "nope.toml"))

    def test_invalid_toml(self, tmp_path: Path) -> None:
        toml = tmp_path / "timectl.toml"
        toml.write_text("[defaults\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            TimeSettings.from_cli(config_path=str(toml))

    def test_invalid_port_rejected(self, tmp_path: Path) -> None:
        toml = tmp_path / "timectl.toml"
        toml.write_text("[mcp]\nport = 0\n")
        with pytest.raises(Exception):
            TimeSettings.from_cli(config_path=str(toml))


class TestEnvOverrides:
    def test_env_beats_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        toml = tmp_path / "timectl.toml"
        toml.write_text('[defaults]\ntimezone = "Europe/Paris"\n')
        monkeypatch.setenv("TIMECTL_DEFAULTS__TIMEZONE", "Asia/Tokyo")
        settings = TimeSettings.from_cli(config_path=str(toml))
        assert settings.defaults.timezone == "Asia/Tokyo"

    def test_env_flag(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TIMECTL_QUIET", "1")
        assert TimeSettings.from_cli(quiet=False).quiet is True

    def test_nested_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TIMECTL_MCP__TRANSPORT", "sse")
        assert TimeSettings.from_cli().mcp.transport == "sse"


class TestEngineConfig:
    def test_built_from_defaults(self, tmp_path: Path) -> None:
        toml = tmp_path / "timectl.toml"
        toml.write_text('[defaults]\ntimezone = "Asia/Tokyo"\nformat = "DateOnly"\n')
        config = TimeSettings.from_cli(config_path=str(toml)).engine_config()
        assert config.default_timezone == "Asia/Tokyo"
        assert config.default_format == "DateOnly"
        assert len(config.registry) == 18
