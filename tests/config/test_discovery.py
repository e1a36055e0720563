"""Tests for walk-up config discovery."""

from __future__ import annotations

from pathlib import Path

import pytest

from timectl.config.discovery import CONFIG_FILENAME, find_config


class TestFindConfig:
    def test_finds_in_start_directory(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("TIMECTL_CONFIG")
        (tmp_path / CONFIG_FILENAME).write_text("")
        assert find_config(tmp_path) == tmp_path.resolve() / CONFIG_FILENAME

    def test_walks_up(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("TIMECTL_CONFIG")
        (tmp_path / CONFIG_FILENAME).write_text("")
        nested = tmp_path / "x" / "y" / "z"
        nested.mkdir(parents=True)
        assert find_config(nested) == tmp_path.resolve() / CONFIG_FILENAME

    def test_nearest_wins(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("TIMECTL_CONFIG")
        (tmp_path / CONFIG_FILENAME).write_text("")
        inner = tmp_path / "inner"
        inner.mkdir()
        (inner / CONFIG_FILENAME).write_text("")
        assert find_config(inner) == inner.resolve() / CONFIG_FILENAME

    def test_env_var_wins(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        custom = tmp_path / "custom.toml"
        custom.write_text("")
        (tmp_path / CONFIG_FILENAME).write_text("")
        monkeypatch.setenv("TIMECTL_CONFIG", str(custom))
        assert find_config(tmp_path) == custom

    def test_env_var_missing_file_disables_discovery(self, tmp_path: Path) -> None:
        # conftest points TIMECTL_CONFIG at a file that does not exist.
        (tmp_path / CONFIG_FILENAME).write_text("")
        assert find_config(tmp_path) is None

    def test_directory_with_config_name_is_ignored(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("TIMECTL_CONFIG")
        start = tmp_path / "project"
        (start / CONFIG_FILENAME).mkdir(parents=True)
        assert find_config(start) != start.resolve() / CONFIG_FILENAME
