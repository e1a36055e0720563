"""Shared pytest fixtures and test helpers for timectl tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from datetime import datetime, tzinfo
from pathlib import Path

import pytest
from click.testing import CliRunner

from timectl.domain.engine import EngineConfig
from timectl.domain.instant import Instant
from timectl.domain.zones import UTC, load_zone
from timectl.services.telemetry import disable_telemetry
from timectl.services.time import TimeService

# Reference instant used throughout: Tuesday 2025-07-08 12:34:56 UTC.
REFERENCE = "2025-07-08T12:34:56Z"


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Keep the developer's env vars and timectl.toml out of every test."""
    for name in (
        "TIMECTL_JSON_OUTPUT",
        "TIMECTL_QUIET",
        "TIMECTL_VERBOSE",
        "TIMECTL_LOG_JSON",
        "TIMECTL_DEFAULTS__TIMEZONE",
        "TIMECTL_DEFAULTS__FORMAT",
        "TIMECTL_MCP__TRANSPORT",
        "TIMECTL_MCP__HOST",
        "TIMECTL_MCP__PORT",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("TIMECTL_CONFIG", str(tmp_path / "absent.toml"))
    yield
    disable_telemetry()
    # CLI runs point the root handler at a stream that is closed afterwards.
    logging.getLogger().handlers.clear()
    logging.getLogger("timectl").setLevel(logging.NOTSET)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def config() -> EngineConfig:
    return EngineConfig()


@pytest.fixture
def service(config: EngineConfig) -> TimeService:
    return TimeService(config)


@pytest.fixture
def new_york() -> tzinfo:
    return load_zone("America/New_York")


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def utc(year: int, month: int, day: int, hour: int = 0, minute: int = 0, second: int = 0) -> Instant:
    """Build a UTC instant."""
    return Instant(datetime(year, month, day, hour, minute, second, tzinfo=UTC))
