"""
Shared pytest fixtures for the radar runner test suite.

This file is automatically loaded by pytest and provides fixtures
that can be used across all tests.

Fixture Categories:
    - Environment fixtures: isolated_dirs, reset_runner_logger (autouse)
    - Configuration fixtures: runner_config, config_file
    - Time fixtures: market_moment
    - Collaborator fixtures: fake_launcher, fake_sleep

Design Principles:
    - No test touches the real config/data directories
    - No test spawns radar-fundamentos (FakeLauncher records instead)
    - Named consistently: sample_*, fake_*, *_config
"""

import logging
import os
import sys
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Callable

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

# Set test environment before importing config
os.environ.setdefault("RADAR_DATA_DIR", tempfile.mkdtemp(prefix="radar-data-"))
os.environ.setdefault("RADAR_CONFIG_DIR", tempfile.mkdtemp(prefix="radar-config-"))
os.environ.pop("RADAR_FUNDAMENTOS_BIN", None)

from config import DEFAULT_CODES, LOGGER_NAME  # noqa: E402
from core.types import RunnerConfig  # noqa: E402
from utils.timezone import localize_market  # noqa: E402
from tests.mocks import FakeLauncher, RecordingSleep  # noqa: E402


# =============================================================================
# Environment Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path, monkeypatch):
    """Point config and data directories at a per-test temp dir."""
    config_dir = tmp_path / "config"
    data_dir = tmp_path / "data"
    monkeypatch.setenv("RADAR_CONFIG_DIR", str(config_dir))
    monkeypatch.setenv("RADAR_DATA_DIR", str(data_dir))
    monkeypatch.delenv("RADAR_FUNDAMENTOS_BIN", raising=False)
    return {"config": config_dir, "data": data_dir}


@pytest.fixture(autouse=True)
def reset_runner_logger():
    """Undo setup_logging() so caplog keeps seeing records in later tests."""
    yield
    runner_logger = logging.getLogger(LOGGER_NAME)
    for handler in list(runner_logger.handlers):
        runner_logger.removeHandler(handler)
        handler.close()
    runner_logger.propagate = True
    runner_logger.setLevel(logging.NOTSET)


# =============================================================================
# Configuration Fixtures
# =============================================================================

@pytest.fixture
def runner_config(isolated_dirs) -> RunnerConfig:
    """Typical configuration: 10..20 window, Christmas and New Year holidays."""
    return RunnerConfig(
        holidays=frozenset({"2025-01-01", "2025-12-25"}),
        window_start=10,
        window_end=20,
        quotes_frequency_minutes=15,
        indicators_frequency_minutes=180,
        codes=dict(DEFAULT_CODES),
        program="radar-fundamentos",
        data_dir=isolated_dirs["data"],
    )


@pytest.fixture
def config_file(isolated_dirs) -> Callable[[str], Path]:
    """Factory writing TOML text to a config file and returning its path."""
    def _write(text: str, name: str = "radar-runner.conf") -> Path:
        path = isolated_dirs["config"] / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path
    return _write


# =============================================================================
# Time Fixtures
# =============================================================================

@pytest.fixture
def market_moment() -> Callable[..., datetime]:
    """Factory for market-clock datetimes: market_moment(2025, 6, 2, 14)."""
    def _moment(year, month, day, hour=0, minute=0, second=0) -> datetime:
        return localize_market(datetime(year, month, day, hour, minute, second))
    return _moment


# =============================================================================
# Collaborator Fixtures
# =============================================================================

@pytest.fixture
def fake_launcher() -> FakeLauncher:
    """Launcher that records invocations and reports success."""
    return FakeLauncher()


@pytest.fixture
def fake_sleep() -> RecordingSleep:
    """Sleep that records durations and never blocks."""
    return RecordingSleep()


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Configure pytest with custom settings."""
    config.addinivalue_line(
        "markers", "critical: Critical path tests that must pass"
    )
    config.addinivalue_line(
        "markers", "unit: Fast, isolated unit tests"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests requiring multiple components"
    )
    config.addinivalue_line(
        "markers", "slow: Tests that take > 5 seconds"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection - add markers based on location."""
    for item in items:
        # Auto-mark tests in unit/ as unit tests
        if "/unit/" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        # Auto-mark tests in integration/ as integration tests
        elif "/integration/" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
