"""Test configuration and fixtures."""

import sys
from pathlib import Path
from unittest.mock import Mock

import pytest

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from eventrouter.engine.router import Router  # noqa: E402


@pytest.fixture
def router() -> Router:
    """A fresh, empty router."""
    return Router()


@pytest.fixture
def mock_router(monkeypatch):
    """Mock Router for CLI tests."""
    mock = Mock()
    monkeypatch.setattr("eventrouter.cli.Router", lambda: mock)
    return mock


@pytest.fixture
def mock_scenario_runner(monkeypatch):
    """Mock ScenarioRunner with default configuration."""
    mock_runner = Mock()
    mock_runner.scenario = {"id": "test_scenario"}
    mock_runner.run.return_value = []
    monkeypatch.setattr(
        "eventrouter.cli.ScenarioRunner", lambda scenario_path, router: mock_runner
    )
    return mock_runner


@pytest.fixture
def write_scenario(tmp_path):
    """Write scenario YAML text to a temporary file and return its path."""

    def _write(content: str, name: str = "scenario.yaml") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def request_params() -> dict[str, list[str]]:
    """Request parameter lists used by the chain tests."""
    return {
        "full": ["authorized", "save", "alert"],
        "rejected": ["unauthorized", "save"],
    }
