"""Shared pytest configuration and fixtures for the Gemini CLI test suite.

This module provides:
- Common fixtures (temporary home and workspace, a clean environment)
- Test configuration (logging to a temp dir, markers)
- Helpers for writing settings and env files
"""
import json
import sys
from pathlib import Path

import pytest


# Add src/ to path so test modules can import gemini_cli package
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

AUTH_ENV_VARS = (
    "GEMINI_DEFAULT_AUTH_TYPE",
    "GEMINI_API_KEY",
    "GOOGLE_API_KEY",
    "GOOGLE_CLOUD_PROJECT",
    "GOOGLE_CLOUD_LOCATION",
    "GOOGLE_GENAI_USE_GCA",
    "GOOGLE_GENAI_USE_VERTEXAI",
    "GEMINI_BASE_URL",
    "AI_GATEWAY_BASE_URL",
    "GOOGLE_GEMINI_BASE_URL",
    "GEMINI_CLI_SYSTEM_SETTINGS_PATH",
    "GEMINI_CLI_SYSTEM_DEFAULTS_PATH",
)


@pytest.fixture(scope="session", autouse=True)
def isolated_logging(tmp_path_factory):
    """Send log output of the whole run to a temporary directory."""
    from gemini_cli.logging import LogConfig, LogLevel, setup_logging

    log_dir = tmp_path_factory.mktemp("logs")
    with pytest.MonkeyPatch.context() as mp:
        mp.setattr("gemini_cli.logging.logger.get_log_file_path", lambda config=None: log_dir / "gemini-cli.log")
        setup_logging(LogConfig(default_level=LogLevel.DEBUG), force_reconfigure=True)
        yield log_dir


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every variable the resolution pipeline reads."""
    for name in AUTH_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def home_dir(tmp_path):
    home = tmp_path / "home"
    home.mkdir()
    return home


@pytest.fixture
def workspace_dir(tmp_path):
    workspace = tmp_path / "workspace"
    workspace.mkdir()
    return workspace


@pytest.fixture
def system_dir(tmp_path, clean_env):
    """System settings directory, wired up through the path override variables."""
    system = tmp_path / "etc"
    system.mkdir()
    clean_env.setenv("GEMINI_CLI_SYSTEM_SETTINGS_PATH", str(system / "settings.json"))
    clean_env.setenv("GEMINI_CLI_SYSTEM_DEFAULTS_PATH", str(system / "system-defaults.json"))
    return system


def write_json(path: Path, data) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


@pytest.fixture
def write_settings():
    """Write a settings document to ``path`` and return the path."""
    return write_json


def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test (fast, isolated)"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test (slower)"
    )


def pytest_collection_modifyitems(config, items):
    """Auto-mark tests based on their location."""
    for item in items:
        if "integration" not in item.nodeid:
            item.add_marker(pytest.mark.unit)
