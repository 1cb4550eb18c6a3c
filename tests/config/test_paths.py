from pathlib import Path

import pytest

from gemini_cli.config.paths import (
    system_defaults_path,
    system_settings_path,
    user_settings_path,
    workspace_settings_path,
)


@pytest.mark.parametrize("system,expected", [
    ("Linux", Path("/etc/gemini-cli/settings.json")),
    ("Darwin", Path("/Library/Application Support/GeminiCli/settings.json")),
    ("Windows", Path("C:/ProgramData/gemini-cli/settings.json")),
])
def test_system_settings_path_per_platform(mocker, system, expected):
    mocker.patch("platform.system", return_value=system)

    assert system_settings_path({}) == expected
    assert system_defaults_path({}) == expected.parent / "system-defaults.json"


def test_system_paths_overridden_by_env(tmp_path):
    env = {
        "GEMINI_CLI_SYSTEM_SETTINGS_PATH": str(tmp_path / "admin.json"),
        "GEMINI_CLI_SYSTEM_DEFAULTS_PATH": str(tmp_path / "defaults.json"),
    }

    assert system_settings_path(env) == tmp_path / "admin.json"
    assert system_defaults_path(env) == tmp_path / "defaults.json"


def test_system_defaults_follow_overridden_settings_path(tmp_path):
    env = {"GEMINI_CLI_SYSTEM_SETTINGS_PATH": str(tmp_path / "admin" / "settings.json")}

    assert system_defaults_path(env) == tmp_path / "admin" / "system-defaults.json"


def test_user_and_workspace_paths(tmp_path, mocker):
    mocker.patch("pathlib.Path.home", return_value=tmp_path)

    assert user_settings_path() == tmp_path / ".gemini" / "settings.json"
    assert user_settings_path(tmp_path / "other") == tmp_path / "other" / ".gemini" / "settings.json"
    assert workspace_settings_path(tmp_path / "repo") == tmp_path / "repo" / ".gemini" / "settings.json"
