"""
Platform-specific locations of the settings files.
"""

import os
import platform
from pathlib import Path
from typing import Mapping, Optional, Union

from gemini_cli.constants import (
    SETTINGS_DIRECTORY_NAME,
    SETTINGS_FILE_NAME,
    SYSTEM_DEFAULTS_FILE_NAME,
    SYSTEM_SETTINGS_PATH_ENV,
    SYSTEM_DEFAULTS_PATH_ENV,
)

PathLike = Union[str, Path]


def _platform_system_settings_path() -> Path:
    """Get the platform default for the administrator settings file"""
    system = platform.system()
    if system == "Windows":
        return Path("C:/ProgramData/gemini-cli") / SETTINGS_FILE_NAME
    elif system == "Darwin":  # macOS
        return Path("/Library/Application Support/GeminiCli") / SETTINGS_FILE_NAME
    else:  # Linux and others
        return Path("/etc/gemini-cli") / SETTINGS_FILE_NAME


def system_settings_path(env: Optional[Mapping[str, str]] = None) -> Path:
    """Path of the system overrides layer"""
    env = os.environ if env is None else env
    override = env.get(SYSTEM_SETTINGS_PATH_ENV)
    if override:
        return Path(override)
    return _platform_system_settings_path()


def system_defaults_path(env: Optional[Mapping[str, str]] = None) -> Path:
    """Path of the system defaults layer, beside the system settings by default"""
    env = os.environ if env is None else env
    override = env.get(SYSTEM_DEFAULTS_PATH_ENV)
    if override:
        return Path(override)
    return system_settings_path(env).parent / SYSTEM_DEFAULTS_FILE_NAME


def user_settings_dir(home_dir: Optional[PathLike] = None) -> Path:
    home = Path(home_dir) if home_dir else Path.home()
    return home / SETTINGS_DIRECTORY_NAME


def user_settings_path(home_dir: Optional[PathLike] = None) -> Path:
    return user_settings_dir(home_dir) / SETTINGS_FILE_NAME


def workspace_settings_path(workspace_dir: PathLike) -> Path:
    return Path(workspace_dir) / SETTINGS_DIRECTORY_NAME / SETTINGS_FILE_NAME
