"""
Logging configuration for the Gemini CLI.

Log files live next to the user settings, in ``~/.gemini/logs``, unless
``GEMINI_CLI_LOG_DIR`` points somewhere else.
"""

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple

from gemini_cli.constants import (
    LOG_DIR_ENV,
    LOG_DIRECTORY_NAME,
    LOG_FILE_NAME,
    LOG_RETENTION_DAYS,
    SENSITIVE_KEYS,
    SETTINGS_DIRECTORY_NAME,
)


class LogLevel(Enum):
    """Log levels accepted by ``general.logLevel``"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"

    @classmethod
    def parse(cls, value) -> Optional["LogLevel"]:
        """Case-insensitive lookup; None for anything that is not a level name"""
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().upper())
        except ValueError:
            return None


@dataclass
class LogConfig:
    """Configuration class for Gemini CLI logging"""

    log_filename: str = f"{LOG_FILE_NAME}.log"
    log_retention_days: int = LOG_RETENTION_DAYS
    log_dir: Optional[Path] = None

    default_level: LogLevel = LogLevel.INFO
    console_level: LogLevel = LogLevel.WARNING
    include_timestamps: bool = True

    sanitize_sensitive_data: bool = True
    sensitive_keys: Tuple[str, ...] = SENSITIVE_KEYS


def get_log_directory(log_dir: Optional[Path] = None) -> Path:
    """
    Get the directory log files are written to, creating it if needed.

    Args:
        log_dir: Explicit directory; otherwise ``GEMINI_CLI_LOG_DIR``,
            then ``~/.gemini/logs``

    Returns:
        Path: The log directory, or ``./logs`` when it cannot be created
    """
    if log_dir is None:
        override = os.environ.get(LOG_DIR_ENV)
        if override:
            log_dir = Path(override).expanduser()
        else:
            log_dir = Path.home() / SETTINGS_DIRECTORY_NAME / LOG_DIRECTORY_NAME

    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        return log_dir
    except OSError:
        fallback_dir = Path.cwd() / LOG_DIRECTORY_NAME
        fallback_dir.mkdir(exist_ok=True)
        return fallback_dir


def get_log_file_path(config: Optional[LogConfig] = None) -> Path:
    if config is None:
        config = LogConfig()
    return get_log_directory(config.log_dir) / config.log_filename
