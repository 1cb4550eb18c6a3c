"""
Gemini CLI logging.

One log file in ``~/.gemini/logs`` rotated at midnight, a stderr handler
for warnings, and sanitization of API keys and tokens in every record.
Settings loads and auth checks are logged as structured events.
"""

from .logger import (
    get_logger,
    setup_logging,
    log_application_event,
    log_settings_event,
    log_authentication_event
)
from .config import LogConfig, LogLevel, get_log_directory
from .utils import sanitize_data

__all__ = [
    "get_logger",
    "setup_logging",
    "log_application_event",
    "log_settings_event",
    "log_authentication_event",
    "LogLevel",
    "LogConfig",
    "sanitize_data",
    "get_log_directory"
]
