"""
Main logging module for the Gemini CLI.

This module provides the primary logging interface, logger setup,
and integration with the console output system with daily rotation.
"""

import json
import logging
import logging.handlers
import sys
from typing import Optional, Dict, Any

from .config import LogConfig, LogLevel, get_log_file_path
from .formatters import GeminiFormatter
from .utils import cleanup_old_logs, sanitize_data
from gemini_cli.constants import LOG_LEVEL_KEY, SENSITIVE_KEYS


# Global logger registry
_loggers: Dict[str, logging.Logger] = {}
_logging_configured = False
_log_config: Optional[LogConfig] = None


def _user_log_level() -> Optional[LogLevel]:
    """Read ``general.logLevel`` from the user settings file, if any.

    Read directly rather than through the source reader: the reader logs,
    and logging is not configured yet. A malformed file is reported when
    the settings layers are loaded.
    """
    from gemini_cli.config.paths import user_settings_path

    settings_file = user_settings_path()
    if not settings_file.exists():
        return None
    try:
        with open(settings_file, "r", encoding="utf-8") as f:
            settings = json.load(f)
    except (json.JSONDecodeError, OSError):
        return None

    value = settings
    for part in LOG_LEVEL_KEY.split("."):
        if not isinstance(value, dict):
            return None
        value = value.get(part)
    return LogLevel.parse(value)


def setup_logging(config: Optional[LogConfig] = None, force_reconfigure: bool = False) -> None:
    """
    Set up the Gemini CLI logging system.

    Args:
        config: LogConfig instance, uses default if None
        force_reconfigure: Force reconfiguration even if already set up
    """
    global _logging_configured, _log_config

    if _logging_configured and not force_reconfigure:
        return

    if config is None:
        config = LogConfig()
        user_level = _user_log_level()
        if user_level is not None:
            config.default_level = user_level

    _log_config = config

    log_file_path = get_log_file_path(config)

    root_logger = logging.getLogger("gemini_cli")
    root_logger.setLevel(getattr(logging, config.default_level.value))

    # Clear existing handlers
    root_logger.handlers.clear()

    file_handler = logging.handlers.TimedRotatingFileHandler(
        filename=log_file_path,
        when='midnight',
        interval=1,
        backupCount=config.log_retention_days,
        encoding='utf-8',
        utc=False
    )
    file_handler.setLevel(getattr(logging, config.default_level.value))
    file_handler.suffix = "%Y-%m-%d"
    file_handler.setFormatter(GeminiFormatter(
        include_timestamps=config.include_timestamps,
        sanitize_sensitive=config.sanitize_sensitive_data,
        sensitive_keys=config.sensitive_keys
    ))
    root_logger.addHandler(file_handler)

    if config.console_level != LogLevel.ERROR or config.default_level == LogLevel.DEBUG:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(getattr(logging, config.console_level.value))
        console_handler.setFormatter(GeminiFormatter(
            include_timestamps=False,
            sanitize_sensitive=config.sanitize_sensitive_data,
            sensitive_keys=config.sensitive_keys
        ))
        root_logger.addHandler(console_handler)

    root_logger.propagate = False

    _logging_configured = True

    setup_logger = get_logger("gemini_cli.setup")
    setup_logger.info(f"Logging initialized - File: {log_file_path}, "
                      f"Level: {config.default_level.value}")

    try:
        cleanup_old_logs(log_file_path.parent, config.log_retention_days)
    except OSError as e:
        setup_logger.warning(f"Could not remove old log files: {e}")


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the specified name.

    Args:
        name: Logger name (e.g., 'gemini_cli.config.merge')

    Returns:
        logging.Logger: Logger instance
    """
    if not _logging_configured:
        setup_logging()

    if name not in _loggers:
        _loggers[name] = logging.getLogger(name)

    return _loggers[name]


def log_application_event(
    event: str,
    level: str = "info",
    details: Optional[Dict[str, Any]] = None,
    logger_name: str = "gemini_cli.app"
) -> None:
    """
    Log application-level events at appropriate levels.

    Args:
        event: Description of the event
        level: Log level (debug, info, warning, error)
        details: Additional event details
        logger_name: Logger name to use
    """
    logger = get_logger(logger_name)
    extra = {"app_event": event}

    if details:
        extra["event_details"] = details

    log_method = getattr(logger, level.lower(), logger.info)
    log_method(f"Application: {event}", extra=extra)


def log_settings_event(
    scope: str,
    action: str,
    details: Optional[Dict[str, Any]] = None,
    logger_name: str = "gemini_cli.settings"
) -> None:
    """
    Log a settings layer event (load, merge, write) at DEBUG level.

    Args:
        scope: Name of the settings layer
        action: What happened to the layer
        details: Additional details (will be sanitized)
        logger_name: Logger name to use
    """
    logger = get_logger(logger_name)
    extra = {"settings_scope": scope, "settings_action": action}

    if details:
        extra["event_details"] = sanitize_data(details, SENSITIVE_KEYS)

    logger.debug(f"Settings {action}: {scope}", extra=extra)


def log_authentication_event(
    auth_type: str,
    success: bool,
    details: Optional[Dict[str, Any]] = None,
    logger_name: str = "gemini_cli.auth"
) -> None:
    """
    Log authentication resolution and validation events.

    Args:
        auth_type: Auth type identifier (oauth-personal, vertex-ai, ...)
        success: Whether the auth requirements were satisfied
        details: Additional auth details (will be sanitized)
        logger_name: Logger name to use
    """
    logger = get_logger(logger_name)
    extra = {
        "auth_type": auth_type,
        "auth_success": success
    }

    if details:
        extra["event_details"] = sanitize_data(details, SENSITIVE_KEYS)

    if success:
        logger.info(f"Authentication requirements met: {auth_type}", extra=extra)
    else:
        logger.warning(f"Authentication requirements not met: {auth_type}", extra=extra)
