"""
Custom formatters for Gemini CLI logging.

Provides the standard formatter used by the file and console handlers,
with automatic sanitization of credentials that end up in log records.
"""

import logging
from .utils import sanitize_data, sanitize_string
from gemini_cli.constants import SENSITIVE_KEYS


class GeminiFormatter(logging.Formatter):
    """
    Custom formatter for Gemini CLI log entries.

    Provides structured formatting with optional components and
    automatic sanitization of sensitive data.
    """

    def __init__(
        self,
        include_timestamps: bool = True,
        sanitize_sensitive: bool = True,
        sensitive_keys: tuple = None,
    ):
        self.include_timestamps = include_timestamps
        self.sanitize_sensitive = sanitize_sensitive
        self.sensitive_keys = sensitive_keys or SENSITIVE_KEYS
        fmt_parts = []
        if include_timestamps:
            fmt_parts.append("%(asctime)s")
        fmt_parts.extend(["%(levelname)s", "[%(name)s]", "%(message)s"])
        fmt_string = " ".join(fmt_parts)
        super().__init__(fmt=fmt_string, datefmt="%Y-%m-%d %H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        """
        Format a log record with optional sanitization.

        Args:
            record: The log record to format

        Returns:
            str: Formatted log message
        """
        if self.sanitize_sensitive:
            if isinstance(record.msg, (dict, list)):
                record.msg = sanitize_data(record.msg, self.sensitive_keys)
            elif isinstance(record.args, dict):
                # LogRecord unwraps a single mapping argument
                record.args = sanitize_data(record.args, self.sensitive_keys)
            elif isinstance(record.args, (tuple, list)):
                record.args = tuple(
                    sanitize_data(arg, self.sensitive_keys)
                    if isinstance(arg, (dict, list)) else arg
                    for arg in record.args
                )

        formatted = super().format(record)
        if self.sanitize_sensitive:
            # Keys pasted into plain messages
            formatted = sanitize_string(formatted)

        details = getattr(record, "event_details", None)
        if details:
            if self.sanitize_sensitive:
                details = sanitize_data(details, self.sensitive_keys)
            formatted += " " + ", ".join(f"{k}={v}" for k, v in details.items())

        return formatted
