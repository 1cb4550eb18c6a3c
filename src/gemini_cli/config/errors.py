"""
Errors raised while loading settings and resolving authentication.

Every error carries the structured fields a caller needs to render it;
``str(err)`` is always a complete, user-facing sentence.
"""

from pathlib import Path
from typing import Any, Iterable, Optional, Sequence


class SettingsError(Exception):
    """Base class for settings and auth resolution errors."""


class ParseError(SettingsError):
    """A settings file exists but is not a valid settings document."""

    def __init__(self, path: Path, cause: Exception):
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Error in {self.path}: {cause}. Please fix the file and try again.")


class InvalidEnvironmentValue(SettingsError):
    """An environment variable holds a value outside its allowed set."""

    def __init__(self, variable: str, value: str, allowed: Iterable[str]):
        self.variable = variable
        self.value = value
        self.allowed = tuple(allowed)
        super().__init__(
            f"Invalid value for {variable}: '{value}'. "
            f"Valid values are: {', '.join(self.allowed)}."
        )


class InvalidSettingValue(SettingsError):
    """A settings file holds a value outside its allowed set."""

    def __init__(self, key: str, value: Any, allowed: Iterable[str], source: Optional[str] = None):
        self.key = key
        self.value = value
        self.allowed = tuple(allowed)
        self.source = source
        where = f" (set in {source} settings)" if source else ""
        super().__init__(
            f"Invalid value for '{key}'{where}: '{value}'. "
            f"Valid values are: {', '.join(self.allowed)}."
        )


class PolicyViolation(SettingsError):
    """An attempt to change a value pinned by the system overrides layer."""

    def __init__(self, key: str, pinned_value: Any, attempted_value: Any):
        self.key = key
        self.pinned_value = pinned_value
        self.attempted_value = attempted_value
        super().__init__(
            f"'{key}' is enforced by your administrator to be "
            f"'{pinned_value}' and cannot be changed to '{attempted_value}'."
        )


class MissingCredentials(SettingsError):
    """The selected auth type is missing required environment variables."""

    def __init__(self, auth_type: str, messages: Sequence[str]):
        self.auth_type = auth_type
        self.messages = tuple(messages)
        super().__init__("\n".join(self.messages))


class AuthNotConfigured(SettingsError):
    """No auth type could be determined for a non-interactive session."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or (
            "Please set an Auth method in your settings.json or specify one of "
            "the following environment variables before running: "
            "GEMINI_API_KEY, GOOGLE_GENAI_USE_VERTEXAI, GOOGLE_GENAI_USE_GCA"
        ))
