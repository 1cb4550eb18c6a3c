"""
Settings shared by the commands of one CLI invocation.

The first call bootstraps (env files, snapshot, settings layers); later
calls return the same LoadedSettings.
"""

from typing import Optional

from gemini_cli.config import LoadedSettings, bootstrap

_settings: Optional[LoadedSettings] = None


def get_settings() -> LoadedSettings:
    global _settings
    if _settings is None:
        _settings = bootstrap()
    return _settings


def reset_settings() -> None:
    """Forget the cached settings; the next ``get_settings`` loads again"""
    global _settings
    _settings = None
