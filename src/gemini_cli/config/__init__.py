"""
Settings management.

This package resolves the effective settings from the layered sources:

- source_reader: loading one JSON settings layer
- env_loader: applying ``.env`` files to the process environment
- merge: deep merge of the layers, provenance and enforced fields
- settings: the startup sequence and the LoadedSettings container

Usage:
    from gemini_cli.config import bootstrap
    settings = bootstrap()
    settings.merged.get("security.auth.selectedType")
"""

from .document import ConfigDocument, SettingScope
from .errors import (
    SettingsError,
    ParseError,
    InvalidEnvironmentValue,
    InvalidSettingValue,
    PolicyViolation,
    MissingCredentials,
    AuthNotConfigured,
)
from .merge import EffectiveSettings, merge
from .settings import LoadedSettings, bootstrap

__all__ = [
    'ConfigDocument',
    'SettingScope',
    'EffectiveSettings',
    'LoadedSettings',
    'bootstrap',
    'merge',
    'SettingsError',
    'ParseError',
    'InvalidEnvironmentValue',
    'InvalidSettingValue',
    'PolicyViolation',
    'MissingCredentials',
    'AuthNotConfigured',
]
