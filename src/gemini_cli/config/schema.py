"""
Built-in defaults, the lowest settings layer.
"""

from gemini_cli.constants import DEFAULT_EXCLUDED_ENV_VARS
from .document import ConfigDocument, SettingScope

SCHEMA_DEFAULTS = {
    "general": {
        "logLevel": "INFO",
        "checkpointing": {"enabled": False},
    },
    "ui": {
        "theme": None,
        "hideBanner": False,
    },
    "security": {
        "auth": {
            "selectedType": None,
            "enforcedType": None,
            "useExternal": False,
        },
        "folderTrust": {"enabled": False},
    },
    "tools": {
        "sandbox": False,
        "exclude": [],
    },
    "advanced": {
        "excludedEnvVars": list(DEFAULT_EXCLUDED_ENV_VARS),
    },
}


def defaults_document() -> ConfigDocument:
    return ConfigDocument(SCHEMA_DEFAULTS, scope=SettingScope.SCHEMA_DEFAULTS)
