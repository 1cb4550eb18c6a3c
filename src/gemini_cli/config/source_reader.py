"""
Reading a single settings layer from disk.

An absent file is an empty layer. A file that exists but does not hold a
JSON object raises ParseError: a broken file must never look like "no
override".
"""

import json
import re
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from gemini_cli.constants import LEGACY_SETTINGS_KEYS
from gemini_cli.logging import get_logger, log_settings_event
from .document import ConfigDocument, SettingScope, has_dotted, set_dotted
from .errors import ParseError

_ENV_REFERENCE = re.compile(r"\$(?:\{(?P<braced>[A-Za-z_][A-Za-z0-9_]*)\}|(?P<bare>[A-Za-z_][A-Za-z0-9_]*))")


def load(
    path: Path,
    scope: SettingScope = SettingScope.USER,
    env: Optional[Mapping[str, str]] = None,
) -> ConfigDocument:
    """
    Load one settings file.

    Args:
        path: Location of the JSON settings file
        scope: Layer the document belongs to
        env: Environment snapshot used to expand ``$VAR`` references;
            values are left untouched when None

    Returns:
        ConfigDocument: The layer, empty when the file does not exist

    Raises:
        ParseError: The file exists but is unreadable, not JSON, or not an object
    """
    logger = get_logger("gemini_cli.config.source_reader")
    path = Path(path)

    if not path.exists():
        logger.debug(f"No {scope.label} settings at {path}")
        return ConfigDocument(path=path, scope=scope)

    try:
        with open(path, "r", encoding="utf-8") as f:
            content = f.read()
    except OSError as e:
        raise ParseError(path, e) from e

    if not content.strip():
        return ConfigDocument(path=path, scope=scope)

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse {scope.label} settings {path}: {e}")
        raise ParseError(path, e) from e

    if not isinstance(data, dict):
        error = ValueError(f"expected a JSON object, got {type(data).__name__}")
        logger.error(f"Failed to parse {scope.label} settings {path}: {error}")
        raise ParseError(path, error)

    data = migrate_legacy_keys(data)
    if env is not None:
        data = resolve_env_references(data, env)

    log_settings_event(scope.label, "loaded", {"path": str(path), "keys": sorted(data)})
    return ConfigDocument(data, path=path, scope=scope)


def migrate_legacy_keys(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Move flat keys from the first settings format to their nested location.

    A nested value that is already present wins over the flat one; the flat
    key is dropped either way.
    """
    migrated = {key: value for key, value in data.items() if key not in LEGACY_SETTINGS_KEYS}
    for legacy_key, nested_key in LEGACY_SETTINGS_KEYS.items():
        if legacy_key not in data:
            continue
        if not has_dotted(migrated, nested_key):
            set_dotted(migrated, nested_key, data[legacy_key])
    return migrated


def resolve_env_references(value: Any, env: Mapping[str, str]) -> Any:
    """Expand ``$VAR`` and ``${VAR}`` in string values; unknown names stay as written"""
    if isinstance(value, str):
        def substitute(match):
            name = match.group("braced") or match.group("bare")
            return env.get(name, match.group(0))
        return _ENV_REFERENCE.sub(substitute, value)
    if isinstance(value, dict):
        return {key: resolve_env_references(item, env) for key, item in value.items()}
    if isinstance(value, list):
        return [resolve_env_references(item, env) for item in value]
    return value
