"""
Settings documents and the precedence layers they belong to.
"""

import copy
from enum import IntEnum
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

# A settings value: scalar, ordered sequence or nested mapping
ConfigValue = Union[None, bool, int, float, str, List["ConfigValue"], Dict[str, "ConfigValue"]]

_MISSING = object()


class SettingScope(IntEnum):
    """Settings layers in ascending precedence; later members win conflicts."""
    SCHEMA_DEFAULTS = 0
    SYSTEM_DEFAULTS = 1
    USER = 2
    WORKSPACE = 3
    SYSTEM_OVERRIDES = 4

    @property
    def label(self) -> str:
        return self.name.lower().replace("_", "-")

    @classmethod
    def from_label(cls, label: str) -> "SettingScope":
        """Parse ``user``, ``workspace``, ``system-overrides`` and friends"""
        normalized = label.strip().upper().replace("-", "_")
        try:
            return cls[normalized]
        except KeyError:
            valid = ", ".join(scope.label for scope in cls)
            raise ValueError(f"Unknown settings scope '{label}'. Valid scopes: {valid}")


def split_key(key: str) -> List[str]:
    parts = [part for part in key.split(".") if part]
    if not parts:
        raise ValueError("Settings key must not be empty")
    return parts


def get_dotted(data: Mapping[str, Any], key: str, default: Any = None) -> Any:
    """Look up a dotted key (``security.auth.selectedType``) in nested mappings"""
    node: Any = data
    for part in split_key(key):
        if not isinstance(node, Mapping) or part not in node:
            return default
        node = node[part]
    return node


def has_dotted(data: Mapping[str, Any], key: str) -> bool:
    return get_dotted(data, key, _MISSING) is not _MISSING


def set_dotted(data: Dict[str, Any], key: str, value: Any) -> None:
    """Set a dotted key in place, creating (or replacing non-mapping) parents"""
    parts = split_key(key)
    node = data
    for part in parts[:-1]:
        child = node.get(part)
        if not isinstance(child, dict):
            child = {}
            node[part] = child
        node = child
    node[parts[-1]] = value


def iter_leaves(data: Mapping[str, Any], prefix: str = ""):
    """Yield ``(dotted_key, value)`` for every non-mapping value"""
    for key, value in data.items():
        dotted = f"{prefix}.{key}" if prefix else key
        if isinstance(value, Mapping) and value:
            yield from iter_leaves(value, dotted)
        else:
            yield dotted, value


class ConfigDocument:
    """One settings layer as read from disk.

    The wrapped data is copied on the way in and on the way out, so a
    document never changes after it is created.
    """

    __slots__ = ("_data", "path", "scope")

    def __init__(
        self,
        data: Optional[Mapping[str, ConfigValue]] = None,
        path: Optional[Path] = None,
        scope: SettingScope = SettingScope.USER,
    ):
        self._data: Dict[str, ConfigValue] = copy.deepcopy(dict(data or {}))
        self.path = Path(path) if path is not None else None
        self.scope = scope

    @property
    def data(self) -> Dict[str, ConfigValue]:
        return copy.deepcopy(self._data)

    def get(self, key: str, default: Any = None) -> Any:
        return copy.deepcopy(get_dotted(self._data, key, default))

    def __contains__(self, key: str) -> bool:
        return has_dotted(self._data, key)

    def __bool__(self) -> bool:
        return bool(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConfigDocument):
            return NotImplemented
        return self.scope == other.scope and self._data == other._data

    def __repr__(self) -> str:
        return f"ConfigDocument(scope={self.scope.label}, path={self.path}, keys={list(self._data)})"
