"""
Settings merge engine.

Folds the settings layers into one effective document:

- mapping over mapping merges key by key, recursively
- anything else (lists included) is replaced by the higher layer
- keys present in one layer only pass through unchanged

While merging it records, per leaf, which layer set it. Afterwards every
enforcement marker found in the system overrides layer (``enforcedType``
next to ``selectedType``) pins its sibling field. Pinned fields hold the
enforced value and reject any later change with PolicyViolation.
"""

import copy
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from gemini_cli.constants import ENFORCED_COMPANIONS
from gemini_cli.logging import get_logger, log_settings_event
from .document import (
    ConfigDocument,
    ConfigValue,
    SettingScope,
    get_dotted,
    has_dotted,
    iter_leaves,
    set_dotted,
    split_key,
)
from .errors import PolicyViolation

Layer = Tuple[SettingScope, Union[ConfigDocument, Mapping[str, ConfigValue]]]


class EffectiveSettings:
    """
    The merged settings document with provenance and pinned fields.

    Instances are immutable. ``with_value`` returns a new instance.
    """

    def __init__(
        self,
        data: Dict[str, ConfigValue],
        provenance: Dict[str, SettingScope],
        pinned: Dict[str, ConfigValue],
    ):
        self._data = data
        self._provenance = provenance
        self._pinned = pinned

    @property
    def data(self) -> Dict[str, ConfigValue]:
        return copy.deepcopy(self._data)

    @property
    def pinned(self) -> Dict[str, ConfigValue]:
        return copy.deepcopy(self._pinned)

    @property
    def provenance(self) -> Dict[str, SettingScope]:
        return dict(self._provenance)

    def get(self, key: str, default: Any = None) -> Any:
        if not has_dotted(self._data, key):
            return default
        return copy.deepcopy(get_dotted(self._data, key))

    def __contains__(self, key: str) -> bool:
        return has_dotted(self._data, key)

    def source_of(self, key: str) -> Optional[SettingScope]:
        """Layer that last set the leaf ``key``, None if no layer did"""
        return self._provenance.get(key)

    def is_pinned(self, key: str) -> bool:
        return key in self._pinned

    def check_override(self, key: str, value: ConfigValue, merged_write: bool = True) -> None:
        """
        Raise PolicyViolation if writing ``value`` at ``key`` would change a
        pinned field. Writes that keep the pinned value are allowed.

        With ``merged_write`` the value replaces the branch of the merged
        document, so a parent mapping must carry the pinned leaf unchanged.
        A write into a single layer is deep-merged below the pin instead;
        it is rejected only when it names the pinned leaf with another value.
        """
        parts = split_key(key)
        for pinned_key, pinned_value in self._pinned.items():
            pinned_parts = split_key(pinned_key)
            if pinned_parts == parts:
                if value != pinned_value:
                    raise PolicyViolation(pinned_key, pinned_value, value)
            elif pinned_parts[:len(parts)] == parts:
                # Writing a parent mapping: the pinned leaf must survive unchanged
                remainder = ".".join(pinned_parts[len(parts):])
                carries_leaf = isinstance(value, Mapping) and has_dotted(value, remainder)
                if carries_leaf and get_dotted(value, remainder) != pinned_value:
                    raise PolicyViolation(pinned_key, pinned_value, value)
                if merged_write and not carries_leaf:
                    raise PolicyViolation(pinned_key, pinned_value, value)
            elif parts[:len(pinned_parts)] == pinned_parts:
                raise PolicyViolation(pinned_key, pinned_value, value)

    def with_value(
        self,
        key: str,
        value: ConfigValue,
        scope: SettingScope = SettingScope.USER,
    ) -> "EffectiveSettings":
        """Copy of these settings with ``key`` replaced by ``value``"""
        self.check_override(key, value)
        data = copy.deepcopy(self._data)
        set_dotted(data, key, copy.deepcopy(value))
        provenance = dict(self._provenance)
        _clear_branch(provenance, key)
        _record(provenance, key, value, scope)
        return EffectiveSettings(data, provenance, copy.deepcopy(self._pinned))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EffectiveSettings):
            return NotImplemented
        return (
            self._data == other._data
            and self._provenance == other._provenance
            and self._pinned == other._pinned
        )

    def __repr__(self) -> str:
        return f"EffectiveSettings(keys={list(self._data)}, pinned={list(self._pinned)})"


def merge(layers: Iterable[Layer]) -> EffectiveSettings:
    """
    Merge settings layers into EffectiveSettings.

    Args:
        layers: ``(scope, document)`` pairs. They are applied in ascending
            scope order; pairs with the same scope keep their given order.

    Returns:
        EffectiveSettings: Fresh merged settings; inputs are not modified
    """
    logger = get_logger("gemini_cli.config.merge")
    ordered = sorted(layers, key=lambda layer: layer[0])

    merged: Dict[str, ConfigValue] = {}
    provenance: Dict[str, SettingScope] = {}
    pinned: Dict[str, ConfigValue] = {}

    for scope, document in ordered:
        payload = _payload(document)
        _merge_mapping(merged, provenance, payload, scope, [])
        if scope == SettingScope.SYSTEM_OVERRIDES:
            pinned.update(_collect_pins(payload, []))

    for key, value in pinned.items():
        _clear_branch(provenance, key)
        set_dotted(merged, key, copy.deepcopy(value))
        provenance[key] = SettingScope.SYSTEM_OVERRIDES
        logger.debug(f"Pinned {key} by system overrides")

    log_settings_event(
        "effective",
        "merged",
        {"layers": [scope.label for scope, _ in ordered], "pinned": sorted(pinned)},
    )
    return EffectiveSettings(merged, provenance, pinned)


def _payload(document: Union[ConfigDocument, Mapping[str, ConfigValue]]) -> Dict[str, ConfigValue]:
    if isinstance(document, ConfigDocument):
        return document.data
    return copy.deepcopy(dict(document))


def _merge_mapping(
    target: Dict[str, ConfigValue],
    provenance: Dict[str, SettingScope],
    incoming: Mapping[str, ConfigValue],
    scope: SettingScope,
    segments: List[str],
) -> None:
    for key, value in incoming.items():
        dotted = ".".join([*segments, key])
        existing = target.get(key)
        if isinstance(value, dict) and isinstance(existing, dict):
            # An empty mapping counts as a leaf until something is merged into it
            provenance.pop(dotted, None)
            _merge_mapping(existing, provenance, value, scope, segments + [key])
            if not existing:
                provenance[dotted] = scope
            continue
        _clear_branch(provenance, dotted)
        target[key] = value
        _record(provenance, dotted, value, scope)


def _record(
    provenance: Dict[str, SettingScope],
    dotted: str,
    value: Any,
    scope: SettingScope,
) -> None:
    if isinstance(value, Mapping) and value:
        for leaf, _ in iter_leaves(value, dotted):
            provenance[leaf] = scope
    else:
        provenance[dotted] = scope


def _clear_branch(provenance: Dict[str, SettingScope], prefix: str) -> None:
    """Drop provenance for ``prefix`` and everything under it"""
    for key in list(provenance):
        if key == prefix or key.startswith(prefix + "."):
            del provenance[key]


def _collect_pins(payload: Mapping[str, Any], segments: List[str]) -> Dict[str, ConfigValue]:
    pins = {}
    for key, value in payload.items():
        if key in ENFORCED_COMPANIONS and value is not None:
            target = ".".join([*segments, ENFORCED_COMPANIONS[key]])
            pins[target] = value
        elif isinstance(value, Mapping):
            pins.update(_collect_pins(value, segments + [key]))
    return pins
