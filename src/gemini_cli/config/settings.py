"""
Loading, merging and editing the five settings layers.

``bootstrap`` is the startup entry point: it applies the env files once,
takes the environment snapshot and returns LoadedSettings. LoadedSettings
keeps one ConfigDocument per layer and the EffectiveSettings merged from
them; it is recomputed on ``reload`` and after every ``set_value``.
Nothing is written to disk unless ``save`` is called.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from gemini_cli.constants import DEFAULT_EXCLUDED_ENV_VARS, EXCLUDED_ENV_VARS_KEY
from gemini_cli.logging import get_logger, log_settings_event
from . import env_loader, source_reader
from .document import ConfigDocument, SettingScope, set_dotted
from .merge import EffectiveSettings, merge
from .paths import (
    system_defaults_path,
    system_settings_path,
    user_settings_path,
    workspace_settings_path,
)
from .schema import defaults_document

PathLike = Union[str, Path]

_env_files_loaded = False


class LoadedSettings:
    """All settings layers for one workspace, plus their merged result"""

    def __init__(
        self,
        workspace_dir: Optional[PathLike] = None,
        home_dir: Optional[PathLike] = None,
        env: Optional[Mapping[str, str]] = None,
    ):
        self.workspace_dir = Path(workspace_dir or Path.cwd()).resolve()
        self.home_dir = Path(home_dir or Path.home()).resolve()
        self.env = env_loader.take_snapshot() if env is None else env
        self.logger = get_logger("gemini_cli.config.settings")

        # System paths come from the environment as it was at startup
        self.paths: Dict[SettingScope, Optional[Path]] = {
            SettingScope.SCHEMA_DEFAULTS: None,
            SettingScope.SYSTEM_DEFAULTS: system_defaults_path(self.env),
            SettingScope.USER: user_settings_path(self.home_dir),
            SettingScope.WORKSPACE: (
                None if self.workspace_dir == self.home_dir
                else workspace_settings_path(self.workspace_dir)
            ),
            SettingScope.SYSTEM_OVERRIDES: system_settings_path(self.env),
        }

        self._raw: Dict[SettingScope, ConfigDocument] = {}
        self._layers: Dict[SettingScope, ConfigDocument] = {}
        self._merged: Optional[EffectiveSettings] = None
        self.reload()

    @property
    def merged(self) -> EffectiveSettings:
        return self._merged

    def for_scope(self, scope: SettingScope) -> ConfigDocument:
        """Layer as used for merging (environment references expanded)"""
        return self._layers[scope]

    def reload(self) -> EffectiveSettings:
        """
        Re-read every layer from disk and merge again.

        Raises:
            ParseError: One of the files is malformed; the previous state is kept
        """
        raw = {SettingScope.SCHEMA_DEFAULTS: defaults_document()}
        layers = {SettingScope.SCHEMA_DEFAULTS: defaults_document()}

        for scope, path in self.paths.items():
            if scope == SettingScope.SCHEMA_DEFAULTS:
                continue
            if path is None:
                raw[scope] = layers[scope] = ConfigDocument(scope=scope)
                continue
            raw[scope] = source_reader.load(path, scope)
            layers[scope] = ConfigDocument(
                source_reader.resolve_env_references(raw[scope].data, self.env),
                path=path,
                scope=scope,
            )

        self._raw = raw
        self._layers = layers
        self._remerge()
        return self._merged

    def _remerge(self) -> None:
        self._merged = merge((scope, self._layers[scope]) for scope in SettingScope)

    def set_value(self, scope: SettingScope, key: str, value: Any) -> EffectiveSettings:
        """
        Change ``key`` in one layer (in memory) and merge again.

        Raises:
            ValueError: The layer has no file (schema defaults, or a workspace
                that is the home directory)
            PolicyViolation: ``key`` is pinned by the system overrides layer
                to a different value
        """
        scope = SettingScope(scope)
        if self.paths.get(scope) is None:
            raise ValueError(f"Settings scope '{scope.label}' cannot be modified")

        if scope != SettingScope.SYSTEM_OVERRIDES:
            self._merged.check_override(key, value, merged_write=False)

        raw_data = self._raw[scope].data
        set_dotted(raw_data, key, value)
        self._raw[scope] = ConfigDocument(raw_data, path=self.paths[scope], scope=scope)

        data = self._layers[scope].data
        set_dotted(data, key, source_reader.resolve_env_references(value, self.env))
        self._layers[scope] = ConfigDocument(data, path=self.paths[scope], scope=scope)

        self._remerge()
        log_settings_event(scope.label, "updated", {"key": key})
        return self._merged

    def save(self, scope: SettingScope) -> Path:
        """Write one layer back to its file, as read (references not expanded)"""
        scope = SettingScope(scope)
        path = self.paths.get(scope)
        if path is None:
            raise ValueError(f"Settings scope '{scope.label}' has no file to save")

        os.makedirs(path.parent, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self._raw[scope].data, f, indent=2)
            f.write("\n")

        log_settings_event(scope.label, "saved", {"path": str(path)})
        return path


def bootstrap(
    workspace_dir: Optional[PathLike] = None,
    home_dir: Optional[PathLike] = None,
    force_env_reload: bool = False,
) -> LoadedSettings:
    """
    Startup sequence: env files, environment snapshot, settings layers.

    The env files are applied to ``os.environ`` once per process. The
    variables excluded from project-level env files come from every
    settings layer except the workspace one, which a project controls.
    """
    global _env_files_loaded

    workspace = Path(workspace_dir or Path.cwd())
    home = Path(home_dir or Path.home())

    if not _env_files_loaded or force_env_reload:
        excluded = _settings_outside_workspace(home).get(EXCLUDED_ENV_VARS_KEY)
        if not isinstance(excluded, list):
            excluded = list(DEFAULT_EXCLUDED_ENV_VARS)
        env_loader.load(env_loader.default_search_paths(workspace, home), excluded_vars=excluded)
        _env_files_loaded = True

    return LoadedSettings(workspace, home, env_loader.take_snapshot())


def _settings_outside_workspace(home: Path) -> EffectiveSettings:
    """Merge of the layers a project cannot write to, read before env files apply"""
    layers = [
        (SettingScope.SCHEMA_DEFAULTS, defaults_document()),
        (SettingScope.SYSTEM_DEFAULTS, source_reader.load(system_defaults_path(os.environ), SettingScope.SYSTEM_DEFAULTS)),
        (SettingScope.USER, source_reader.load(user_settings_path(home), SettingScope.USER)),
        (SettingScope.SYSTEM_OVERRIDES, source_reader.load(system_settings_path(os.environ), SettingScope.SYSTEM_OVERRIDES)),
    ]
    return merge(layers)
