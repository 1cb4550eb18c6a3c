"""
Loading ``.env`` override files into the process environment.

This is the only place that writes to ``os.environ``. It runs once at
startup; everything downstream works from an EnvironmentSnapshot taken
afterwards.
"""

import os
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, MutableMapping, NamedTuple, Optional, Union

from dotenv import dotenv_values

from gemini_cli.constants import DEFAULT_EXCLUDED_ENV_VARS, ENV_FILE_NAME, SETTINGS_DIRECTORY_NAME
from gemini_cli.logging import get_logger

EnvironmentSnapshot = Mapping[str, str]


class EnvFile(NamedTuple):
    path: Path
    project_scoped: bool = False


def default_search_paths(
    workspace_dir: Union[str, Path],
    home_dir: Optional[Union[str, Path]] = None,
) -> List[EnvFile]:
    """
    Env files in lookup order, most specific first.

    Project files come from the workspace directory, home files from the
    user's home. When both directories are the same, only the home entries
    are returned.
    """
    workspace = Path(workspace_dir).resolve()
    home = Path(home_dir).resolve() if home_dir else Path.home().resolve()

    paths = []
    if workspace != home:
        paths.append(EnvFile(workspace / SETTINGS_DIRECTORY_NAME / ENV_FILE_NAME, True))
        paths.append(EnvFile(workspace / ENV_FILE_NAME, True))
    paths.append(EnvFile(home / SETTINGS_DIRECTORY_NAME / ENV_FILE_NAME, False))
    paths.append(EnvFile(home / ENV_FILE_NAME, False))
    return paths


def read_env_file(path: Path) -> Dict[str, str]:
    """
    Parse one ``KEY=VALUE`` file.

    Lines python-dotenv cannot parse are skipped with a warning; so are
    bare keys without a value.
    """
    logger = get_logger("gemini_cli.config.env_loader")
    values = {}
    for key, value in dotenv_values(path, interpolate=False).items():
        if value is None:
            logger.warning(f"Skipping '{key}' in {path}: no value assigned")
            continue
        values[key] = value
    return values


def load(
    search_paths: Iterable[Union[EnvFile, str, Path]],
    excluded_vars: Iterable[str] = DEFAULT_EXCLUDED_ENV_VARS,
    environ: Optional[MutableMapping[str, str]] = None,
) -> Dict[str, str]:
    """
    Apply env files to the process environment without overwriting.

    Args:
        search_paths: Files in priority order; plain paths count as home files
        excluded_vars: Variables never taken from project-scoped files
        environ: Target mapping, ``os.environ`` by default

    Returns:
        Dict[str, str]: The variables that were applied, by name
    """
    logger = get_logger("gemini_cli.config.env_loader")
    environ = os.environ if environ is None else environ
    excluded = set(excluded_vars)
    applied: Dict[str, str] = {}

    for entry in search_paths:
        if not isinstance(entry, EnvFile):
            entry = EnvFile(Path(entry))
        if not entry.path.is_file():
            continue

        logger.debug(f"Loading environment file {entry.path}")
        for key, value in read_env_file(entry.path).items():
            if entry.project_scoped and key in excluded:
                logger.debug(f"Ignoring {key} from project file {entry.path}")
                continue
            if key in environ:
                continue
            environ[key] = value
            applied[key] = value

    if applied:
        logger.info(f"Applied {len(applied)} variable(s) from env files: {', '.join(sorted(applied))}")
    return applied


def take_snapshot(environ: Optional[Mapping[str, str]] = None) -> EnvironmentSnapshot:
    """Read-only copy of the environment for the resolution pipeline"""
    environ = os.environ if environ is None else environ
    return MappingProxyType(dict(environ))
