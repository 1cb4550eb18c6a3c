"""
Picking the auth type for a session.

``resolve_default`` is what selection surfaces use for their initial
choice, and it always lands on a concrete AuthType:

1. the type enforced by system overrides, then the selected type in settings
2. ``GEMINI_DEFAULT_AUTH_TYPE``, which must name a valid auth type
3. ``gemini-api-key`` when ``GEMINI_API_KEY`` is set
4. ``oauth-personal``
"""

from typing import Mapping, Optional

from gemini_cli.config.errors import (
    AuthNotConfigured,
    InvalidEnvironmentValue,
    InvalidSettingValue,
    PolicyViolation,
)
from gemini_cli.config.merge import EffectiveSettings
from gemini_cli.constants import (
    BASE_URL_ENV_VARS,
    DEFAULT_AUTH_TYPE_ENV,
    GEMINI_API_KEY_ENV,
    SELECTED_AUTH_TYPE_KEY,
    USE_GCA_ENV,
    USE_VERTEXAI_ENV,
)
from gemini_cli.logging import get_logger
from .types import AuthType


def _env_value(env: Mapping[str, str], name: str) -> Optional[str]:
    """Value of ``name``, treating an empty string as unset"""
    value = env.get(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def enforced_auth_type(effective: EffectiveSettings) -> Optional[AuthType]:
    """Auth type pinned by the system overrides layer, if any"""
    if not effective.is_pinned(SELECTED_AUTH_TYPE_KEY):
        return None
    return _settings_auth_type(effective)


def configured_auth_type(effective: EffectiveSettings) -> Optional[AuthType]:
    """Enforced auth type, else the explicitly selected one, else None"""
    enforced = enforced_auth_type(effective)
    if enforced is not None:
        return enforced
    return _settings_auth_type(effective)


def _settings_auth_type(effective: EffectiveSettings) -> Optional[AuthType]:
    value = effective.get(SELECTED_AUTH_TYPE_KEY)
    if value is None or value == "":
        return None
    auth_type = AuthType.parse(value)
    if auth_type is None:
        source = effective.source_of(SELECTED_AUTH_TYPE_KEY)
        raise InvalidSettingValue(
            SELECTED_AUTH_TYPE_KEY,
            value,
            AuthType.values(),
            source.label if source is not None else None,
        )
    return auth_type


def auth_type_from_default_env(env: Mapping[str, str]) -> Optional[AuthType]:
    """
    Auth type named by ``GEMINI_DEFAULT_AUTH_TYPE``.

    Raises:
        InvalidEnvironmentValue: The variable is set to an unknown identifier
    """
    value = _env_value(env, DEFAULT_AUTH_TYPE_ENV)
    if value is None:
        return None
    auth_type = AuthType.parse(value)
    if auth_type is None:
        raise InvalidEnvironmentValue(DEFAULT_AUTH_TYPE_ENV, value, AuthType.values())
    return auth_type


def resolve_default(effective: EffectiveSettings, env: Mapping[str, str]) -> AuthType:
    """
    Default auth type for a selection surface.

    Args:
        effective: Merged settings
        env: Environment snapshot

    Returns:
        AuthType: Never None

    Raises:
        InvalidEnvironmentValue: ``GEMINI_DEFAULT_AUTH_TYPE`` is not a valid auth type
        InvalidSettingValue: The selected type in settings is not a valid auth type
    """
    logger = get_logger("gemini_cli.auth.resolver")

    configured = configured_auth_type(effective)
    if configured is not None:
        logger.debug(f"Using auth type from settings: {configured}")
        return configured

    from_env = auth_type_from_default_env(env)
    if from_env is not None:
        logger.debug(f"Using auth type from {DEFAULT_AUTH_TYPE_ENV}: {from_env}")
        return from_env

    if _env_value(env, GEMINI_API_KEY_ENV):
        logger.debug(f"{GEMINI_API_KEY_ENV} is set, defaulting to {AuthType.USE_GEMINI}")
        return AuthType.USE_GEMINI

    return AuthType.LOGIN_WITH_GOOGLE


def auth_type_from_env(env: Mapping[str, str]) -> Optional[AuthType]:
    """Auth type implied by the provider switches used in scripted runs"""
    if (_env_value(env, USE_GCA_ENV) or "").lower() == "true":
        return AuthType.LOGIN_WITH_GOOGLE
    if (_env_value(env, USE_VERTEXAI_ENV) or "").lower() == "true":
        return AuthType.USE_VERTEX_AI
    if _env_value(env, GEMINI_API_KEY_ENV):
        return AuthType.USE_GEMINI
    return None


def resolve_non_interactive(effective: EffectiveSettings, env: Mapping[str, str]) -> AuthType:
    """
    Auth type for a session with no selection surface.

    Unlike ``resolve_default`` there is no interactive fallback: without a
    configured type or a provider switch in the environment the session
    cannot start.

    Raises:
        AuthNotConfigured: Nothing selects an auth type
    """
    configured = configured_auth_type(effective)
    if configured is not None:
        return configured

    from_env = auth_type_from_env(env)
    if from_env is None:
        raise AuthNotConfigured()
    return from_env


def check_enforced(effective: EffectiveSettings, auth_type: AuthType) -> None:
    """
    Raise PolicyViolation when ``auth_type`` differs from the enforced type.
    """
    enforced = enforced_auth_type(effective)
    if enforced is not None and AuthType(auth_type) != enforced:
        raise PolicyViolation(SELECTED_AUTH_TYPE_KEY, enforced.value, AuthType(auth_type).value)


def resolve_base_url(env: Mapping[str, str]) -> Optional[str]:
    """Base URL override; the first of the fallback variables that is set wins"""
    for name in BASE_URL_ENV_VARS:
        value = _env_value(env, name)
        if value:
            return value.rstrip("/")
    return None
