"""
Checking that the environment carries the credentials an auth type needs.

Each auth type has one entry in ``AUTH_REQUIREMENTS``. An entry lists
alternative sets of environment variables; the requirement is met when
every variable of at least one set is present. An entry with no
alternatives is always met (credentials are obtained interactively or
from the ambient identity).
"""

from dataclasses import dataclass, field
from typing import Dict, Mapping, Tuple

from gemini_cli.config.errors import MissingCredentials
from gemini_cli.constants import (
    GEMINI_API_KEY_ENV,
    GOOGLE_API_KEY_ENV,
    GOOGLE_CLOUD_LOCATION_ENV,
    GOOGLE_CLOUD_PROJECT_ENV,
)
from gemini_cli.logging import log_authentication_event
from .types import AuthType


@dataclass(frozen=True)
class AuthRequirement:
    """Alternative variable sets for one auth type, each with a short hint"""
    alternatives: Tuple[Tuple[str, ...], ...] = ()
    hints: Tuple[str, ...] = ()

    def is_satisfied(self, env: Mapping[str, str]) -> bool:
        if not self.alternatives:
            return True
        return any(not _missing(names, env) for names in self.alternatives)


@dataclass(frozen=True)
class ValidationOutcome:
    """Result of ``validate``: valid, or a non-empty list of messages"""
    auth_type: AuthType
    messages: Tuple[str, ...] = field(default=())

    @property
    def valid(self) -> bool:
        return not self.messages

    def __bool__(self) -> bool:
        return self.valid

    def raise_for_status(self) -> None:
        """Raise MissingCredentials for callers that abort on failure"""
        if not self.valid:
            raise MissingCredentials(self.auth_type.value, self.messages)


AUTH_REQUIREMENTS: Dict[AuthType, AuthRequirement] = {
    AuthType.USE_VERTEX_AI: AuthRequirement(
        alternatives=(
            (GOOGLE_CLOUD_PROJECT_ENV, GOOGLE_CLOUD_LOCATION_ENV),
            (GOOGLE_API_KEY_ENV,),
        ),
        hints=(
            "to use your Google Cloud project",
            "if using express mode",
        ),
    ),
    AuthType.USE_GEMINI: AuthRequirement(
        alternatives=((GEMINI_API_KEY_ENV,),),
        hints=("get a key from https://aistudio.google.com/app/apikey",),
    ),
    AuthType.LOGIN_WITH_GOOGLE: AuthRequirement(),
    AuthType.CLOUD_SHELL: AuthRequirement(),
    AuthType.COMPUTE_ADC: AuthRequirement(),
}


def _missing(names: Tuple[str, ...], env: Mapping[str, str]) -> Tuple[str, ...]:
    return tuple(name for name in names if not (env.get(name) or "").strip())


def _variables_phrase(names: Tuple[str, ...]) -> str:
    noun = "environment variable" if len(names) == 1 else "environment variables"
    return f"{' and '.join(names)} {noun}"


def _failure_messages(auth_type: AuthType, requirement: AuthRequirement, env: Mapping[str, str]):
    if len(requirement.alternatives) == 1:
        names = requirement.alternatives[0]
        hint = f" ({requirement.hints[0]})" if requirement.hints else ""
        yield (
            f"{_variables_phrase(_missing(names, env))} not found{hint}. "
            f"Set it in your shell or a .env file and try again."
        )
        return

    yield f"When using {auth_type.description}, you must specify either:"
    for index, names in enumerate(requirement.alternatives):
        hint = f" ({requirement.hints[index]})" if index < len(requirement.hints) else ""
        missing = _missing(names, env)
        yield f"• {_variables_phrase(names)}{hint}; missing: {', '.join(missing)}"
    yield "Update your environment and try again (no reload needed if using .env)!"


def validate(
    auth_type: AuthType,
    env: Mapping[str, str],
    *,
    use_external: bool = False,
) -> ValidationOutcome:
    """
    Check the credential requirement of ``auth_type`` against ``env``.

    Args:
        auth_type: Auth type to check
        env: Environment snapshot
        use_external: Credentials are supplied by an external provider;
            every auth type is accepted

    Returns:
        ValidationOutcome: valid, or the remediation messages
    """
    auth_type = AuthType(auth_type)
    requirement = AUTH_REQUIREMENTS[auth_type]

    if use_external or requirement.is_satisfied(env):
        log_authentication_event(auth_type.value, True, {"external": use_external})
        return ValidationOutcome(auth_type)

    messages = tuple(_failure_messages(auth_type, requirement, env))
    log_authentication_event(
        auth_type.value,
        False,
        {"missing": sorted({name for names in requirement.alternatives for name in _missing(names, env)})},
    )
    return ValidationOutcome(auth_type, messages)
