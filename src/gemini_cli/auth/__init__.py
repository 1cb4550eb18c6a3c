from .types import AuthType
from .resolver import (
    resolve_default,
    resolve_non_interactive,
    resolve_base_url,
    check_enforced,
)
from .validator import validate, ValidationOutcome

__all__ = [
    "AuthType",
    "resolve_default",
    "resolve_non_interactive",
    "resolve_base_url",
    "check_enforced",
    "validate",
    "ValidationOutcome",
]
