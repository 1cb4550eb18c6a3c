from enum import Enum
from typing import Optional


class AuthType(str, Enum):
    """Authentication modes; values are the identifiers used in settings and env"""
    LOGIN_WITH_GOOGLE = "oauth-personal"
    USE_GEMINI = "gemini-api-key"
    USE_VERTEX_AI = "vertex-ai"
    CLOUD_SHELL = "cloud-shell"
    COMPUTE_ADC = "compute-default-credentials"

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    @classmethod
    def values(cls) -> tuple:
        return tuple(member.value for member in cls)

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["AuthType"]:
        """Member for ``value``, or None when it is not an auth type identifier"""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip())
        except ValueError:
            return None

    def __str__(self) -> str:
        return self.value


_DESCRIPTIONS = {
    AuthType.LOGIN_WITH_GOOGLE: "Login with Google",
    AuthType.USE_GEMINI: "Use Gemini API key",
    AuthType.USE_VERTEX_AI: "Vertex AI",
    AuthType.CLOUD_SHELL: "Use Cloud Shell user credentials",
    AuthType.COMPUTE_ADC: "Use compute instance default credentials",
}
