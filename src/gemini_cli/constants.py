"""
Global constants for the Gemini CLI.
"""

# Settings locations
SETTINGS_DIRECTORY_NAME = ".gemini"
SETTINGS_FILE_NAME = "settings.json"
SYSTEM_DEFAULTS_FILE_NAME = "system-defaults.json"
ENV_FILE_NAME = ".env"

# Environment variables overriding the system-scope settings paths
SYSTEM_SETTINGS_PATH_ENV = "GEMINI_CLI_SYSTEM_SETTINGS_PATH"
SYSTEM_DEFAULTS_PATH_ENV = "GEMINI_CLI_SYSTEM_DEFAULTS_PATH"

# Authentication environment variables
DEFAULT_AUTH_TYPE_ENV = "GEMINI_DEFAULT_AUTH_TYPE"
GEMINI_API_KEY_ENV = "GEMINI_API_KEY"
GOOGLE_API_KEY_ENV = "GOOGLE_API_KEY"
GOOGLE_CLOUD_PROJECT_ENV = "GOOGLE_CLOUD_PROJECT"
GOOGLE_CLOUD_LOCATION_ENV = "GOOGLE_CLOUD_LOCATION"
USE_GCA_ENV = "GOOGLE_GENAI_USE_GCA"
USE_VERTEXAI_ENV = "GOOGLE_GENAI_USE_VERTEXAI"

# Base URL override, highest priority first
BASE_URL_ENV_VARS = (
    "GEMINI_BASE_URL",
    "AI_GATEWAY_BASE_URL",
    "GOOGLE_GEMINI_BASE_URL",
)

# Settings keys (dotted paths into the merged document)
SELECTED_AUTH_TYPE_KEY = "security.auth.selectedType"
ENFORCED_AUTH_TYPE_KEY = "security.auth.enforcedType"
USE_EXTERNAL_AUTH_KEY = "security.auth.useExternal"
EXCLUDED_ENV_VARS_KEY = "advanced.excludedEnvVars"
LOG_LEVEL_KEY = "general.logLevel"

# Companion markers honoured in the system overrides layer:
# marker key -> sibling key it pins
ENFORCED_COMPANIONS = {
    "enforcedType": "selectedType",
}

# Flat keys from the first settings format -> nested location
LEGACY_SETTINGS_KEYS = {
    "selectedAuthType": SELECTED_AUTH_TYPE_KEY,
    "enforcedAuthType": ENFORCED_AUTH_TYPE_KEY,
    "useExternalAuth": USE_EXTERNAL_AUTH_KEY,
    "excludedProjectEnvVars": EXCLUDED_ENV_VARS_KEY,
    "theme": "ui.theme",
}

DEFAULT_EXCLUDED_ENV_VARS = ("DEBUG", "DEBUG_MODE")

# Logging constants
LOG_DIR_ENV = "GEMINI_CLI_LOG_DIR"
LOG_DIRECTORY_NAME = "logs"
LOG_FILE_NAME = "gemini-cli"
LOG_RETENTION_DAYS = 7

# Sensitive data keys for sanitization
SENSITIVE_KEYS = (
    "password", "token", "access_token", "refresh_token", "secret",
    "client_secret", "private_key", "authorization", "x-api-key", "api_key",
    "apikey", "credentials", "bearer", "session", "cookie"
)
