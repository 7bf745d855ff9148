"""Configuration loading exports."""

from planjira.config.loader import (
    CREDENTIAL_VARS,
    DEFAULT_ENV_FILE,
    ENV_API_TOKEN,
    ENV_API_URL,
    ENV_EMAIL,
    ENV_PROJECT_KEY,
    apply_env_file,
    load_config,
    load_env_file,
)

__all__ = [
    "CREDENTIAL_VARS",
    "DEFAULT_ENV_FILE",
    "ENV_API_TOKEN",
    "ENV_API_URL",
    "ENV_EMAIL",
    "ENV_PROJECT_KEY",
    "apply_env_file",
    "load_config",
    "load_env_file",
]
