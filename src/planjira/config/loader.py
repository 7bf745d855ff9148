"""Jira credentials from the environment and ``.env.jira`` files."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping, MutableMapping
from pathlib import Path

from dotenv import dotenv_values
from pydantic import ValidationError

from planjira.contracts.config import JiraConfig
from planjira.contracts.exceptions import ConfigError

_LOG = logging.getLogger(__name__)

ENV_API_URL = "JIRA_API_URL"
ENV_EMAIL = "JIRA_EMAIL"
ENV_API_TOKEN = "JIRA_API_TOKEN"
ENV_PROJECT_KEY = "JIRA_PROJECT_KEY"

CREDENTIAL_VARS = (ENV_API_URL, ENV_EMAIL, ENV_API_TOKEN)
DEFAULT_ENV_FILE = Path(".env.jira")


def load_env_file(path: str | Path) -> dict[str, str]:
    """Read a dotenv file; keys declared without a value are left out."""
    env_path = Path(path)
    if not env_path.is_file():
        raise ConfigError(f"failed reading env file: {env_path}")
    try:
        values = dotenv_values(env_path, encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"failed reading env file: {env_path}") from exc
    return {key: value for key, value in values.items() if value is not None}


def apply_env_file(path: str | Path, environ: MutableMapping[str, str] | None = None) -> bool:
    """Fill missing variables in *environ* from the env file at *path*.

    Does nothing when the credentials are already present or the file does not
    exist. Variables already set in *environ* are never overwritten.

    Returns:
        ``True`` when the file was read.
    """
    target = os.environ if environ is None else environ
    if all(target.get(name) for name in CREDENTIAL_VARS):
        return False

    env_path = Path(path)
    if not env_path.is_file():
        _LOG.debug("No env file at %s", env_path)
        return False

    for key, value in load_env_file(env_path).items():
        target.setdefault(key, value)
    _LOG.debug("Loaded Jira settings from %s", env_path)
    return True


def load_config(environ: Mapping[str, str] | None = None, *, require_project: bool = False) -> JiraConfig:
    source = os.environ if environ is None else environ
    required = [*CREDENTIAL_VARS, ENV_PROJECT_KEY] if require_project else list(CREDENTIAL_VARS)
    missing = [name for name in required if not (source.get(name) or "").strip()]
    if missing:
        raise ConfigError(f"missing required environment variables: {', '.join(missing)}")

    try:
        return JiraConfig(
            api_url=source[ENV_API_URL],
            email=source[ENV_EMAIL],
            api_token=source[ENV_API_TOKEN].strip(),
            project_key=(source.get(ENV_PROJECT_KEY) or "").strip() or None,
        )
    except ValidationError as exc:
        raise ConfigError(f"invalid Jira configuration: {exc}") from exc
