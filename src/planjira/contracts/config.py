"""Configuration contracts."""

from __future__ import annotations

from pydantic import BaseModel, SecretStr, field_validator


class JiraConfig(BaseModel):
    api_url: str
    email: str
    api_token: SecretStr
    project_key: str | None = None

    model_config = {"frozen": True}

    @field_validator("api_url", "email")
    @classmethod
    def _strip(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value

    @property
    def base_url(self) -> str:
        """Instance URL without a trailing slash."""
        return self.api_url.rstrip("/")
