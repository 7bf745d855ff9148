"""Async Jira Cloud REST client (API v3)."""

from __future__ import annotations

import base64
import logging
from types import TracebackType
from typing import Any

import httpx

from planjira.contracts.config import JiraConfig
from planjira.contracts.document import Document
from planjira.contracts.exceptions import AuthenticationError, JiraApiError, ProviderError
from planjira.jira._retrying_transport import RetryingTransport
from planjira.jira.redact import redact_auth

_LOG = logging.getLogger(__name__)

_SEARCH_PAGE_SIZE = 100


class JiraClient:
    """Authenticated Jira REST client.

    Use as an async context manager so the underlying connection pool is closed::

        async with JiraClient(config) as client:
            issue = await client.create_issue(fields)

    Every error message raised from here has the Basic auth credential redacted.
    """

    def __init__(
        self,
        config: JiraConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        max_attempts: int = 3,
        timeout: float = 30.0,
    ) -> None:
        self._config = config
        raw = f"{config.email}:{config.api_token.get_secret_value()}"
        self._auth = base64.b64encode(raw.encode()).decode()
        self._transport = RetryingTransport(transport=transport, max_attempts=max_attempts)
        self._timeout = timeout
        self._client: httpx.AsyncClient | None = None
        self._user_cache: dict[str, str | None] = {}

    async def __aenter__(self) -> JiraClient:
        self._client = httpx.AsyncClient(
            base_url=f"{self._config.base_url}/rest/api/3",
            headers={
                "Authorization": f"Basic {self._auth}",
                "Accept": "application/json",
                "Content-Type": "application/json",
            },
            transport=self._transport,
            timeout=self._timeout,
        )
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def redact(self, text: str) -> str:
        """Strip this client's credential from *text*."""
        return redact_auth(redact_auth(text, self._auth), self._config.api_token.get_secret_value())

    # ------------------------------------------------------------------
    # Issues
    # ------------------------------------------------------------------

    async def create_issue(self, fields: dict[str, Any]) -> dict[str, Any]:
        return await self._request("POST", "/issue", json={"fields": fields})

    async def get_issue(self, key: str) -> dict[str, Any]:
        return await self._request("GET", f"/issue/{key}")

    async def delete_issue(self, key: str) -> None:
        await self._request("DELETE", f"/issue/{key}")

    async def get_transitions(self, key: str) -> list[dict[str, Any]]:
        payload = await self._request("GET", f"/issue/{key}/transitions")
        return list((payload or {}).get("transitions", []))

    async def transition_issue(self, key: str, transition_id: str) -> None:
        await self._request("POST", f"/issue/{key}/transitions", json={"transition": {"id": transition_id}})

    async def add_comment(self, key: str, body: Document) -> dict[str, Any]:
        return await self._request("POST", f"/issue/{key}/comment", json={"body": body.to_adf()})

    async def search_issues_by_label(self, label: str) -> list[dict[str, Any]]:
        """Return every issue carrying *label*, following result pages."""
        issues: list[dict[str, Any]] = []
        params: dict[str, Any] = {"jql": f'labels = "{label}"', "maxResults": _SEARCH_PAGE_SIZE, "fields": "summary"}
        while True:
            payload = await self._request("GET", "/search/jql", params=params) or {}
            issues.extend(payload.get("issues", []))
            next_token = payload.get("nextPageToken")
            if payload.get("isLast", True) or not next_token:
                return issues
            params = {**params, "nextPageToken": next_token}

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    async def get_user_by_email(self, email: str) -> str | None:
        """Resolve an email address to an account id; results are cached.

        Returns ``None`` (and logs a warning) when the user is unknown or the lookup
        fails.
        """
        if email in self._user_cache:
            return self._user_cache[email]

        try:
            users = await self._request("GET", "/user/search", params={"query": email})
        except JiraApiError as exc:
            _LOG.warning("Failed to look up user %s: %s", email, exc)
            return None

        account_id = users[0].get("accountId") if users else None
        if account_id is None:
            _LOG.warning("User not found for email: %s", email)
        self._user_cache[email] = account_id
        return account_id

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    async def _request(
        self,
        method: str,
        endpoint: str,
        *,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        if self._client is None:
            raise ProviderError("JiraClient used outside of its async context")

        _LOG.debug("%s %s", method, endpoint)
        try:
            response = await self._client.request(method, endpoint, json=json, params=params)
        except httpx.HTTPError as exc:
            raise JiraApiError(self.redact(f"Jira request failed: {method} {endpoint}: {exc}")) from None

        if response.status_code in (401, 403):
            raise AuthenticationError(
                self.redact(f"Jira rejected the credentials ({response.status_code}): {response.text}")
            )
        if response.is_error:
            raise JiraApiError(
                self.redact(f"Jira API error ({response.status_code}): {response.text}"),
                status_code=response.status_code,
            )
        if response.status_code == 204 or not response.content:
            return None
        return response.json()
