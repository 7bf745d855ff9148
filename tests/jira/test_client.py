"""Tests for the Jira REST client."""

from __future__ import annotations

import base64
import json
from collections.abc import Callable
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from planjira.contracts.config import JiraConfig
from planjira.contracts.exceptions import AuthenticationError, JiraApiError, ProviderError
from planjira.jira.client import JiraClient
from planjira.renderers.adf import markdown_to_adf

_BACKOFF = "planjira.jira._retrying_transport.RetryingTransport._sleep_backoff"

Handler = Callable[[httpx.Request], httpx.Response]


def _client(config: JiraConfig, handler: Handler) -> JiraClient:
    return JiraClient(config, transport=httpx.MockTransport(handler))


def _basic_auth() -> str:
    return base64.b64encode(b"dev@example.com:secret-token").decode()


@pytest.mark.asyncio
async def test_create_issue_posts_fields_with_basic_auth(jira_config: JiraConfig) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(201, json={"id": "10001", "key": "PAY-1"})

    async with _client(jira_config, handler) as client:
        created = await client.create_issue({"summary": "Hello"})

    assert created == {"id": "10001", "key": "PAY-1"}
    request = seen[0]
    assert request.method == "POST"
    assert str(request.url) == "https://example.atlassian.net/rest/api/3/issue"
    assert request.headers["Authorization"] == f"Basic {_basic_auth()}"
    assert json.loads(request.content) == {"fields": {"summary": "Hello"}}


@pytest.mark.asyncio
async def test_delete_issue_handles_no_content(jira_config: JiraConfig) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "DELETE"
        assert request.url.path == "/rest/api/3/issue/PAY-7"
        return httpx.Response(204)

    async with _client(jira_config, handler) as client:
        assert await client.delete_issue("PAY-7") is None


@pytest.mark.asyncio
async def test_transitions_round_trip(jira_config: JiraConfig) -> None:
    posted: list[dict[str, object]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "GET":
            return httpx.Response(200, json={"transitions": [{"id": "31", "name": "Done"}]})
        posted.append(json.loads(request.content))
        return httpx.Response(204)

    async with _client(jira_config, handler) as client:
        transitions = await client.get_transitions("PAY-1")
        await client.transition_issue("PAY-1", "31")

    assert transitions == [{"id": "31", "name": "Done"}]
    assert posted == [{"transition": {"id": "31"}}]


@pytest.mark.asyncio
async def test_add_comment_sends_adf_body(jira_config: JiraConfig) -> None:
    bodies: list[dict[str, object]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/rest/api/3/issue/PAY-1/comment"
        bodies.append(json.loads(request.content))
        return httpx.Response(201, json={"id": "5"})

    document = markdown_to_adf("Merged in **#42**")
    async with _client(jira_config, handler) as client:
        await client.add_comment("PAY-1", document)

    assert bodies == [{"body": document.to_adf()}]


@pytest.mark.asyncio
async def test_search_follows_pages(jira_config: JiraConfig) -> None:
    tokens: list[str | None] = []

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/rest/api/3/search/jql"
        assert request.url.params["jql"] == 'labels = "import-batch-b1"'
        token = request.url.params.get("nextPageToken")
        tokens.append(token)
        if token is None:
            return httpx.Response(200, json={"issues": [{"key": "PAY-1"}], "nextPageToken": "p2", "isLast": False})
        return httpx.Response(200, json={"issues": [{"key": "PAY-2"}], "isLast": True})

    async with _client(jira_config, handler) as client:
        issues = await client.search_issues_by_label("import-batch-b1")

    assert [issue["key"] for issue in issues] == ["PAY-1", "PAY-2"]
    assert tokens == [None, "p2"]


@pytest.mark.asyncio
async def test_get_user_by_email_is_cached(jira_config: JiraConfig) -> None:
    calls: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request.url.params["query"])
        return httpx.Response(200, json=[{"accountId": "acc-1"}])

    async with _client(jira_config, handler) as client:
        first = await client.get_user_by_email("a@example.com")
        second = await client.get_user_by_email("a@example.com")

    assert first == second == "acc-1"
    assert calls == ["a@example.com"]


@pytest.mark.asyncio
async def test_get_user_by_email_not_found(jira_config: JiraConfig, caplog: pytest.LogCaptureFixture) -> None:
    async with _client(jira_config, lambda request: httpx.Response(200, json=[])) as client:
        assert await client.get_user_by_email("ghost@example.com") is None

    assert "ghost@example.com" in caplog.text


@pytest.mark.asyncio
async def test_get_user_by_email_lookup_failure_returns_none(jira_config: JiraConfig) -> None:
    async with _client(jira_config, lambda request: httpx.Response(400, text="bad query")) as client:
        assert await client.get_user_by_email("a@example.com") is None


@pytest.mark.asyncio
@pytest.mark.parametrize("status_code", [401, 403])
async def test_auth_failures_raise_redacted_authentication_error(jira_config: JiraConfig, status_code: int) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, text=f"bad credentials secret-token {_basic_auth()}")

    async with _client(jira_config, handler) as client:
        with pytest.raises(AuthenticationError) as exc_info:
            await client.get_issue("PAY-1")

    message = str(exc_info.value)
    assert "secret-token" not in message
    assert _basic_auth() not in message
    assert "[REDACTED]" in message


@pytest.mark.asyncio
async def test_api_errors_carry_status_code(jira_config: JiraConfig) -> None:
    async with _client(jira_config, lambda request: httpx.Response(404, text="Issue does not exist")) as client:
        with pytest.raises(JiraApiError, match="Issue does not exist") as exc_info:
            await client.get_issue("PAY-404")

    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
@patch(_BACKOFF, new_callable=AsyncMock)
async def test_transport_errors_are_wrapped(mock_backoff: AsyncMock, jira_config: JiraConfig) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused")

    async with _client(jira_config, handler) as client:
        with pytest.raises(JiraApiError, match="connection refused") as exc_info:
            await client.get_issue("PAY-1")

    assert exc_info.value.status_code is None
    assert mock_backoff.await_count == 2


@pytest.mark.asyncio
@patch(_BACKOFF, new_callable=AsyncMock)
async def test_rate_limited_request_is_retried(mock_backoff: AsyncMock, jira_config: JiraConfig) -> None:
    responses = iter([httpx.Response(429), httpx.Response(200, json={"key": "PAY-1"})])

    async with _client(jira_config, lambda request: next(responses)) as client:
        issue = await client.get_issue("PAY-1")

    assert issue == {"key": "PAY-1"}
    mock_backoff.assert_awaited_once()


@pytest.mark.asyncio
async def test_request_outside_context_fails(jira_config: JiraConfig) -> None:
    client = JiraClient(jira_config, transport=httpx.MockTransport(lambda request: httpx.Response(200)))

    with pytest.raises(ProviderError, match="outside of its async context"):
        await client.get_issue("PAY-1")


def test_redact_hides_token_and_encoded_credentials(jira_config: JiraConfig) -> None:
    client = JiraClient(jira_config)

    assert client.redact(f"secret-token / {_basic_auth()}") == "[REDACTED] / [REDACTED]"
