"""In-memory Jira client fake with spy tracking."""

from __future__ import annotations

from types import TracebackType
from typing import Any

from planjira.contracts.document import Document
from planjira.contracts.exceptions import JiraApiError


class FakeJiraClient:
    """Stands in for :class:`planjira.jira.JiraClient` with deterministic keys."""

    def __init__(self, *, project_key: str = "PAY", users: dict[str, str] | None = None) -> None:
        self.project_key = project_key
        self.users = dict(users or {})
        self.created: list[dict[str, Any]] = []
        self.deleted: list[str] = []
        self.comments: dict[str, list[Document]] = {}
        self.transitions_done: list[tuple[str, str]] = []
        self.issues: dict[str, dict[str, Any]] = {}
        self.transitions: dict[str, list[dict[str, Any]]] = {}
        self.labelled: dict[str, list[dict[str, Any]]] = {}
        self.user_lookups: list[str] = []
        self.fail_create_on_call: int | None = None
        self.fail_delete: set[str] = set()
        self._next_number = 1

    async def __aenter__(self) -> FakeJiraClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        return None

    def redact(self, text: str) -> str:
        return text.replace("secret-token", "[REDACTED]")

    async def create_issue(self, fields: dict[str, Any]) -> dict[str, Any]:
        if self.fail_create_on_call is not None and len(self.created) + 1 == self.fail_create_on_call:
            raise JiraApiError("Jira API error (400): summary is required", status_code=400)
        key = f"{self.project_key}-{self._next_number}"
        self._next_number += 1
        self.created.append(fields)
        self.issues[key] = {"key": key, "fields": fields}
        return {"id": str(self._next_number), "key": key}

    async def get_issue(self, key: str) -> dict[str, Any]:
        if key not in self.issues:
            raise JiraApiError(f"Jira API error (404): {key} not found", status_code=404)
        return self.issues[key]

    async def delete_issue(self, key: str) -> None:
        if key in self.fail_delete:
            raise JiraApiError("Jira API error (403): token secret-token may not delete", status_code=403)
        self.deleted.append(key)

    async def get_transitions(self, key: str) -> list[dict[str, Any]]:
        return self.transitions.get(key, [])

    async def transition_issue(self, key: str, transition_id: str) -> None:
        self.transitions_done.append((key, transition_id))

    async def add_comment(self, key: str, body: Document) -> dict[str, Any]:
        self.comments.setdefault(key, []).append(body)
        return {"id": "1"}

    async def search_issues_by_label(self, label: str) -> list[dict[str, Any]]:
        return list(self.labelled.get(label, []))

    async def get_user_by_email(self, email: str) -> str | None:
        self.user_lookups.append(email)
        return self.users.get(email)
