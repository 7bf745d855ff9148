"""Exception hierarchy for planjira.

All planjira exceptions inherit from :class:`PlanJiraError`, so callers can catch
any library error with a single ``except`` clause. The plan parser and the ADF
converter never raise; these exceptions belong to the I/O and API layers.
"""

from __future__ import annotations

from collections.abc import Mapping


class PlanJiraError(Exception):
    """Base exception for all planjira errors."""


class ConfigError(PlanJiraError):
    """Configuration loading or validation failure."""


class PlanLoadError(PlanJiraError):
    """Plan file could not be read."""


class ProviderError(PlanJiraError):
    """Base Jira API operation failure."""


class AuthenticationError(ProviderError):
    """Jira rejected the configured credentials."""


class JiraApiError(ProviderError):
    """Jira answered with an error status.

    Attributes:
        status_code: HTTP status of the failed response, ``None`` for transport errors.
    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TransitionError(ProviderError):
    """Requested workflow transition is not available for the issue."""

    def __init__(self, message: str, *, current_status: str, available: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.current_status = current_status
        self.available = available


class ImportRunError(PlanJiraError):
    """Issue import stopped before completing.

    Attributes:
        batch_id: Batch of the interrupted run, if one was assigned.
        created_issues: Plan ids mapped to the keys created before the failure.
    """

    def __init__(
        self,
        message: str,
        *,
        batch_id: str | None = None,
        created_issues: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message)
        self.batch_id = batch_id
        self.created_issues = dict(created_issues or {})
