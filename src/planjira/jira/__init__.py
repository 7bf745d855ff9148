"""Jira REST API access."""

from planjira.jira._retrying_transport import RetryingTransport
from planjira.jira.client import JiraClient
from planjira.jira.redact import REDACTED, redact_auth

__all__ = ["REDACTED", "JiraClient", "RetryingTransport", "redact_auth"]
