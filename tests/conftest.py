"""Shared test fixtures for planjira tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from planjira.contracts.config import JiraConfig
from planjira.contracts.plan import ParsedPlan
from planjira.plan.parser import parse_plan

PAYMENT_PLAN = """# Payment Gateway Development Plan

## EPIC: Payment Gateway Integration
**Assignee:** lead@example.com
**Priority:** High
**Labels:** `payments`, `backend`

Accept card payments through Stripe with **PCI-compliant** tokenization.

---

## STORY 1: Checkout API
**Assignee:** dev@example.com
**Time Estimate:** 16 hours
**Labels:** `api`

Expose the checkout endpoints used by the web client.

### TASK 1.1: Payment service
**Time Estimate:** ~4 hours

Implement the service layer:
- create intents
- confirm intents

#### SUBTASK 1.1.1: Stripe client
**Time Estimate:** 2 hours

#### SUBTASK 1.1.2: Webhook handler

### TASK 1.2: Refund endpoint
**Time Estimate:** 2-3 days

## STORY 2: Reporting

### TASK 2.1: Daily settlement report
**Assignee:** analyst@example.com
"""


@pytest.fixture
def payment_plan_text() -> str:
    return PAYMENT_PLAN


@pytest.fixture
def payment_plan(payment_plan_text: str) -> ParsedPlan:
    return parse_plan(payment_plan_text)


@pytest.fixture
def plan_file(tmp_path: Path, payment_plan_text: str) -> Path:
    path = tmp_path / "plan.md"
    path.write_text(payment_plan_text, encoding="utf-8")
    return path


@pytest.fixture
def jira_config() -> JiraConfig:
    return JiraConfig(
        api_url="https://example.atlassian.net/",
        email="dev@example.com",
        api_token="secret-token",
        project_key="PAY",
    )
