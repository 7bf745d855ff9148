from __future__ import annotations

import pytest

from planjira.contracts.plan import PlanNodeType
from planjira.plan.headings import heading_id, match_heading, plan_item_id, summary_with_plan_id


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("## EPIC: Payments", "EPIC"),
        ("## EPIC-2: Payments", "EPIC-2"),
        ("## STORY 1: Checkout", "STORY-1"),
        ("# STORY-1: Checkout", "STORY-1"),
        ("### TASK 1.2: Refunds", "TASK-1.2"),
        ("## TASK-1.2: Refunds", "TASK-1.2"),
        ("#### SUBTASK 1.2.3: Client", "SUBTASK-1.2.3"),
        ("### SUBTASK-1.2.3: Client", "SUBTASK-1.2.3"),
        ("### SUBTASK1.2.3: Client", "SUBTASK-1.2.3"),
    ],
)
def test_heading_id_recognizes_plan_headings(line: str, expected: str) -> None:
    assert heading_id(line) == expected


@pytest.mark.parametrize(
    "line",
    [
        "## Notes",
        "# EPIC: wrong level",
        "### STORY 1: too deep",
        "#### TASK 1.1: too deep",
        "##### SUBTASK 1.1.1: too deep",
        "Plain text mentioning STORY 1: nothing",
        "",
    ],
)
def test_heading_id_ignores_other_lines(line: str) -> None:
    assert heading_id(line) is None


def test_match_heading_trims_summary_and_reports_type() -> None:
    match = match_heading("### TASK 1.1:   Payment service  ")

    assert match is not None
    assert match.node_type is PlanNodeType.TASK
    assert match.id == "TASK-1.1"
    assert match.summary == "Payment service"


@pytest.mark.parametrize(
    ("issue_id", "expected"),
    [
        ("EPIC", "1"),
        ("EPIC-3", "3"),
        ("STORY-2", "2"),
        ("TASK-1.2", "1.2"),
        ("SUBTASK-1.2.3", "1.2.3"),
        ("OTHER-1", ""),
        (None, ""),
        ("", ""),
    ],
)
def test_plan_item_id(issue_id: str | None, expected: str) -> None:
    assert plan_item_id(issue_id) == expected


@pytest.mark.parametrize(
    ("issue_id", "summary", "expected"),
    [
        ("STORY-1", "Checkout API", "1 Checkout API"),
        ("TASK-1.2", "  Refund endpoint ", "1.2 Refund endpoint"),
        ("TASK-1.2", "1.2 Refund endpoint", "1.2 Refund endpoint"),
        ("TASK-1.2", "1.2. Refund endpoint", "1.2. Refund endpoint"),
        ("OTHER", "Untouched", "Untouched"),
        ("STORY-1", None, None),
        ("STORY-1", "", ""),
    ],
)
def test_summary_with_plan_id(issue_id: str, summary: str | None, expected: str | None) -> None:
    assert summary_with_plan_id(issue_id, summary) == expected
