"""Plan heading recognition shared by the parser and the link-injection pass."""

from __future__ import annotations

import re
from dataclasses import dataclass

from planjira.contracts.plan import PlanNodeType

# Order matters: the first matching pattern wins.
_HEADING_PATTERNS: tuple[tuple[PlanNodeType, re.Pattern[str]], ...] = (
    (PlanNodeType.EPIC, re.compile(r"^## (EPIC(?:-\d+)?):(.*)$")),
    (PlanNodeType.STORY, re.compile(r"^#{1,2} STORY[- ](\d+):(.*)$")),
    (PlanNodeType.TASK, re.compile(r"^#{2,3} TASK[- ]([\d.]+):(.*)$")),
    (PlanNodeType.SUBTASK, re.compile(r"^#{3,4} SUBTASK[- ]?([\d.]+):(.*)$")),
)

_PLAN_ID_PATTERN = re.compile(r"^(?:EPIC-(\d+)|STORY-(\d+)|TASK-([\d.]+)|SUBTASK-([\d.]+))$")


@dataclass(frozen=True)
class HeadingMatch:
    node_type: PlanNodeType
    id: str
    summary: str


def match_heading(line: str) -> HeadingMatch | None:
    """Recognize an Epic/Story/Task/Subtask heading line."""
    for node_type, pattern in _HEADING_PATTERNS:
        match = pattern.match(line)
        if match is None:
            continue
        number, summary = match.group(1), match.group(2).strip()
        if node_type is PlanNodeType.EPIC:
            return HeadingMatch(node_type=node_type, id=number, summary=summary)
        return HeadingMatch(node_type=node_type, id=f"{node_type.value}-{number}", summary=summary)
    return None


def heading_id(line: str) -> str | None:
    """Canonical node id for a plan heading line, or ``None`` for any other line."""
    match = match_heading(line)
    return match.id if match is not None else None


def plan_item_id(issue_id: str | None) -> str:
    """Numbering shown in issue titles: ``EPIC`` -> ``1``, ``TASK-1.2`` -> ``1.2``."""
    if not issue_id:
        return ""
    if issue_id == "EPIC":
        return "1"
    match = _PLAN_ID_PATTERN.match(issue_id)
    if match is None:
        return ""
    return next(group for group in match.groups() if group is not None)


def summary_with_plan_id(issue_id: str | None, summary: str | None) -> str | None:
    """Prefix *summary* with its plan numbering unless it already starts with it."""
    plan_id = plan_item_id(issue_id)
    if not plan_id or not summary:
        return summary
    trimmed = summary.strip()
    if trimmed.startswith(f"{plan_id} ") or trimmed.startswith(f"{plan_id}."):
        return trimmed
    return f"{plan_id} {trimmed}"
