"""Markdown plan parser.

Turns a plan document written as nested headings into an Epic / Story / Task /
Subtask tree in a single forward pass::

    ## EPIC: Payments
    ## STORY 1: Checkout
    **Assignee:** alice@example.com
    ### TASK 1.1: Payment service
    **Time Estimate:** 3 hours
    #### SUBTASK 1.1.1: Stripe client

Headings may also use the hyphenated forms (``# STORY-1:``, ``## TASK-1.1:``,
``### SUBTASK-1.1.1:``). The parser is total: malformed input yields a partial tree,
never an exception.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from planjira.contracts.plan import Epic, ParsedPlan, PlanNode, PlanNodeType, Story, Subtask, Task
from planjira.plan.headings import HeadingMatch, match_heading

_LOG = logging.getLogger(__name__)

_SECTION_BREAK = re.compile(r"^(?:#{1,3} |---)")
_NOT_DESCRIPTION = re.compile(r"^(?:---|#|\*\*)")
_METADATA_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("assignee", re.compile(r"^\*\*Assignee:\*\* (.+)")),
    ("priority", re.compile(r"^\*\*Priority:\*\* (.+)")),
    ("estimate", re.compile(r"^\*\*Time Estimate:\*\* (.+)")),
    ("labels", re.compile(r"^\*\*Labels:\*\* (.+)")),
)


def parse_labels(raw: str) -> list[str]:
    labels = (part.strip().replace("`", "").strip() for part in raw.split(","))
    return [label for label in labels if label]


@dataclass
class _ScanState:
    """Cursors carried across lines during a parse."""

    epic: Epic | None = None
    stories: list[Story] = field(default_factory=list)
    story: Story | None = None
    task: Task | None = None
    subtask: Subtask | None = None
    subtask_orphaned: bool = False
    section: PlanNode | None = None
    description: list[str] = field(default_factory=list)


class PlanParser:
    """Single-pass parser for markdown plan documents.

    Args:
        logger: Sink for the orphan-subtask warning; defaults to this module's logger.
    """

    def __init__(self, *, logger: logging.Logger | None = None) -> None:
        self._log = logger or _LOG

    def parse(self, content: str) -> ParsedPlan:
        state = _ScanState()

        for line in content.split("\n"):
            heading = match_heading(line)
            if heading is not None or _SECTION_BREAK.match(line):
                self._flush_description(state)

            if heading is not None:
                self._open_section(state, heading)
                continue

            if self._apply_metadata(state, line):
                continue

            if line.strip() and not _NOT_DESCRIPTION.match(line):
                state.description.append(line)

        self._flush_description(state)
        self._close_subtask(state)
        self._close_task(state)
        self._close_story(state)

        return ParsedPlan(epic=state.epic, stories=state.stories)

    # ------------------------------------------------------------------
    # Section handling
    # ------------------------------------------------------------------

    def _open_section(self, state: _ScanState, heading: HeadingMatch) -> None:
        if heading.node_type is PlanNodeType.EPIC:
            state.epic = Epic(id=heading.id, summary=heading.summary)
            state.section = state.epic
            return

        if heading.node_type is PlanNodeType.STORY:
            self._close_subtask(state)
            self._close_task(state)
            self._close_story(state)
            state.story = Story(id=heading.id, summary=heading.summary)
            state.section = state.story
            return

        if heading.node_type is PlanNodeType.TASK:
            self._close_subtask(state)
            self._close_task(state)
            state.task = Task(id=heading.id, summary=heading.summary)
            state.section = state.task
            return

        self._close_subtask(state)
        state.subtask = Subtask(id=heading.id, summary=heading.summary)
        state.subtask_orphaned = state.task is None
        if state.subtask_orphaned:
            self._log.warning("%s found without a parent TASK; skipping", heading.id)
        state.section = state.subtask

    @staticmethod
    def _close_subtask(state: _ScanState) -> None:
        if state.subtask is None:
            return
        if not state.subtask_orphaned and state.task is not None:
            state.task.subtasks.append(state.subtask)
        state.subtask = None
        state.subtask_orphaned = False

    @staticmethod
    def _close_task(state: _ScanState) -> None:
        if state.task is None:
            return
        story = state.story
        if story is not None and state.task.story_number == story.number:
            story.tasks.append(state.task)
        else:
            _LOG.debug("dropping %s: no open story with a matching number", state.task.id)
        state.task = None

    @staticmethod
    def _close_story(state: _ScanState) -> None:
        if state.story is not None:
            state.stories.append(state.story)
            state.story = None

    # ------------------------------------------------------------------
    # Line content
    # ------------------------------------------------------------------

    @staticmethod
    def _apply_metadata(state: _ScanState, line: str) -> bool:
        for field_name, pattern in _METADATA_PATTERNS:
            match = pattern.match(line)
            if match is None:
                continue
            section = state.section
            if section is not None and field_name in type(section).model_fields:
                value = match.group(1).strip()
                setattr(section, field_name, parse_labels(value) if field_name == "labels" else value)
            return True
        return False

    @staticmethod
    def _flush_description(state: _ScanState) -> None:
        """Move pending lines into the open section; a later block is appended after a blank line."""
        if not state.description:
            return
        text = "\n".join(state.description).strip()
        state.description = []
        section = state.section
        if section is None or not text:
            return
        section.description = f"{section.description}\n\n{text}" if section.description else text


def parse_plan(content: str) -> ParsedPlan:
    """Parse a plan document with the default logger."""
    return PlanParser().parse(content)
