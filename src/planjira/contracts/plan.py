"""Plan contracts: the Epic / Story / Task / Subtask tree produced by the parser."""

from __future__ import annotations

from collections.abc import Iterator
from enum import StrEnum
from typing import ClassVar

from pydantic import BaseModel, Field


class PlanNodeType(StrEnum):
    EPIC = "EPIC"
    STORY = "STORY"
    TASK = "TASK"
    SUBTASK = "SUBTASK"


class PlanNode(BaseModel):
    """Fields shared by every plan node."""

    node_type: ClassVar[PlanNodeType]

    id: str
    summary: str
    description: str = ""
    assignee: str | None = None
    labels: list[str] = Field(default_factory=list)


class Subtask(PlanNode):
    node_type: ClassVar[PlanNodeType] = PlanNodeType.SUBTASK

    estimate: str | None = None


class Task(PlanNode):
    node_type: ClassVar[PlanNodeType] = PlanNodeType.TASK

    estimate: str | None = None
    # Reserved: no markdown syntax populates it yet.
    dependencies: list[str] = Field(default_factory=list)
    subtasks: list[Subtask] = Field(default_factory=list)

    @property
    def story_number(self) -> str:
        """Leading numeric segment of the id (``TASK-1.2`` -> ``1``)."""
        return self.id.removeprefix("TASK-").split(".", 1)[0]


class Story(PlanNode):
    node_type: ClassVar[PlanNodeType] = PlanNodeType.STORY

    priority: str | None = None
    estimate: str | None = None
    tasks: list[Task] = Field(default_factory=list)

    @property
    def number(self) -> str:
        return self.id.removeprefix("STORY-")


class Epic(PlanNode):
    node_type: ClassVar[PlanNodeType] = PlanNodeType.EPIC

    priority: str | None = None


class ParsedPlan(BaseModel):
    """Result of one parser pass: at most one epic plus its stories."""

    epic: Epic | None = None
    stories: list[Story] = Field(default_factory=list)

    def iter_nodes(self) -> Iterator[PlanNode]:
        """Yield every node parent-first, in the order issues must be created."""
        if self.epic is not None:
            yield self.epic
        for story in self.stories:
            yield story
            for task in story.tasks:
                yield task
                yield from task.subtasks

    @property
    def task_count(self) -> int:
        return sum(len(story.tasks) for story in self.stories)

    @property
    def subtask_count(self) -> int:
        return sum(len(task.subtasks) for story in self.stories for task in story.tasks)

    @property
    def issue_count(self) -> int:
        epics = 1 if self.epic is not None else 0
        return epics + len(self.stories) + self.task_count + self.subtask_count
