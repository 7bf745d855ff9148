"""Issue import pipeline: Epic, then Stories, Tasks and Subtasks."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any

from planjira.contracts.exceptions import AuthenticationError, ImportRunError, ProviderError
from planjira.contracts.imports import ImportResult
from planjira.contracts.plan import ParsedPlan, PlanNode, PlanNodeType
from planjira.engine.progress import ImportProgress, NullImportProgress
from planjira.engine.utils import batch_label
from planjira.jira.client import JiraClient
from planjira.plan.estimates import parse_time_estimate
from planjira.plan.headings import summary_with_plan_id
from planjira.renderers.adf import markdown_to_adf, prepend_audit_trail

_LOG = logging.getLogger(__name__)

_PHASE = "Create"
_DRY_RUN_SUFFIX = "-DRYRUN"

_ISSUE_TYPE_NAMES = {
    PlanNodeType.EPIC: "Epic",
    PlanNodeType.STORY: "Story",
    PlanNodeType.TASK: "Task",
    PlanNodeType.SUBTASK: "Subtask",
}


class ImportEngine:
    """Creates the issues of a parsed plan, parents before children.

    Creation is sequential: every child needs its parent's key.
    """

    def __init__(
        self,
        client: JiraClient | None,
        *,
        project_key: str,
        batch_id: str,
        file_path: str | None = None,
        dry_run: bool = False,
        tasks_as_subtasks: bool = False,
        progress: ImportProgress | None = None,
        timestamp: datetime | None = None,
    ) -> None:
        if client is None and not dry_run:
            raise ValueError("a client is required unless dry_run is set")
        self._client = client
        self._project_key = project_key
        self._batch_id = batch_id
        self._file_path = file_path
        self._dry_run = dry_run
        self._tasks_as_subtasks = tasks_as_subtasks
        self._progress: ImportProgress = progress or NullImportProgress()
        self._timestamp = timestamp
        self._issue_keys: dict[str, str] = {}
        self._items_created = {node_type: 0 for node_type in PlanNodeType}

    async def run(self, plan: ParsedPlan) -> ImportResult:
        self._issue_keys = {}
        self._items_created = {node_type: 0 for node_type in PlanNodeType}

        if plan.epic is None:
            _LOG.warning("No epic found in plan; nothing to import")
            return self._result()

        self._progress.phase_start(_PHASE, total=plan.issue_count)
        try:
            epic_key = await self._create(plan.epic, parent_key=None)
            for story in plan.stories:
                story_key = await self._create(story, parent_key=epic_key)
                for task in story.tasks:
                    task_key = await self._create(task, parent_key=story_key)
                    subtask_parent = story_key if self._tasks_as_subtasks else task_key
                    for subtask in task.subtasks:
                        await self._create(subtask, parent_key=subtask_parent)
            self._progress.phase_done(_PHASE)
        except BaseException as exc:
            self._progress.phase_error(_PHASE, exc)
            raise

        return self._result()

    def build_fields(self, node: PlanNode, parent_key: str | None, assignee_id: str | None = None) -> dict[str, Any]:
        """Jira ``fields`` payload for *node*."""
        if node.node_type is PlanNodeType.EPIC:
            summary = node.summary.strip()
        else:
            summary = summary_with_plan_id(node.id, node.summary) or node.id
        description = markdown_to_adf(node.description)
        if self._file_path:
            description = prepend_audit_trail(description, self._file_path, self._batch_id, self._timestamp)

        fields: dict[str, Any] = {
            "project": {"key": self._project_key},
            "issuetype": {"name": self._issue_type_name(node.node_type)},
            "summary": summary,
            "description": description.to_adf(),
        }
        if parent_key is not None:
            fields["parent"] = {"key": parent_key}

        estimate = parse_time_estimate(getattr(node, "estimate", None))
        if estimate:
            fields["timetracking"] = {"originalEstimate": estimate}

        fields["labels"] = [*node.labels, batch_label(self._batch_id)]
        if assignee_id:
            fields["assignee"] = {"accountId": assignee_id}
        return fields

    async def _create(self, node: PlanNode, *, parent_key: str | None) -> str:
        if self._dry_run:
            fields = self.build_fields(node, parent_key)
            key = f"{node.id}{_DRY_RUN_SUFFIX}"
            _LOG.info("[dry-run] would create %s %s", fields["issuetype"]["name"], node.id)
            _LOG.debug("[dry-run] payload: %s", json.dumps({"fields": fields}, indent=2))
            return self._record(node, key)

        assert self._client is not None
        try:
            assignee_id = await self._client.get_user_by_email(node.assignee) if node.assignee else None
            fields = self.build_fields(node, parent_key, assignee_id)
            created = await self._client.create_issue(fields)
        except AuthenticationError:
            raise
        except ProviderError as exc:
            raise ImportRunError(
                f"failed to create {node.id}: {exc}",
                batch_id=self._batch_id,
                created_issues=self._issue_keys,
            ) from exc

        key = str(created["key"])
        _LOG.info("Created %s %s", key, node.id)
        return self._record(node, key)

    def _record(self, node: PlanNode, key: str) -> str:
        self._issue_keys[node.id] = key
        self._items_created[node.node_type] += 1
        self._progress.item_done(_PHASE)
        return key

    def _issue_type_name(self, node_type: PlanNodeType) -> str:
        if node_type is PlanNodeType.TASK and self._tasks_as_subtasks:
            return _ISSUE_TYPE_NAMES[PlanNodeType.SUBTASK]
        return _ISSUE_TYPE_NAMES[node_type]

    def _result(self) -> ImportResult:
        return ImportResult(
            batch_id=self._batch_id,
            issue_keys=dict(self._issue_keys),
            items_created=dict(self._items_created),
            dry_run=self._dry_run,
        )
