"""Shared CLI formatting helpers."""

from __future__ import annotations

import argparse
from collections.abc import Mapping
from datetime import datetime

from planjira.contracts.config import JiraConfig
from planjira.contracts.imports import ImportHistory, ImportRecord
from planjira.contracts.plan import ParsedPlan, PlanNodeType

_NOUNS = {
    PlanNodeType.EPIC: ("epic", "epics"),
    PlanNodeType.STORY: ("story", "stories"),
    PlanNodeType.TASK: ("task", "tasks"),
    PlanNodeType.SUBTASK: ("subtask", "subtasks"),
}


def format_type_breakdown(counts: Mapping[PlanNodeType, int]) -> str:
    parts: list[str] = []
    for node_type, (singular, plural) in _NOUNS.items():
        count = counts.get(node_type, 0)
        if count:
            parts.append(f"{count} {singular if count == 1 else plural}")
    return ", ".join(parts) if parts else "none"


def format_date(value: datetime) -> str:
    return value.astimezone().strftime("%Y-%m-%d %H:%M:%S")


def format_plan_summary(plan: ParsedPlan, file_path: str) -> str:
    epic = plan.epic.summary if plan.epic is not None else "None"
    lines = [
        "",
        f"planjira - parsed {file_path}",
        "",
        f"  Epic:      {epic}",
        f"  Stories:   {len(plan.stories)}",
        f"  Tasks:     {plan.task_count}",
        f"  Subtasks:  {plan.subtask_count}",
        f"  Total:     {plan.issue_count} issue{'s' if plan.issue_count != 1 else ''}",
        "",
    ]
    return "\n".join(lines)


def format_record(record: ImportRecord, *, indent: str = "  ") -> list[str]:
    return [
        f"{indent}Epic:      {record.epic_key}",
        f"{indent}Date:      {format_date(record.import_date)}",
        f"{indent}Batch:     {record.batch_id}",
        f"{indent}Issues:    {record.issue_count}",
    ]


def format_history(history: ImportHistory) -> str:
    if not history.entries:
        return "\nNo import history found.\n"

    lines = ["", "Recorded imports:", ""]
    for index, (plan_path, record) in enumerate(history.entries.items(), start=1):
        lines.append(f"{index}. {plan_path}")
        lines.extend(format_record(record, indent="   "))
        lines.append("")
    lines.append("To clean up an import:")
    lines.append("  planjira cleanup --batch <batch-id>")
    lines.append("  planjira cleanup --file <plan-path>")
    lines.append("")
    return "\n".join(lines)


def resolve_config(args: argparse.Namespace, *, require_project: bool = False) -> JiraConfig:
    """Read ``--env-file`` for anything not exported, then validate the Jira settings."""
    import planjira.cli as cli

    cli.apply_env_file(args.env_file)
    return cli.load_config(require_project=require_project)
