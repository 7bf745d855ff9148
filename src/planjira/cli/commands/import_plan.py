"""Import command: parse a plan and create its issues."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from datetime import UTC, datetime
from pathlib import Path

from planjira.cli.common import format_plan_summary, format_record, format_type_breakdown
from planjira.cli.progress.rich import RichImportProgress
from planjira.cli.prompts import ReimportAction
from planjira.config import ENV_PROJECT_KEY
from planjira.contracts.exceptions import ImportRunError
from planjira.contracts.imports import ImportRecord, ImportResult, IssueMapping
from planjira.contracts.plan import ParsedPlan
from planjira.jira.client import JiraClient
from planjira.persistence import output_mapping_path

_LOG = logging.getLogger(__name__)

_DRY_RUN_PROJECT = "DRYRUN"


def format_import_summary(result: ImportResult, *, mapping_path: Path, updated_file: Path | None = None) -> str:
    mode = "dry-run" if result.dry_run else "create"
    total = len(result.issue_keys)
    lines = [
        "",
        f"planjira - import complete ({mode})",
        "",
        f"  Batch ID:  {result.batch_id}",
        f"  Epic:      {result.epic_key or 'none'}",
        f"  Created:   {total} ({format_type_breakdown(result.items_created)})",
        f"  Mapping:   {output_mapping_path(mapping_path=mapping_path, dry_run=result.dry_run)}",
    ]
    if updated_file is not None:
        lines.append(f"  Plan file: {updated_file} (links added)")

    lines.append("")
    if result.dry_run:
        lines.append("  [dry-run] No issues were created")
    elif total:
        lines.append("  To clean up this import if needed:")
        lines.append(f"    planjira cleanup --batch {result.batch_id}")
    lines.append("")
    return "\n".join(lines)


def _confirm_reimport(file_path: str, history_path: Path) -> bool:
    import planjira.cli as cli

    record = cli.load_import_history(history_path).entries.get(file_path)
    if record is None:
        return True

    print("\nThis plan was already imported:")
    print("\n".join(format_record(record)))
    return cli.prompts.choose_reimport_action() is not ReimportAction.SKIP


def _dry_run_project_key(args: argparse.Namespace) -> str:
    import planjira.cli as cli

    cli.apply_env_file(args.env_file)
    return (os.environ.get(ENV_PROJECT_KEY) or "").strip() or _DRY_RUN_PROJECT


async def _run_engine(
    args: argparse.Namespace,
    plan: ParsedPlan,
    client: JiraClient | None,
    *,
    project_key: str,
    batch_id: str,
    timestamp: datetime,
) -> ImportResult:
    import planjira.cli as cli

    options = {
        "project_key": project_key,
        "batch_id": batch_id,
        "file_path": args.file,
        "dry_run": args.dry_run,
        "tasks_as_subtasks": args.tasks_as_subtasks,
        "timestamp": timestamp,
    }
    if args.verbose:
        return await cli.ImportEngine(client, **options).run(plan)
    with RichImportProgress() as progress:
        return await cli.ImportEngine(client, progress=progress, **options).run(plan)


def _report_partial_import(exc: ImportRunError) -> None:
    if not exc.created_issues:
        return
    print(f"\nIssues created before the failure ({len(exc.created_issues)}):", file=sys.stderr)
    for item_id, key in exc.created_issues.items():
        print(f"  {item_id}: {key}", file=sys.stderr)
    if exc.batch_id:
        print(f"\nRemove them with: planjira cleanup --batch {exc.batch_id}", file=sys.stderr)


def _update_plan_file(path: Path, text: str, result: ImportResult, base_url: str) -> Path:
    import planjira.cli as cli

    try:
        path.write_text(cli.inject_links(text, result.issue_keys, base_url), encoding="utf-8")
    except OSError as exc:
        raise ImportRunError(f"failed to update plan file: {path}", batch_id=result.batch_id) from exc
    return path


async def run_import(args: argparse.Namespace) -> int:
    import planjira.cli as cli

    loaded = cli.load_plan(args.file)
    print(format_plan_summary(loaded.plan, args.file))

    if not (args.dry_run or args.create):
        print("Run with --dry-run to preview, or --create to create the issues.")
        return 0
    if args.update_file and args.dry_run:
        _LOG.warning("--update-file has no effect with --dry-run")

    history_path = Path(args.history)
    mapping_path = Path(args.mapping)
    config = cli.resolve_config(args, require_project=True) if args.create else None

    if config is not None and not args.force and not _confirm_reimport(args.file, history_path):
        print("Import cancelled.")
        return 0

    batch_id = cli.generate_batch_id()
    timestamp = datetime.now(UTC)
    print(f"Batch ID: {batch_id}")
    if args.tasks_as_subtasks:
        print("Plan Tasks and Subtasks will be created as Sub-tasks under each Story.")

    try:
        if config is not None:
            assert config.project_key is not None
            async with cli.JiraClient(config) as client:
                result = await _run_engine(
                    args, loaded.plan, client, project_key=config.project_key, batch_id=batch_id, timestamp=timestamp
                )
        else:
            result = await _run_engine(
                args,
                loaded.plan,
                None,
                project_key=_dry_run_project_key(args),
                batch_id=batch_id,
                timestamp=timestamp,
            )
    except ImportRunError as exc:
        _report_partial_import(exc)
        raise

    cli.persist_issue_mapping(
        mapping=IssueMapping(batch_id=batch_id, created_at=timestamp, file_path=args.file, issues=result.issue_keys),
        mapping_path=mapping_path,
        dry_run=result.dry_run,
    )

    updated_file: Path | None = None
    if config is not None and result.epic_key is not None:
        cli.record_import(
            args.file,
            ImportRecord(
                epic_key=result.epic_key,
                import_date=timestamp,
                batch_id=batch_id,
                issue_count=len(result.issue_keys),
            ),
            history_path,
        )
        if args.update_file:
            updated_file = _update_plan_file(loaded.path, loaded.text, result, config.base_url)

    print(format_import_summary(result, mapping_path=mapping_path, updated_file=updated_file))
    return 0


__all__ = ["format_import_summary", "run_import"]
