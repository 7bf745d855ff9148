"""Cleanup command: delete the issues of one import batch."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from planjira.cli.common import format_history, format_record
from planjira.cli.progress.rich import RichImportProgress
from planjira.contracts.exceptions import ProviderError
from planjira.contracts.imports import CleanupResult
from planjira.engine.progress import ImportProgress, NullImportProgress
from planjira.jira.client import JiraClient

_LOG = logging.getLogger(__name__)

_PHASE = "Delete"


def format_cleanup_summary(result: CleanupResult) -> str:
    deleted = len(result.deleted)
    lines = [
        "",
        "planjira - cleanup complete",
        "",
        f"  Batch ID:  {result.batch_id}",
        f"  Deleted:   {deleted} issue{'s' if deleted != 1 else ''}",
    ]
    if result.failed:
        lines.append(f"  Failed:    {len(result.failed)}")
        for key, message in result.failed.items():
            lines.append(f"    - {key}: {message}")
    lines.append("")
    return "\n".join(lines)


async def delete_issues(
    client: JiraClient, batch_id: str, keys: Sequence[str], progress: ImportProgress | None = None
) -> CleanupResult:
    """Delete *keys* one by one; a failed deletion is recorded and the run goes on."""
    progress = progress or NullImportProgress()
    result = CleanupResult(batch_id=batch_id)
    progress.phase_start(_PHASE, total=len(keys))
    for key in keys:
        try:
            await client.delete_issue(key)
        except ProviderError as exc:
            message = client.redact(str(exc))
            _LOG.warning("Failed to delete %s: %s", key, message)
            result.failed[key] = message
            progress.item_done(_PHASE)
            continue
        _LOG.info("Deleted %s", key)
        result.deleted.append(key)
        progress.item_done(_PHASE)
    progress.phase_done(_PHASE)
    return result


def _batch_from_history(file_path: str, history_path: Path) -> str | None:
    import planjira.cli as cli

    record = cli.load_import_history(history_path).entries.get(file_path)
    if record is None:
        print(f"error: no import history found for file: {file_path}", file=sys.stderr)
        print("Run 'planjira cleanup --list' to see recorded imports.", file=sys.stderr)
        return None

    print(f"\nImport found for: {file_path}")
    print("\n".join(format_record(record)))
    return record.batch_id


async def run_cleanup(args: argparse.Namespace) -> int:
    import planjira.cli as cli

    history_path = Path(args.history)
    if args.list:
        print(format_history(cli.load_import_history(history_path)))
        return 0

    batch_id = args.batch if args.file is None else _batch_from_history(args.file, history_path)
    if not batch_id:
        return 1

    config = cli.resolve_config(args)
    label = cli.batch_label(batch_id)
    print(f"\nSearching for issues with label: {label}")

    async with cli.JiraClient(config) as client:
        issues = await client.search_issues_by_label(label)
        if not issues:
            print("error: no issues found with this batch id", file=sys.stderr)
            return 1

        print(f"\nFound {len(issues)} issue(s):")
        for issue in issues:
            print(f"  - {issue['key']}: {issue.get('fields', {}).get('summary', '')}")

        if not args.yes and not cli.prompts.confirm_deletion(len(issues)):
            print("Deletion cancelled.")
            return 0

        keys = [issue["key"] for issue in issues]
        if args.verbose:
            result = await delete_issues(client, batch_id, keys)
        else:
            with RichImportProgress() as progress:
                result = await delete_issues(client, batch_id, keys, progress)

    print(format_cleanup_summary(result))
    return 0


__all__ = ["delete_issues", "format_cleanup_summary", "run_cleanup"]
