"""Issue mapping file written after every import run."""

from __future__ import annotations

from pathlib import Path

from planjira.contracts.exceptions import ImportRunError
from planjira.contracts.imports import IssueMapping

DEFAULT_MAPPING_FILE = Path("jira-issue-mapping.json")


def output_mapping_path(*, mapping_path: Path, dry_run: bool) -> Path:
    if not dry_run:
        return mapping_path
    return Path(f"{mapping_path}.dry-run")


def persist_issue_mapping(*, mapping: IssueMapping, mapping_path: Path, dry_run: bool) -> Path:
    path = output_mapping_path(mapping_path=mapping_path, dry_run=dry_run)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(mapping.model_dump_json(indent=2, by_alias=True), encoding="utf-8")
    except OSError as exc:
        raise ImportRunError(f"failed to persist issue mapping: {path}", batch_id=mapping.batch_id) from exc
    return path
