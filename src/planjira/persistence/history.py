"""Import history: which plan files were already imported, and as which batch."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from planjira.contracts.exceptions import ConfigError, ImportRunError
from planjira.contracts.imports import ImportHistory, ImportRecord

DEFAULT_HISTORY_FILE = Path(".jira-import-history.json")


def load_import_history(history_path: Path = DEFAULT_HISTORY_FILE) -> ImportHistory:
    """Read the history file; a missing file is an empty history."""
    if not history_path.exists():
        return ImportHistory()
    try:
        payload: Any = json.loads(history_path.read_text(encoding="utf-8"))
        return ImportHistory.model_validate({"entries": payload})
    except (OSError, json.JSONDecodeError, ValidationError) as exc:
        raise ConfigError(f"invalid import history file: {history_path}") from exc


def save_import_history(history: ImportHistory, history_path: Path = DEFAULT_HISTORY_FILE) -> None:
    payload = {
        plan_path: record.model_dump(mode="json", by_alias=True) for plan_path, record in history.entries.items()
    }
    try:
        history_path.parent.mkdir(parents=True, exist_ok=True)
        history_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    except OSError as exc:
        raise ImportRunError(f"failed to persist import history: {history_path}") from exc


def record_import(
    plan_path: str, record: ImportRecord, history_path: Path = DEFAULT_HISTORY_FILE
) -> ImportHistory:
    """Add or replace the entry for *plan_path* and write the history back."""
    history = load_import_history(history_path)
    history.entries[plan_path] = record
    save_import_history(history, history_path)
    return history
