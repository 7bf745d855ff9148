from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path

import pytest

from planjira.contracts.exceptions import ConfigError, ImportRunError
from planjira.contracts.imports import ImportHistory, ImportRecord
from planjira.persistence.history import load_import_history, record_import, save_import_history


def _record(batch_id: str = "b1", epic_key: str = "PAY-1") -> ImportRecord:
    return ImportRecord(
        epic_key=epic_key,
        import_date=datetime(2026, 3, 1, 9, 0, tzinfo=UTC),
        batch_id=batch_id,
        issue_count=8,
    )


def test_missing_history_is_empty(tmp_path: Path) -> None:
    assert load_import_history(tmp_path / "missing.json") == ImportHistory()


def test_history_is_stored_with_camel_case_keys(tmp_path: Path) -> None:
    path = tmp_path / "history.json"

    record_import("docs/plan.md", _record(), path)

    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload == {
        "docs/plan.md": {
            "epicKey": "PAY-1",
            "importDate": "2026-03-01T09:00:00Z",
            "batchId": "b1",
            "issueCount": 8,
        }
    }


def test_record_import_replaces_entry_for_same_plan(tmp_path: Path) -> None:
    path = tmp_path / "history.json"
    record_import("docs/plan.md", _record("b1"), path)
    record_import("docs/other.md", _record("b2", "PAY-9"), path)

    history = record_import("docs/plan.md", _record("b3", "PAY-20"), path)

    assert set(history.entries) == {"docs/plan.md", "docs/other.md"}
    assert load_import_history(path).entries["docs/plan.md"].batch_id == "b3"


def test_reads_history_written_by_earlier_tools(tmp_path: Path) -> None:
    path = tmp_path / "history.json"
    path.write_text(
        json.dumps(
            {
                "plan.md": {
                    "epicKey": "PAY-1",
                    "importDate": "2025-01-15T10:30:00.000Z",
                    "batchId": "m5k2x-abc123",
                    "issueCount": 12,
                }
            }
        ),
        encoding="utf-8",
    )

    record = load_import_history(path).entries["plan.md"]

    assert record.epic_key == "PAY-1"
    assert record.batch_id == "m5k2x-abc123"
    assert record.issue_count == 12
    assert record.import_date.year == 2025


@pytest.mark.parametrize("content", ["{not json", '{"plan.md": {"epicKey": "PAY-1"}}', "[]"])
def test_corrupt_history_raises_config_error(tmp_path: Path, content: str) -> None:
    path = tmp_path / "history.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError, match="invalid import history"):
        load_import_history(path)


def test_save_failure_raises_import_error(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")

    with pytest.raises(ImportRunError, match="failed to persist import history"):
        save_import_history(ImportHistory(entries={"plan.md": _record()}), blocker / "history.json")
