"""Persistence helpers for import history and issue mappings."""

from planjira.persistence.history import (
    DEFAULT_HISTORY_FILE,
    load_import_history,
    record_import,
    save_import_history,
)
from planjira.persistence.mapping import DEFAULT_MAPPING_FILE, output_mapping_path, persist_issue_mapping

__all__ = [
    "DEFAULT_HISTORY_FILE",
    "DEFAULT_MAPPING_FILE",
    "load_import_history",
    "output_mapping_path",
    "persist_issue_mapping",
    "record_import",
    "save_import_history",
]
