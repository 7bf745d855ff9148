"""Import run, history, and cleanup contracts."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from planjira.contracts.plan import PlanNodeType


class ImportRecord(BaseModel):
    """One history entry; stored with camelCase keys."""

    model_config = {"alias_generator": to_camel, "populate_by_name": True}

    epic_key: str
    import_date: datetime
    batch_id: str
    issue_count: int


class ImportHistory(BaseModel):
    entries: dict[str, ImportRecord] = Field(default_factory=dict)


class IssueMapping(BaseModel):
    model_config = {"alias_generator": to_camel, "populate_by_name": True}

    batch_id: str
    created_at: datetime
    file_path: str | None = None
    issues: dict[str, str] = Field(default_factory=dict)


class ImportResult(BaseModel):
    batch_id: str
    issue_keys: dict[str, str] = Field(default_factory=dict)
    items_created: dict[PlanNodeType, int] = Field(default_factory=dict)
    dry_run: bool = False

    @property
    def epic_key(self) -> str | None:
        for item_id, key in self.issue_keys.items():
            if item_id.startswith("EPIC"):
                return key
        return None


class CleanupResult(BaseModel):
    batch_id: str
    deleted: list[str] = Field(default_factory=list)
    failed: dict[str, str] = Field(default_factory=dict)
