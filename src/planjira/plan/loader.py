"""Plan loading from markdown files."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from planjira.contracts.exceptions import PlanLoadError
from planjira.contracts.plan import ParsedPlan
from planjira.plan.parser import PlanParser


@dataclass(frozen=True)
class LoadedPlan:
    """Plan text as read from disk together with its parsed tree."""

    path: Path
    text: str
    plan: ParsedPlan


class PlanLoader:
    """Read a markdown plan file and parse it."""

    def __init__(self, parser: PlanParser | None = None) -> None:
        self._parser = parser or PlanParser()

    def load(self, path: str | Path) -> LoadedPlan:
        plan_path = Path(path)
        text = self._read_text(plan_path)
        return LoadedPlan(path=plan_path, text=text, plan=self._parser.parse(text))

    @staticmethod
    def _read_text(path: Path) -> str:
        if not path.exists():
            raise PlanLoadError(f"plan file not found: {path}")
        if not path.is_file():
            raise PlanLoadError(f"plan path is not a file: {path}")
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise PlanLoadError(f"failed reading plan file: {path}") from exc


def load_plan(path: str | Path) -> LoadedPlan:
    return PlanLoader().load(path)
