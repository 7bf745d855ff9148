"""Rich progress bars for issue creation and deletion."""

from __future__ import annotations

from types import TracebackType

from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TaskID, TextColumn, TimeElapsedColumn

from planjira.engine.progress import ImportProgress

_PHASE_COLORS = {"Create": "green", "Delete": "red"}
_FAILED_COLOR = "bold red"


class RichImportProgress(ImportProgress):
    """One bar per phase on stderr; use as a context manager::

        with RichImportProgress() as progress:
            result = await engine.run(plan)
    """

    def __init__(self, console: Console | None = None) -> None:
        self._progress = Progress(
            TextColumn("[{task.fields[color]}]{task.description:>8}"),
            BarColumn(bar_width=30),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            console=console or Console(stderr=True),
        )
        self._phases: dict[str, tuple[TaskID, int | None]] = {}

    def __enter__(self) -> RichImportProgress:
        self._progress.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self._progress.stop()

    def phase_start(self, phase: str, total: int | None = None) -> None:
        task_id = self._progress.add_task(phase, total=total, color=_PHASE_COLORS.get(phase, "white"))
        self._phases[phase] = (task_id, total)

    def item_done(self, phase: str) -> None:
        if phase in self._phases:
            self._progress.advance(self._phases[phase][0])

    def phase_done(self, phase: str) -> None:
        if phase not in self._phases:
            return
        task_id, total = self._phases[phase]
        self._progress.update(task_id, total=total or 1, completed=total or 1)

    def phase_error(self, phase: str, error: BaseException) -> None:
        if phase not in self._phases:
            return
        task_id, _ = self._phases[phase]
        self._progress.update(task_id, color=_FAILED_COLOR)
        self._progress.stop_task(task_id)
