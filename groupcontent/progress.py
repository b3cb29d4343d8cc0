"""progress and console output for batch rendering."""

from typing import Optional

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    ProgressColumn,
    SpinnerColumn,
    TaskID,
    TextColumn,
)


class ProgressHandler:
    """reports batch progress on stderr: a spinner while discovering, then a bar."""

    def __init__(self, quiet: bool = False, show_progress: bool = False) -> None:
        self.quiet = quiet
        self.show_progress = show_progress
        self._console = Console(stderr=True)
        self._progress: Optional[Progress] = None
        self._task_id: Optional[TaskID] = None
        self._total = 0

    def __enter__(self) -> "ProgressHandler":
        return self

    def __exit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[BaseException],
        exc_tb: Optional[object],
    ) -> None:
        self._stop()

    def _stop(self) -> None:
        if self._progress is not None:
            self._progress.stop()
            self._progress = None

    def _restart(self, *columns: ProgressColumn) -> Progress:
        """replaces the running display with a new one."""
        self._stop()
        progress = Progress(*columns, console=self._console, transient=True)
        progress.start()
        self._progress = progress
        return progress

    def start_discovery(self) -> None:
        """shows a spinner while source files are located."""
        if not self.show_progress:
            return

        progress = self._restart(
            SpinnerColumn(), TextColumn("[progress.description]{task.description}")
        )
        self._task_id = progress.add_task("Discovering entities...", total=None)

    def set_total(self, total: int) -> None:
        """switches to a determinate bar over total entities."""
        if not self.show_progress:
            return

        progress = self._restart(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TextColumn("- {task.fields[label]}"),
        )
        self._task_id = progress.add_task("Rendering", total=total, label="")
        self._total = total

    def adjust_total(self, delta: int) -> None:
        """grows the total when a file turns out to hold several entities."""
        if not self.show_progress or self._progress is None or self._task_id is None:
            return

        self._total += delta
        self._progress.update(self._task_id, total=self._total)

    def update(self, label: str) -> None:
        """advances by one entity."""
        if not self.show_progress or self._progress is None or self._task_id is None:
            return

        self._progress.update(self._task_id, advance=1, label=label)

    def log_error(self, message: str) -> None:
        """prints an error, even in quiet mode."""
        self._console.print(f"[red]ERROR:[/red] {message}")

    def log_info(self, message: str) -> None:
        """prints a message unless quiet or a progress display is active."""
        if self.quiet or self.show_progress:
            return

        self._console.print(message)

    def finish(self, rendered: int, failed: int) -> None:
        """stops the display and prints a summary unless quiet."""
        self._stop()

        if self.quiet:
            return

        total = rendered + failed
        self._console.print(
            f"Processed {total} entit{'y' if total == 1 else 'ies'}: "
            f"{rendered} rendered, {failed} failed"
        )
