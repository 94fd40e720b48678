"""User-facing progress feedback for CLI runs.

Design principles:
- Everything goes to stderr; stdout carries only the summary line
- Single line updates, no spam
- Graceful degradation in non-TTY (CI, pipes)
- Suppress structlog console output during live displays

Usage::

    from covpipe.core.progress import RunProgress

    with RunProgress(total=len(units)) as bar:
        for i, unit in enumerate(units, start=1):
            run(unit)
            bar.update(i, len(units))
"""

from __future__ import annotations

import sys
import threading
from collections.abc import Iterator
from contextlib import ExitStack, contextmanager
from types import TracebackType

from rich.console import Console
from rich.progress import BarColumn, Progress, TaskID, TaskProgressColumn, TextColumn

_console = Console(stderr=True)

_suppress_console_logs = threading.local()


def is_console_suppressed() -> bool:
    """Check if console logging is currently suppressed."""
    return getattr(_suppress_console_logs, "active", False)


@contextmanager
def suppress_console_logs() -> Iterator[None]:
    """Suppress structlog console output while a live display owns the terminal.

    Logs are still written to file handlers.
    """
    _suppress_console_logs.active = True
    try:
        yield
    finally:
        _suppress_console_logs.active = False


def _is_tty() -> bool:
    """Check if stderr is a TTY."""
    return hasattr(sys.stderr, "isatty") and sys.stderr.isatty()


def percent_done(visited: int, total: int) -> int:
    """Whole-number percentage of ``visited`` out of ``total`` (0 when total is 0)."""
    if total <= 0:
        return 0
    return int(100 * visited / total)


class RunProgress:
    """Progress indicator for a pipeline run.

    On a TTY this is a transient rich progress bar; elsewhere each update
    prints a ``Progress:  NN%`` line. Purely observational: callers feed it
    positions, it never feeds anything back.
    """

    def __init__(self, total: int, *, console: Console | None = None, live: bool | None = None):
        self._total = total
        self._console = console or _console
        self._live = _is_tty() if live is None else live
        self._progress: Progress | None = None
        self._task_id: TaskID | None = None
        self._stack = ExitStack()

    def update(self, visited: int, total: int | None = None) -> None:
        """Report that ``visited`` units of ``total`` have been walked past."""
        total = self._total if total is None else total
        if self._progress is not None and self._task_id is not None:
            self._progress.update(self._task_id, completed=visited, total=total)
            return
        self._console.print(f"Progress: {percent_done(visited, total):3d}%", highlight=False)

    def __enter__(self) -> RunProgress:
        if self._live:
            self._stack.enter_context(suppress_console_logs())
            self._progress = self._stack.enter_context(
                Progress(
                    TextColumn("    {task.description}:"),
                    BarColumn(bar_width=25, style="cyan", complete_style="cyan"),
                    TaskProgressColumn(),
                    console=self._console,
                    transient=True,
                )
            )
            self._task_id = self._progress.add_task("Testing", total=self._total)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self._progress = None
        self._task_id = None
        self._stack.__exit__(exc_type, exc_val, exc_tb)
