"""Tests for core/progress.py module.

Covers:
- percent_done() helper
- RunProgress in plain and live modes
- suppress_console_logs() context manager
"""

from __future__ import annotations

import sys
from io import StringIO

import pytest
from rich.console import Console

from covpipe.core.progress import (
    RunProgress,
    _is_tty,
    is_console_suppressed,
    percent_done,
    suppress_console_logs,
)


def _plain_console() -> tuple[Console, StringIO]:
    buf = StringIO()
    return Console(file=buf, force_terminal=False, width=80), buf


class TestIsTty:
    def test_false_for_stringio(self) -> None:
        original = sys.stderr
        try:
            sys.stderr = StringIO()
            assert _is_tty() is False
        finally:
            sys.stderr = original


class TestPercentDone:
    @pytest.mark.parametrize(
        ("visited", "total", "expected"),
        [(0, 4, 0), (1, 4, 25), (2, 3, 66), (3, 3, 100), (1, 0, 0)],
    )
    def test_truncates_to_whole_percent(self, visited: int, total: int, expected: int) -> None:
        assert percent_done(visited, total) == expected


class TestRunProgress:
    def test_plain_mode_prints_percentage_lines(self) -> None:
        console, buf = _plain_console()

        with RunProgress(total=4, console=console, live=False) as bar:
            bar.update(1)
            bar.update(4)

        assert buf.getvalue().splitlines() == ["Progress:  25%", "Progress: 100%"]

    def test_explicit_total_overrides_initial(self) -> None:
        console, buf = _plain_console()

        with RunProgress(total=0, console=console, live=False) as bar:
            bar.update(1, 2)

        assert buf.getvalue().strip() == "Progress:  50%"

    def test_live_mode_suppresses_console_logs_while_active(self) -> None:
        console, _ = _plain_console()

        with RunProgress(total=2, console=console, live=True) as bar:
            assert is_console_suppressed() is True
            bar.update(1, 2)

        assert is_console_suppressed() is False

    def test_live_mode_releases_suppression_on_error(self) -> None:
        console, _ = _plain_console()

        with pytest.raises(RuntimeError), RunProgress(total=1, console=console, live=True):
            raise RuntimeError("boom")

        assert is_console_suppressed() is False

    def test_plain_progress_leaves_console_logs_on(self) -> None:
        console, _ = _plain_console()

        with RunProgress(total=2, console=console, live=False):
            assert is_console_suppressed() is False


class TestSuppressConsoleLogs:
    def test_restores_after_block(self) -> None:
        assert is_console_suppressed() is False
        with suppress_console_logs():
            assert is_console_suppressed() is True
        assert is_console_suppressed() is False

