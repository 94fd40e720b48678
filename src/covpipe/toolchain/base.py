"""Toolchain protocol and invocation result."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from covpipe.coverage.models import CoverMode


@dataclass(frozen=True, slots=True)
class Invocation:
    """Outcome of one external tool invocation.

    Spawn failures and timeouts are folded in here (``exit_code`` -1) rather
    than raised, so callers classify every invocation the same way.
    """

    argv: tuple[str, ...]
    exit_code: int
    stdout: str = ""
    stderr: str = ""
    timed_out: bool = False
    duration_sec: float = 0.0

    @property
    def ok(self) -> bool:
        return self.exit_code == 0 and not self.timed_out


class Toolchain(Protocol):
    """Black-box build/test toolchain.

    Each method runs one blocking external command and reports its outcome.
    """

    def list_units(self) -> Invocation:
        """Enumerate testable units, one identifier per stdout line."""
        ...

    def test_unit(self, unit: str, mode: CoverMode, profile: Path) -> Invocation:
        """Run ``unit``'s tests with coverage at ``mode``, writing ``profile``."""
        ...

    def cover_func(self, profile: Path) -> Invocation:
        """Summarize a coverage profile per function, ending with a total line."""
        ...
