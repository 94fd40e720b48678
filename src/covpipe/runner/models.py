"""Pipeline run models.

Per-unit outcomes, the orchestrator's tally, and the final run summary.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from covpipe.runner.report import format_summary, tested_fraction


class UnitOutcome(StrEnum):
    """Classification of one unit's test run.

    - passed: tests ran and produced a non-empty coverage body
    - failed: the toolchain exited non-zero (build or test failure, or timeout)
    - empty: tests succeeded but left no coverage body (no tests present)
    """

    PASSED = "passed"
    FAILED = "failed"
    EMPTY = "empty"


@dataclass(frozen=True, slots=True)
class UnitResult:
    """Outcome of one attempted unit."""

    unit: str
    outcome: UnitOutcome
    duration_sec: float = 0.0
    body_lines: int = 0


@dataclass(slots=True)
class RunTally:
    """Aggregate counters folded over attempted units.

    ``passed`` starts true and only ever flips to false.
    """

    passed: bool = True
    empty: int = 0
    attempted: int = 0
    results: list[UnitResult] = field(default_factory=list)

    def record(self, result: UnitResult) -> None:
        self.attempted += 1
        self.results.append(result)
        match result.outcome:
            case UnitOutcome.PASSED:
                pass
            case UnitOutcome.FAILED:
                self.passed = False
            case UnitOutcome.EMPTY:
                self.empty += 1

    @property
    def failed_units(self) -> list[str]:
        return [r.unit for r in self.results if r.outcome is UnitOutcome.FAILED]


@dataclass(frozen=True, slots=True)
class RunSummary:
    """Final, immutable result of a completed run."""

    passed: bool
    coverage: float
    empty: int
    attempted: int
    excluded: tuple[str, ...] = ()
    results: tuple[UnitResult, ...] = ()

    @property
    def status(self) -> str:
        return "passed" if self.passed else "failed"

    @property
    def tested_fraction(self) -> float:
        return tested_fraction(self.empty, self.attempted)

    def line(self) -> str:
        return format_summary(self.passed, self.coverage, self.empty, self.attempted)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for ``--json`` output."""
        return {
            "status": self.status,
            "coverage": self.coverage,
            "packages_tested": self.attempted,
            "packages_without_tests": self.empty,
            "packages_with_tests": round(100 * self.tested_fraction, 1),
            "excluded": list(self.excluded),
            "failed": [r.unit for r in self.results if r.outcome is UnitOutcome.FAILED],
        }
