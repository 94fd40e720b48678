"""Final status line."""

from __future__ import annotations

from covpipe.core.formatting import format_percent


def tested_fraction(empty: int, attempted: int) -> float:
    """Fraction of attempted units that had any tests.

    Raises:
        ValueError: If ``attempted`` is not positive; the fraction is undefined.
    """
    if attempted <= 0:
        raise ValueError(f"tested fraction needs at least one attempted unit, got {attempted}")
    return 1 - empty / attempted


def format_summary(passed: bool, coverage: float, empty: int, attempted: int) -> str:
    """``status: passed, coverage: 80.0%, packages with tests: 50.0%``"""
    status = "passed" if passed else "failed"
    with_tests = 100 * tested_fraction(empty, attempted)
    return (
        f"status: {status}, coverage: {format_percent(coverage)}, "
        f"packages with tests: {format_percent(with_tests)}"
    )
