"""Combined coverage percentage via the report tool.

``go tool cover -func`` prints one line per function and ends with::

    total:                          (statements)    80.0%

Only that last line is read; computing coverage is the tool's job.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import TYPE_CHECKING

from covpipe.core.errors import SummaryParseError, SummaryUnavailable
from covpipe.core.logging import get_logger

if TYPE_CHECKING:
    from covpipe.toolchain.base import Toolchain

log = get_logger("coverage.summary")

TOTAL_PATTERN = re.compile(r"total:[ \t]+\([a-z]+\)[ \t]+(?P<percent>[0-9]*\.[0-9]*)")


def last_nonempty_line(output: str) -> str:
    for line in reversed(output.splitlines()):
        if line.strip():
            return line
    return ""


def parse_total_line(output: str) -> float:
    """Extract the total percentage from report tool output.

    Raises:
        SummaryParseError: If the last non-empty line has no total, or the
            percentage is not a number.
    """
    line = last_nonempty_line(output)
    match = TOTAL_PATTERN.search(line)
    if match is None:
        raise SummaryParseError.no_total_line(line)

    value = match.group("percent")
    try:
        return float(value)
    except ValueError as e:
        # The pattern admits a lone "."
        raise SummaryParseError.bad_percent(value) from e


def summarize_profile(path: Path, toolchain: Toolchain) -> float:
    """Run the report tool over a completed combined profile.

    Raises:
        SummaryUnavailable: If the tool exits non-zero or times out.
        SummaryParseError: If its output has no usable total line.
    """
    inv = toolchain.cover_func(path)
    if not inv.ok:
        raise SummaryUnavailable.tool_failed(inv.exit_code, inv.stderr, timed_out=inv.timed_out)

    coverage = parse_total_line(inv.stdout)
    log.info("summary_computed", coverage=coverage, profile=str(path))
    return coverage
