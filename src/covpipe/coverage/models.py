"""Go coverage profile format.

Go test produces coverage profiles with format:
mode: set|count|atomic
<package>/<file>:<startline>.<startcol>,<endline>.<endcol> <numstmt> <count>

Example:
mode: set
github.com/user/pkg/main.go:10.2,12.16 3 1
github.com/user/pkg/main.go:15.2,20.16 5 0

Only the header line is interpreted here. Block records are an opaque body
owned by the toolchain; they are concatenated, never parsed.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

MODE_PREFIX = "mode:"


class CoverMode(StrEnum):
    """Statement hit-counting strategy, fixed for a whole run."""

    SET = "set"  # 0/1
    ATOMIC = "atomic"  # thread-safe count
    COUNT = "count"  # hit count


def header_line(mode: CoverMode) -> str:
    """Profile header for ``mode``, newline included."""
    return f"{MODE_PREFIX} {mode.value}\n"


def parse_mode_line(header: str) -> CoverMode | None:
    """Read the mode out of a ``mode: <mode>`` header line.

    Returns None when the line is not a header or names an unknown mode.
    """
    line = header.strip()
    if not line.startswith(MODE_PREFIX):
        return None
    try:
        return CoverMode(line[len(MODE_PREFIX) :].strip())
    except ValueError:
        return None


@dataclass(frozen=True, slots=True)
class ProfileSplit:
    """A unit profile cut into its header line and its body."""

    header: str
    body: str
    ok: bool

    @property
    def body_lines(self) -> int:
        return len(self.body.splitlines())


def split_header_body(text: str) -> ProfileSplit:
    """Split a profile at the first line boundary.

    The first line is the unit's own mode header; everything after it is the
    body. ``ok`` is False when there is no second segment or it is empty,
    i.e. the unit produced no coverage records.
    """
    header, sep, body = text.partition("\n")
    if not sep or not body:
        return ProfileSplit(header=header, body="", ok=False)
    return ProfileSplit(header=header, body=body, ok=True)
