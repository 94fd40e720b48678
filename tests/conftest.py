"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages, and
provides a scriptable stand-in for the go toolchain.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path

import pytest

# Insert local src directory at the beginning of sys.path
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

from covpipe.coverage.models import CoverMode, header_line  # noqa: E402
from covpipe.toolchain.base import Invocation  # noqa: E402

# Profile bodies with known statement counts:
# A covers 4 of 5 statements (80%), B covers 1 of 2 (50%).
BODY_A = "example.com/m/a/a.go:3.1,5.2 4 1\nexample.com/m/a/a.go:7.1,9.2 1 0\n"
BODY_B = "example.com/m/b/b.go:1.1,2.2 1 1\nexample.com/m/b/b.go:3.1,4.2 1 0\n"
# Written by units that then fail; must never reach the combined profile.
FAILED_BODY = "example.com/m/x/x.go:1.1,2.2 3 1\n"


def fake_cover_output(profile_text: str) -> str:
    """Mimic ``go tool cover -func`` by totalling block statements."""
    total = covered = 0
    for line in profile_text.splitlines()[1:]:
        parts = line.split()
        if len(parts) != 3:
            continue
        stmts, count = int(parts[1]), int(parts[2])
        total += stmts
        if count > 0:
            covered += stmts
    percent = 100 * covered / total if total else 0.0
    return f"example.com/m/a/a.go:3:\tFoo\t\t100.0%\ntotal:\t\t\t\t(statements)\t{percent:.1f}%\n"


@dataclass
class FakeToolchain:
    """Toolchain double driven by a per-unit script.

    ``behaviour`` maps unit -> one of:

    - "fail": non-zero exit, no profile
    - "fail_with_profile": writes a full profile, then exits non-zero
    - "timeout": writes a partial profile, then reports a timeout
    - "empty": exits zero without writing a profile
    - "header_only": writes just the header
    - text starting with "mode:": written verbatim as the whole profile
    - anything else: a body, written after the header for the requested mode
    """

    units: list[str] = field(default_factory=list)
    behaviour: dict[str, str] = field(default_factory=dict)
    list_exit_code: int = 0
    cover_exit_code: int = 0
    cover_stdout: str | None = None
    tested: list[str] = field(default_factory=list)
    profiles_seen: list[Path] = field(default_factory=list)
    covered_profile_text: str | None = None

    def list_units(self) -> Invocation:
        stdout = "".join(f"{u}\n" for u in self.units)
        return Invocation(argv=("go", "list", "./..."), exit_code=self.list_exit_code, stdout=stdout)

    def test_unit(self, unit: str, mode: CoverMode, profile: Path) -> Invocation:
        self.tested.append(unit)
        self.profiles_seen.append(profile)
        argv = ("go", "test", f"-coverprofile={profile}", f"-covermode={mode.value}", unit)
        action = self.behaviour.get(unit, "empty")
        if action == "fail":
            return Invocation(argv=argv, exit_code=1, stderr="--- FAIL: TestX")
        if action == "fail_with_profile":
            profile.write_text(header_line(mode) + FAILED_BODY)
            return Invocation(argv=argv, exit_code=1, stderr="--- FAIL: TestX")
        if action == "timeout":
            profile.write_text(header_line(mode) + FAILED_BODY)
            return Invocation(argv=argv, exit_code=-1, stderr="timed out after 5s", timed_out=True)
        if action == "header_only":
            profile.write_text(header_line(mode))
        elif action.startswith("mode:"):
            profile.write_text(action)
        elif action != "empty":
            profile.write_text(header_line(mode) + action)
        return Invocation(argv=argv, exit_code=0, duration_sec=0.01)

    def cover_func(self, profile: Path) -> Invocation:
        argv = ("go", "tool", "cover", f"-func={profile}")
        if self.cover_exit_code != 0:
            return Invocation(argv=argv, exit_code=self.cover_exit_code, stderr="cover: bad profile")
        text = profile.read_text()
        self.covered_profile_text = text
        stdout = self.cover_stdout if self.cover_stdout is not None else fake_cover_output(text)
        return Invocation(argv=argv, exit_code=0, stdout=stdout)


@pytest.fixture
def fake_toolchain() -> FakeToolchain:
    return FakeToolchain()


@pytest.fixture
def go_module(tmp_path: Path) -> Path:
    """A directory that looks like a Go module root."""
    root = tmp_path / "mod"
    root.mkdir()
    (root / "go.mod").write_text("module example.com/m\n\ngo 1.21\n")
    return root
