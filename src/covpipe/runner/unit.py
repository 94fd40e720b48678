"""Single-unit test run with coverage."""

from __future__ import annotations

from pathlib import Path

from covpipe.core.logging import get_logger
from covpipe.coverage.models import CoverMode, parse_mode_line, split_header_body
from covpipe.coverage.store import CombinedProfile, scratch_profile
from covpipe.runner.models import UnitOutcome, UnitResult
from covpipe.toolchain.base import Toolchain

log = get_logger("runner.unit")


def run_unit(
    unit: str,
    mode: CoverMode,
    store: CombinedProfile,
    toolchain: Toolchain,
    *,
    scratch_dir: Path | None = None,
) -> UnitResult:
    """Test one unit and merge its coverage body into ``store`` on success.

    The unit's scratch profile is deleted before returning, whatever the
    outcome. Build failures and test failures are both FAILED.

    Raises:
        ResultStoreError: If the body cannot be appended. Never caught here.
    """
    with scratch_profile(scratch_dir) as profile:
        inv = toolchain.test_unit(unit, mode, profile)
        if not inv.ok:
            log.debug(
                "unit_test_failed",
                unit=unit,
                exit_code=inv.exit_code,
                timed_out=inv.timed_out,
                stderr=inv.stderr[-2000:],
            )
            return UnitResult(unit, UnitOutcome.FAILED, inv.duration_sec)

        try:
            text = profile.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            # No profile written: the package has no tests
            return UnitResult(unit, UnitOutcome.EMPTY, inv.duration_sec)

        split = split_header_body(text)
        if not split.ok:
            return UnitResult(unit, UnitOutcome.EMPTY, inv.duration_sec)

        unit_mode = parse_mode_line(split.header)
        if unit_mode is not mode:
            log.warning(
                "profile_mode_mismatch",
                unit=unit,
                expected=mode.value,
                header=split.header,
            )

        store.append(split.body, unit=unit)
        return UnitResult(unit, UnitOutcome.PASSED, inv.duration_sec, split.body_lines)
