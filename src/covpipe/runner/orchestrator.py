"""Sequential, partial-failure-tolerant loop over all units."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from pathlib import Path

from covpipe.core.logging import get_logger
from covpipe.coverage.models import CoverMode
from covpipe.coverage.store import CombinedProfile
from covpipe.runner.models import RunTally
from covpipe.runner.unit import run_unit
from covpipe.toolchain.base import Toolchain

log = get_logger("runner.orchestrator")

ProgressCallback = Callable[[int, int], None]
"""Called as ``(visited, total)`` with positions in the pre-filter unit list."""


def orchestrate(
    units: Sequence[str],
    exclusions: Iterable[str],
    mode: CoverMode,
    store: CombinedProfile,
    toolchain: Toolchain,
    *,
    on_progress: ProgressCallback | None = None,
    scratch_dir: Path | None = None,
) -> RunTally:
    """Test every non-excluded unit in order and fold the outcomes.

    Excluded units are skipped without touching the toolchain or the tally.
    No per-unit outcome stops the loop; only a ResultStoreError escapes.

    Progress is reported against the pre-filter total, so with exclusions the
    percentage advances in uneven steps.
    """
    excluded = set(exclusions)
    total = len(units)
    tally = RunTally()

    for index, unit in enumerate(units, start=1):
        if unit in excluded:
            log.debug("unit_skipped", unit=unit)
            continue

        result = run_unit(unit, mode, store, toolchain, scratch_dir=scratch_dir)
        tally.record(result)
        log.info(
            "unit_result",
            unit=unit,
            outcome=result.outcome.value,
            elapsed_s=round(result.duration_sec, 3),
        )

        if on_progress is not None:
            _emit_progress(on_progress, index, total)

    return tally


def _emit_progress(callback: ProgressCallback, visited: int, total: int) -> None:
    try:
        callback(visited, total)
    except Exception as e:  # noqa: BLE001
        # Observational only: a broken display must not change the run
        log.debug("progress_callback_failed", error=str(e))
