"""End-to-end run: discover, test, merge, summarize.

Fatal conditions surface as CovPipeError subclasses; per-unit outcomes never
do. The combined profile is removed when the run ends, unless the caller
asked to keep it.
"""

from __future__ import annotations

import contextlib
import shutil
import tempfile
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

from covpipe.config.constants import COMBINED_PROFILE_NAME, RUN_DIR_PREFIX
from covpipe.core.errors import DiscoveryError
from covpipe.core.logging import get_logger
from covpipe.coverage.models import CoverMode
from covpipe.coverage.store import CombinedProfile
from covpipe.coverage.summary import summarize_profile
from covpipe.runner.discovery import discover_units, partition_units
from covpipe.runner.models import RunSummary
from covpipe.runner.orchestrator import ProgressCallback, orchestrate
from covpipe.toolchain.base import Toolchain

log = get_logger("runner.pipeline")


@dataclass(frozen=True, slots=True)
class RunOptions:
    """Per-run choices, resolved from config and CLI options."""

    mode: CoverMode = CoverMode.SET
    exclusions: frozenset[str] = field(default_factory=frozenset)
    # Keep the combined profile here instead of deleting it
    profile_path: Path | None = None


@contextlib.contextmanager
def _run_dir() -> Iterator[Path]:
    path = Path(tempfile.mkdtemp(prefix=RUN_DIR_PREFIX))
    try:
        yield path
    finally:
        shutil.rmtree(path, ignore_errors=True)


def run_pipeline(
    toolchain: Toolchain,
    options: RunOptions,
    *,
    on_progress: ProgressCallback | None = None,
    root: Path | None = None,
) -> RunSummary:
    """Run every unit's tests with coverage and summarize the merged profile.

    Raises:
        DiscoveryError: Listing failed, found nothing, or everything is excluded.
        ResultStoreError: The combined profile cannot be created or written.
        SummaryUnavailable: The report tool failed.
        SummaryParseError: The report tool's total line is missing or malformed.
    """
    units = discover_units(toolchain)
    if not units:
        raise DiscoveryError.no_units(str(root or Path.cwd()))

    included, excluded = partition_units(units, options.exclusions)
    if not included:
        raise DiscoveryError.all_excluded(excluded)
    for unit in sorted(options.exclusions - set(units)):
        log.warning("exclusion_matches_nothing", unit=unit)

    with _run_dir() as run_dir:
        profile_path = options.profile_path or run_dir / COMBINED_PROFILE_NAME
        store = CombinedProfile.create(profile_path, options.mode)
        keep = options.profile_path is not None
        try:
            tally = orchestrate(
                units,
                options.exclusions,
                options.mode,
                store,
                toolchain,
                on_progress=on_progress,
                scratch_dir=run_dir,
            )
            store.close()
            log.info(
                "profile_merged",
                units=store.units_merged,
                body_lines=store.body_lines,
                path=str(profile_path),
            )
            coverage = summarize_profile(profile_path, toolchain)
        except BaseException:
            keep = False
            raise
        finally:
            if keep:
                store.close()
            else:
                store.discard()

    return RunSummary(
        passed=tally.passed,
        coverage=coverage,
        empty=tally.empty,
        attempted=tally.attempted,
        excluded=tuple(excluded),
        results=tuple(tally.results),
    )
