"""Test orchestration pipeline.

discover_units -> partition_units -> orchestrate (run_unit per unit)
-> summarize_profile -> RunSummary.line()
"""

from covpipe.runner.discovery import discover_units, partition_units
from covpipe.runner.models import RunSummary, RunTally, UnitOutcome, UnitResult
from covpipe.runner.orchestrator import orchestrate
from covpipe.runner.pipeline import RunOptions, run_pipeline
from covpipe.runner.report import format_summary, tested_fraction
from covpipe.runner.unit import run_unit

__all__ = [
    "RunOptions",
    "RunSummary",
    "RunTally",
    "UnitOutcome",
    "UnitResult",
    "discover_units",
    "format_summary",
    "orchestrate",
    "partition_units",
    "run_pipeline",
    "run_unit",
    "tested_fraction",
]
