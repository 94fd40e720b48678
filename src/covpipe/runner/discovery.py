"""Unit enumeration and exclusion filtering."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from covpipe.core.errors import DiscoveryError
from covpipe.core.logging import get_logger
from covpipe.toolchain.base import Toolchain

log = get_logger("runner.discovery")


def discover_units(toolchain: Toolchain) -> list[str]:
    """List every testable unit, in the toolchain's order.

    An empty list is a valid answer here; callers decide it is fatal.

    Raises:
        DiscoveryError: If the listing command fails or times out.
    """
    inv = toolchain.list_units()
    if not inv.ok:
        raise DiscoveryError.list_failed(inv.exit_code, inv.stderr)

    units = [line.strip() for line in inv.stdout.splitlines() if line.strip()]
    log.info("units_discovered", count=len(units))
    return units


def partition_units(
    units: Sequence[str], exclusions: Iterable[str]
) -> tuple[list[str], list[str]]:
    """Split units into (included, excluded), both in enumeration order."""
    excluded_set = set(exclusions)
    included = [u for u in units if u not in excluded_set]
    excluded = [u for u in units if u in excluded_set]
    return included, excluded
