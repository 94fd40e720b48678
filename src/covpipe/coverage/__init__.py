"""Coverage profile handling: format, merge store, and summary.

Usage:
    from covpipe.coverage import CombinedProfile, CoverMode, split_header_body

    with CombinedProfile.create(path, CoverMode.SET) as profile:
        split = split_header_body(unit_profile_text)
        if split.ok:
            profile.append(split.body, unit=unit)

    percent = summarize_profile(path, toolchain)
"""

from covpipe.coverage.models import (
    CoverMode,
    ProfileSplit,
    header_line,
    parse_mode_line,
    split_header_body,
)
from covpipe.coverage.store import CombinedProfile, scratch_profile
from covpipe.coverage.summary import (
    TOTAL_PATTERN,
    last_nonempty_line,
    parse_total_line,
    summarize_profile,
)

__all__ = [
    # Models
    "CoverMode",
    "ProfileSplit",
    "header_line",
    "parse_mode_line",
    "split_header_body",
    # Store
    "CombinedProfile",
    "scratch_profile",
    # Summary
    "TOTAL_PATTERN",
    "last_nonempty_line",
    "parse_total_line",
    "summarize_profile",
]
