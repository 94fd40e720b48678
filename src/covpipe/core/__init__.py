"""Core module exports."""

from covpipe.core.errors import (
    ConfigError,
    CovPipeError,
    DiscoveryError,
    ErrorCode,
    InternalError,
    ResultStoreError,
    SummaryParseError,
    SummaryUnavailable,
)
from covpipe.core.logging import (
    clear_run_id,
    configure_logging,
    get_logger,
    get_run_id,
    set_run_id,
)
from covpipe.core.progress import RunProgress

__all__ = [
    # Errors
    "ConfigError",
    "CovPipeError",
    "DiscoveryError",
    "ErrorCode",
    "InternalError",
    "ResultStoreError",
    "SummaryParseError",
    "SummaryUnavailable",
    # Logging
    "clear_run_id",
    "configure_logging",
    "get_logger",
    "get_run_id",
    "set_run_id",
    # Progress
    "RunProgress",
]
