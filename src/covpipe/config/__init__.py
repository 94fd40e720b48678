"""Config module exports."""

from covpipe.config.loader import load_config
from covpipe.config.models import (
    CovPipeConfig,
    LoggingConfig,
    LogOutputConfig,
    RunConfig,
    ToolchainConfig,
)

__all__ = [
    "load_config",
    "CovPipeConfig",
    "LoggingConfig",
    "LogOutputConfig",
    "RunConfig",
    "ToolchainConfig",
]
