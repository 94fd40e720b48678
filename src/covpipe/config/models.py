"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config() (CLI options)
2. Environment variables (COVPIPE__SECTION__KEY)
3. Project YAML (<root>/.covpipe.yaml)
4. Global YAML (~/.config/covpipe/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    COVPIPE__<SECTION>__<KEY>=<VALUE>

Examples:
    COVPIPE__LOGGING__LEVEL=DEBUG
    COVPIPE__RUN__COVER_MODE=atomic
    COVPIPE__TOOLCHAIN__TEST_TIMEOUT_SEC=600
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from covpipe.coverage.models import CoverMode

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    No outputs by default: a run prints its summary line and nothing else.

    Env vars:
        COVPIPE__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level for configured outputs.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=list)


class RunConfig(BaseModel):
    """Pipeline run configuration.

    Env vars:
        COVPIPE__RUN__COVER_MODE: set, atomic or count
        COVPIPE__RUN__SHOW_PROGRESS: Show progress indicator
    """

    cover_mode: CoverMode = Field(
        default=CoverMode.SET,
        description="Hit-counting strategy recorded in the profile header and "
        "passed to every go test invocation.",
    )
    exclude: list[str] = Field(
        default_factory=list,
        description="Packages never tested. Merged with -e options.",
    )
    show_progress: bool = Field(
        default=False,
        description="Show a progress indicator on stderr.",
    )


class ToolchainConfig(BaseModel):
    """Go toolchain invocation.

    Timeouts of None wait forever.

    Env vars:
        COVPIPE__TOOLCHAIN__GO_BINARY: go executable
        COVPIPE__TOOLCHAIN__TEST_TIMEOUT_SEC: Per-package go test timeout
    """

    go_binary: str = Field(
        default="go",
        description="go executable, resolved via PATH when not absolute.",
    )
    package_pattern: str = Field(
        default="./...",
        description="Pattern handed to go list.",
    )
    test_args: list[str] = Field(
        default_factory=list,
        description="Extra go test flags (e.g. -race, -count=1).",
    )
    list_timeout_sec: float | None = Field(
        default=120.0,
        description="go list timeout. A timeout is a discovery failure.",
    )
    test_timeout_sec: float | None = Field(
        default=None,
        description="Per-package go test timeout. A timeout marks the package failed.",
    )
    report_timeout_sec: float | None = Field(
        default=120.0,
        description="go tool cover timeout. A timeout means no summary.",
    )

    @field_validator("list_timeout_sec", "test_timeout_sec", "report_timeout_sec")
    @classmethod
    def validate_timeout(cls, v: float | None) -> float | None:
        if v is not None and v <= 0:
            raise ValueError(f"Timeout must be positive, got {v}")
        return v


class CovPipeConfig(BaseModel):
    """Root configuration for covpipe.

    All settings can be configured via:
    1. Environment variables: COVPIPE__SECTION__KEY
    2. YAML config files (project or global)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    run: RunConfig = Field(default_factory=RunConfig)
    toolchain: ToolchainConfig = Field(default_factory=ToolchainConfig)
