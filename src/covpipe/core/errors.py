"""covpipe error types with typed error codes.

Error code ranges:
- 1xxx: Discovery
- 2xxx: Config
- 3xxx: Result store
- 4xxx: Summary
- 9xxx: Internal

Per-unit test outcomes are never errors; only the fatal stages below raise.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Discovery (1xxx)
    DISCOVERY_LIST_FAILED = 1001
    DISCOVERY_NO_UNITS = 1002
    DISCOVERY_ALL_EXCLUDED = 1003
    DISCOVERY_NOT_A_MODULE = 1004

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Result store (3xxx)
    RESULT_STORE_CREATE_FAILED = 3001
    RESULT_STORE_APPEND_FAILED = 3002

    # Summary (4xxx)
    SUMMARY_UNAVAILABLE = 4001
    SUMMARY_NO_TOTAL_LINE = 4002
    SUMMARY_BAD_PERCENT = 4003

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


# Process exit code per error family (first digit of the error code).
_EXIT_CODES = {
    1: 2,  # discovery
    2: 6,  # config
    3: 3,  # result store
    9: 70,  # internal
}

EXIT_SUMMARY_UNAVAILABLE = 4
EXIT_SUMMARY_PARSE = 5


@dataclass(frozen=True, slots=True)
class CovPipeError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'DISCOVERY_NO_UNITS')."""
        return self.code.name

    @property
    def stage(self) -> str:
        """Pipeline stage that failed, used in the one-line diagnostic."""
        return "internal"

    @property
    def exit_code(self) -> int:
        return _EXIT_CODES.get(self.code.value // 1000, 1)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "stage": self.stage,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class DiscoveryError(CovPipeError):
    """Unit enumeration failed or left nothing to test."""

    @property
    def stage(self) -> str:
        return "discovery"

    @classmethod
    def list_failed(cls, exit_code: int, stderr: str) -> "DiscoveryError":
        return cls(
            code=ErrorCode.DISCOVERY_LIST_FAILED,
            message=f"cannot get package list (exit status {exit_code})",
            details={"exit_code": exit_code, "stderr": stderr.strip()},
        )

    @classmethod
    def no_units(cls, root: str) -> "DiscoveryError":
        return cls(
            code=ErrorCode.DISCOVERY_NO_UNITS,
            message=f"no Go packages found in {root}",
            details={"root": root},
        )

    @classmethod
    def all_excluded(cls, excluded: list[str]) -> "DiscoveryError":
        return cls(
            code=ErrorCode.DISCOVERY_ALL_EXCLUDED,
            message=f"all {len(excluded)} packages are excluded, nothing to test",
            details={"excluded": excluded},
        )

    @classmethod
    def not_a_module(cls, start: str, marker: str) -> "DiscoveryError":
        return cls(
            code=ErrorCode.DISCOVERY_NOT_A_MODULE,
            message=f"not inside a Go module: no {marker} at or above {start}",
            details={"start": start},
        )


class ConfigError(CovPipeError):
    """Configuration-related errors."""

    @property
    def stage(self) -> str:
        return "config"

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class ResultStoreError(CovPipeError):
    """The combined profile cannot be created or written.

    Always fatal: continuing would silently underreport coverage.
    """

    @property
    def stage(self) -> str:
        return "result store"

    @classmethod
    def create_failed(cls, path: str, reason: str) -> "ResultStoreError":
        return cls(
            code=ErrorCode.RESULT_STORE_CREATE_FAILED,
            message=f"cannot create file for results at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def append_failed(cls, path: str, unit: str, reason: str) -> "ResultStoreError":
        return cls(
            code=ErrorCode.RESULT_STORE_APPEND_FAILED,
            message=f"cannot add coverage profile of {unit} to result file: {reason}",
            details={"path": path, "unit": unit, "reason": reason},
        )


class SummaryUnavailable(CovPipeError):
    """The report tool could not summarize the combined profile."""

    @property
    def stage(self) -> str:
        return "summary"

    @property
    def exit_code(self) -> int:
        return EXIT_SUMMARY_UNAVAILABLE

    @classmethod
    def tool_failed(cls, exit_code: int, stderr: str, *, timed_out: bool = False) -> "SummaryUnavailable":
        reason = "timed out" if timed_out else f"exit status {exit_code}"
        return cls(
            code=ErrorCode.SUMMARY_UNAVAILABLE,
            message=f"cannot process results: report tool failed ({reason})",
            details={"exit_code": exit_code, "stderr": stderr.strip(), "timed_out": timed_out},
        )


class SummaryParseError(CovPipeError):
    """The report tool's output has no parseable total line."""

    @property
    def stage(self) -> str:
        return "summary"

    @property
    def exit_code(self) -> int:
        return EXIT_SUMMARY_PARSE

    @classmethod
    def no_total_line(cls, line: str) -> "SummaryParseError":
        return cls(
            code=ErrorCode.SUMMARY_NO_TOTAL_LINE,
            message="cannot parse coverage result",
            details={"line": line},
        )

    @classmethod
    def bad_percent(cls, value: str) -> "SummaryParseError":
        return cls(
            code=ErrorCode.SUMMARY_BAD_PERCENT,
            message=f"cannot convert coverage value {value!r}",
            details={"value": value},
        )


class InternalError(CovPipeError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )
