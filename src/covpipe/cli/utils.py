"""CLI utilities."""

from __future__ import annotations

from pathlib import Path
from typing import NoReturn

import click

from covpipe.config.constants import PROJECT_MARKER
from covpipe.core.errors import CovPipeError, DiscoveryError, InternalError
from covpipe.core.logging import get_log_file_path, get_logger

EXIT_TESTS_FAILED = 1
EXIT_INTERRUPTED = 130


def find_project_root(start_path: Path | None = None) -> Path:
    """Find the Go module root from the given path.

    Walks up the directory tree looking for a go.mod file.
    If start_path is None, uses the current working directory.

    Args:
        start_path: Starting directory to search from

    Returns:
        Path to the module root

    Raises:
        DiscoveryError: If no go.mod is found at or above start_path
    """
    if start_path is None:
        start_path = Path.cwd()

    current = start_path.resolve()

    while current != current.parent:
        if (current / PROJECT_MARKER).is_file():
            return current
        current = current.parent

    # Check root as well
    if (current / PROJECT_MARKER).is_file():
        return current

    raise DiscoveryError.not_a_module(str(start_path), PROJECT_MARKER)


def fail(error: CovPipeError) -> NoReturn:
    """Print the one-line diagnostic for a fatal error and exit.

    The exit code identifies the failing stage.
    """
    get_logger("cli").error("pipeline_failed", **error.to_dict())
    message = f"error: {error.stage}: {error.message}"
    if log_path := get_log_file_path():
        message += f" (details in {log_path})"
    click.echo(message, err=True)
    raise SystemExit(error.exit_code)


def crashed(error: Exception) -> NoReturn:
    """Report an unexpected exception as an internal error."""
    get_logger("cli").exception("unexpected_error")
    fail(InternalError.unexpected(str(error) or type(error).__name__, type=type(error).__name__))


def interrupted() -> NoReturn:
    click.echo("error: interrupted", err=True)
    raise SystemExit(EXIT_INTERRUPTED)
