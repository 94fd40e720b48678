"""Go toolchain adapter.

Commands:
- ``go list <pattern>``: one import path per line
- ``go test -coverprofile=<file> -covermode=<mode> [args] <pkg>``
- ``go tool cover -func=<file>``: per-function table ending in a total line
"""

from __future__ import annotations

import contextlib
import os
import signal
import subprocess
import time
from pathlib import Path
from typing import TYPE_CHECKING

from covpipe.core.logging import get_logger, get_run_id
from covpipe.coverage.models import CoverMode
from covpipe.toolchain.base import Invocation
from covpipe.toolchain.env import prepare_environment

if TYPE_CHECKING:
    from covpipe.config.models import ToolchainConfig

log = get_logger("toolchain.go")


class GoToolchain:
    """Runs the ``go`` command in a module root."""

    def __init__(self, root: Path, config: ToolchainConfig | None = None) -> None:
        from covpipe.config.models import ToolchainConfig

        self._root = root
        self._config = config or ToolchainConfig()

    @property
    def root(self) -> Path:
        return self._root

    @property
    def config(self) -> ToolchainConfig:
        return self._config

    def list_argv(self) -> list[str]:
        return [self._config.go_binary, "list", self._config.package_pattern]

    def test_argv(self, unit: str, mode: CoverMode, profile: Path) -> list[str]:
        return [
            self._config.go_binary,
            "test",
            f"-coverprofile={profile}",
            f"-covermode={mode.value}",
            *self._config.test_args,
            unit,
        ]

    def cover_argv(self, profile: Path) -> list[str]:
        return [self._config.go_binary, "tool", "cover", f"-func={profile}"]

    def list_units(self) -> Invocation:
        return self._run(self.list_argv(), timeout=self._config.list_timeout_sec)

    def test_unit(self, unit: str, mode: CoverMode, profile: Path) -> Invocation:
        return self._run(self.test_argv(unit, mode, profile), timeout=self._config.test_timeout_sec)

    def cover_func(self, profile: Path) -> Invocation:
        return self._run(self.cover_argv(profile), timeout=self._config.report_timeout_sec)

    def _run(self, argv: list[str], *, timeout: float | None) -> Invocation:
        """Run one command to completion. Never raises for tool failures.

        The command gets its own process group so a timeout also stops the
        test binaries ``go test`` spawned.
        """
        env = prepare_environment(get_run_id() or "")
        start = time.perf_counter()
        try:
            proc = subprocess.Popen(
                argv,
                cwd=self._root,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                env=env,
                start_new_session=True,
            )
        except OSError as e:
            log.warning("invocation_failed_to_start", argv=argv, error=str(e))
            return Invocation(
                argv=tuple(argv),
                exit_code=-1,
                stderr=str(e),
                duration_sec=time.perf_counter() - start,
            )

        try:
            stdout, stderr = proc.communicate(timeout=timeout)
        except subprocess.TimeoutExpired:
            _kill_group(proc)
            stdout, stderr = proc.communicate()
            elapsed = time.perf_counter() - start
            log.warning("invocation_timed_out", argv=argv, timeout_sec=timeout)
            return Invocation(
                argv=tuple(argv),
                exit_code=-1,
                stdout=_as_text(stdout),
                stderr=_as_text(stderr) or f"timed out after {timeout}s",
                timed_out=True,
                duration_sec=elapsed,
            )
        except BaseException:
            # The child is in its own session and never saw the Ctrl-C
            _kill_group(proc)
            proc.wait()
            raise

        elapsed = time.perf_counter() - start
        log.debug("invocation_done", argv=argv, exit_code=proc.returncode, elapsed_s=elapsed)
        return Invocation(
            argv=tuple(argv),
            exit_code=proc.returncode,
            stdout=stdout,
            stderr=stderr,
            duration_sec=elapsed,
        )


def _kill_group(proc: subprocess.Popen[str]) -> None:
    if os.name == "posix":
        with contextlib.suppress(ProcessLookupError):
            os.killpg(proc.pid, signal.SIGKILL)
    else:
        proc.kill()


def _as_text(data: str | bytes | None) -> str:
    # Partial output may arrive as bytes
    if data is None:
        return ""
    if isinstance(data, bytes):
        return data.decode(errors="replace")
    return data
