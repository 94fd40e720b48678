"""Tests for toolchain/go.py module.

subprocess.Popen is patched throughout; no go binary is needed.
"""

from __future__ import annotations

import signal
import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from covpipe.config.models import ToolchainConfig
from covpipe.coverage.models import CoverMode
from covpipe.toolchain.go import GoToolchain


def _proc(returncode: int = 0, stdout: str = "", stderr: str = "") -> MagicMock:
    proc = MagicMock()
    proc.pid = 4242
    proc.returncode = returncode
    proc.communicate.return_value = (stdout, stderr)
    return proc


class TestArgv:
    def test_list_argv(self, tmp_path: Path) -> None:
        assert GoToolchain(tmp_path).list_argv() == ["go", "list", "./..."]

    def test_test_argv_places_unit_last(self, tmp_path: Path) -> None:
        tc = GoToolchain(tmp_path, ToolchainConfig(test_args=["-race", "-count=1"]))

        argv = tc.test_argv("example.com/m/a", CoverMode.ATOMIC, Path("/tmp/p.out"))

        assert argv == [
            "go",
            "test",
            "-coverprofile=/tmp/p.out",
            "-covermode=atomic",
            "-race",
            "-count=1",
            "example.com/m/a",
        ]

    def test_cover_argv(self, tmp_path: Path) -> None:
        tc = GoToolchain(tmp_path, ToolchainConfig(go_binary="/opt/go/bin/go"))

        assert tc.cover_argv(Path("/tmp/r.out")) == [
            "/opt/go/bin/go",
            "tool",
            "cover",
            "-func=/tmp/r.out",
        ]


class TestRun:
    def test_runs_in_module_root_with_timeout(self, tmp_path: Path) -> None:
        tc = GoToolchain(tmp_path, ToolchainConfig(list_timeout_sec=30))
        proc = _proc(stdout="a\nb\n")

        with patch("covpipe.toolchain.go.subprocess.Popen", return_value=proc) as popen:
            inv = tc.list_units()

        assert inv.ok is True
        assert inv.stdout == "a\nb\n"
        assert inv.argv == ("go", "list", "./...")
        kwargs = popen.call_args.kwargs
        assert kwargs["cwd"] == tmp_path
        assert kwargs["text"] is True
        assert kwargs["start_new_session"] is True
        assert kwargs["env"]["CI"] == "true"
        proc.communicate.assert_called_once_with(timeout=30)

    def test_non_zero_exit_is_not_ok(self, tmp_path: Path) -> None:
        tc = GoToolchain(tmp_path)

        with patch(
            "covpipe.toolchain.go.subprocess.Popen",
            return_value=_proc(returncode=1, stderr="--- FAIL: TestAdd"),
        ):
            inv = tc.test_unit("example.com/m/a", CoverMode.SET, tmp_path / "p.out")

        assert inv.ok is False
        assert inv.exit_code == 1
        assert inv.stderr == "--- FAIL: TestAdd"

    def test_timeout_kills_process_group(self, tmp_path: Path) -> None:
        """Given a hung test binary, when the timeout fires, then the whole group is killed."""
        tc = GoToolchain(tmp_path, ToolchainConfig(test_timeout_sec=5))
        proc = _proc()
        proc.communicate.side_effect = [
            subprocess.TimeoutExpired(cmd=["go", "test"], timeout=5),
            ("partial", ""),
        ]

        with (
            patch("covpipe.toolchain.go.subprocess.Popen", return_value=proc),
            patch("covpipe.toolchain.go.os.killpg") as killpg,
        ):
            inv = tc.test_unit("example.com/m/a", CoverMode.SET, tmp_path / "p.out")

        killpg.assert_called_once_with(4242, signal.SIGKILL)
        assert inv.ok is False
        assert inv.timed_out is True
        assert inv.exit_code == -1
        assert inv.stdout == "partial"
        assert "timed out" in inv.stderr

    def test_timeout_tolerates_group_already_gone(self, tmp_path: Path) -> None:
        tc = GoToolchain(tmp_path, ToolchainConfig(test_timeout_sec=5))
        proc = _proc()
        proc.communicate.side_effect = [
            subprocess.TimeoutExpired(cmd=["go", "test"], timeout=5),
            ("", ""),
        ]

        with (
            patch("covpipe.toolchain.go.subprocess.Popen", return_value=proc),
            patch("covpipe.toolchain.go.os.killpg", side_effect=ProcessLookupError),
        ):
            inv = tc.test_unit("example.com/m/a", CoverMode.SET, tmp_path / "p.out")

        assert inv.timed_out is True

    def test_interrupt_kills_process_group_and_propagates(self, tmp_path: Path) -> None:
        tc = GoToolchain(tmp_path)
        proc = _proc()
        proc.communicate.side_effect = KeyboardInterrupt

        with (
            patch("covpipe.toolchain.go.subprocess.Popen", return_value=proc),
            patch("covpipe.toolchain.go.os.killpg") as killpg,
            pytest.raises(KeyboardInterrupt),
        ):
            tc.test_unit("example.com/m/a", CoverMode.SET, tmp_path / "p.out")

        killpg.assert_called_once_with(4242, signal.SIGKILL)
        proc.wait.assert_called_once()

    def test_missing_binary_is_folded_into_invocation(self, tmp_path: Path) -> None:
        tc = GoToolchain(tmp_path, ToolchainConfig(go_binary="no-such-go"))

        with patch(
            "covpipe.toolchain.go.subprocess.Popen",
            side_effect=FileNotFoundError("No such file or directory: 'no-such-go'"),
        ):
            inv = tc.cover_func(tmp_path / "r.out")

        assert inv.ok is False
        assert inv.timed_out is False
        assert "no-such-go" in inv.stderr

    @pytest.mark.parametrize(
        ("method", "timeout_field"),
        [("list_units", "list_timeout_sec"), ("cover_func", "report_timeout_sec")],
    )
    def test_each_command_uses_its_timeout(self, tmp_path: Path, method: str, timeout_field: str) -> None:
        tc = GoToolchain(tmp_path, ToolchainConfig(**{timeout_field: 7.5}))
        args = (tmp_path / "r.out",) if method == "cover_func" else ()
        proc = _proc()

        with patch("covpipe.toolchain.go.subprocess.Popen", return_value=proc):
            getattr(tc, method)(*args)

        proc.communicate.assert_called_once_with(timeout=7.5)
