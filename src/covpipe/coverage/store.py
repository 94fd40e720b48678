"""Combined profile store and per-unit scratch profiles.

The combined profile is append-only: one ``mode:`` header written at
creation, then the bodies of passing units in the order they are appended.
There is exactly one writer per run.
"""

from __future__ import annotations

import contextlib
import tempfile
from collections.abc import Iterator
from pathlib import Path
from types import TracebackType
from typing import TextIO
from uuid import uuid4

from covpipe.core.errors import ResultStoreError
from covpipe.core.logging import get_logger
from covpipe.coverage.models import CoverMode, header_line

log = get_logger("coverage.store")

SCRATCH_PREFIX = "covpipe-"
SCRATCH_SUFFIX = ".out"


class CombinedProfile:
    """Run-scoped merged coverage profile.

    Create with :meth:`create`; the constructor takes an already-open stream
    so callers can hand in any writable text stream.
    """

    def __init__(self, path: Path, mode: CoverMode, stream: TextIO) -> None:
        self._path = path
        self._mode = mode
        self._stream = stream
        self._units_merged = 0
        self._body_lines = 0

    @classmethod
    def create(cls, path: Path, mode: CoverMode) -> CombinedProfile:
        """Create (or truncate) the profile at ``path`` and write its header.

        Raises:
            ResultStoreError: If the file cannot be opened or the header written.
        """
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            # Truncate leftovers from an aborted earlier run, then append only
            path.write_text("")
            stream = path.open("a", encoding="utf-8", newline="")
        except OSError as e:
            raise ResultStoreError.create_failed(str(path), str(e)) from e

        try:
            stream.write(header_line(mode))
            stream.flush()
        except OSError as e:
            stream.close()
            raise ResultStoreError.create_failed(str(path), str(e)) from e

        log.debug("profile_created", path=str(path), mode=mode.value)
        return cls(path, mode, stream)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def mode(self) -> CoverMode:
        return self._mode

    @property
    def units_merged(self) -> int:
        return self._units_merged

    @property
    def body_lines(self) -> int:
        return self._body_lines

    @property
    def closed(self) -> bool:
        return self._stream.closed

    def append(self, body: str, *, unit: str = "") -> None:
        """Append one unit's profile body.

        The body is written verbatim; a newline is added only when the body
        does not end with one, so consecutive bodies never share a line.

        Raises:
            ResultStoreError: On any write failure. Fatal for the run.
        """
        if not body:
            return
        if not body.endswith("\n"):
            body += "\n"
        try:
            self._stream.write(body)
            self._stream.flush()
        except (OSError, ValueError) as e:
            # ValueError: write to a closed stream
            raise ResultStoreError.append_failed(str(self._path), unit, str(e)) from e

        self._units_merged += 1
        self._body_lines += body.count("\n")

    def close(self) -> None:
        if not self._stream.closed:
            self._stream.close()

    def discard(self) -> None:
        """Close and delete the profile file."""
        self.close()
        with contextlib.suppress(FileNotFoundError):
            self._path.unlink()

    def __enter__(self) -> CombinedProfile:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()


@contextlib.contextmanager
def scratch_profile(directory: Path | None = None) -> Iterator[Path]:
    """Yield a unique, not-yet-existing path for one unit's profile.

    The file is removed on every exit path, whether or not the toolchain
    ever wrote it.
    """
    base = directory if directory is not None else Path(tempfile.gettempdir())
    # The toolchain must create the file itself: a missing profile means no tests ran
    path = base / f"{SCRATCH_PREFIX}{uuid4().hex[:12]}{SCRATCH_SUFFIX}"
    try:
        yield path
    finally:
        with contextlib.suppress(FileNotFoundError):
            path.unlink()
