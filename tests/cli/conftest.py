"""Shared fixtures for CLI tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from unittest.mock import patch

import pytest


@pytest.fixture(autouse=True)
def no_global_config(tmp_path: Path) -> Iterator[None]:
    """Keep the user's ~/.config/covpipe out of CLI runs."""
    with patch("covpipe.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "no-global.yaml"):
        yield
