"""Configuration constants.

This module contains truly constant values that should NOT be user-configurable:
config file locations and the names of run artifacts.

For configurable values, see models.py (RunConfig, ToolchainConfig).
"""

from pathlib import Path

# =============================================================================
# Config file locations
# =============================================================================

PROJECT_CONFIG_NAME = ".covpipe.yaml"
"""Per-project config file, looked up in the Go module root."""

GLOBAL_CONFIG_PATH = Path("~/.config/covpipe/config.yaml").expanduser()
"""User-wide config file."""

PROJECT_MARKER = "go.mod"
"""File whose presence marks a Go module root."""

# =============================================================================
# Run artifacts
# =============================================================================

COMBINED_PROFILE_NAME = "result.out"
"""File name of the combined profile inside the run's scratch directory."""

RUN_DIR_PREFIX = "covpipe-run-"
"""Prefix of the per-run scratch directory."""
