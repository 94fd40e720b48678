"""Non-interactive environment for toolchain subprocesses.

Go test binaries may shell out to git or prompt on stdin; a coverage run
must never hang on a prompt, so every child gets CI-like settings.
"""

from __future__ import annotations

import os


def universal_env_overrides(run_id: str) -> dict[str, str]:
    """Environment variables applied to every toolchain invocation."""
    return {
        # Signal CI environment - most tools respect this
        "CI": "true",
        "CONTINUOUS_INTEGRATION": "true",
        # Prevent interactive prompts
        "NONINTERACTIVE": "1",
        # Disable color output for cleaner parsing
        "NO_COLOR": "1",
        # Prevent git prompts (go fetching private modules)
        "GIT_TERMINAL_PROMPT": "0",
        "GIT_SSH_COMMAND": "ssh -o BatchMode=yes",
        # covpipe marker
        "COVPIPE_EXECUTION": "1",
        "COVPIPE_RUN_ID": run_id,
    }


def prepare_environment(run_id: str, *, base_env: dict[str, str] | None = None) -> dict[str, str]:
    """Build the child environment.

    Args:
        run_id: Correlation id exposed to the child as COVPIPE_RUN_ID
        base_env: Base environment to extend (defaults to os.environ)
    """
    env = dict(base_env) if base_env is not None else dict(os.environ)
    env.update(universal_env_overrides(run_id))
    return env
