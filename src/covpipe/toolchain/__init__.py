"""External toolchain adapters.

The pipeline only talks to a :class:`Toolchain`; :class:`GoToolchain` is the
implementation backed by the ``go`` command.
"""

from covpipe.toolchain.base import Invocation, Toolchain
from covpipe.toolchain.env import prepare_environment, universal_env_overrides
from covpipe.toolchain.go import GoToolchain

__all__ = [
    "GoToolchain",
    "Invocation",
    "Toolchain",
    "prepare_environment",
    "universal_env_overrides",
]
