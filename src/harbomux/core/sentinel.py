"""
Environment sentinel store.

Harbomux signals protocol state between processes with environment
variables that are inherited when a process is spawned:

    HARBOMUX  - absent / "pre-setup" / "1", owned by harbomux
    TMUX      - set by tmux inside any session, read-only here
    TMUX_PANE - id of the pane a process runs in, read-only here

A value is only evidence of a state if it was written before the reading
process was spawned.
"""

from __future__ import annotations

import os
from collections.abc import MutableMapping
from enum import Enum

HARBOMUX_VAR = "HARBOMUX"
TMUX_VAR = "TMUX"
TMUX_PANE_VAR = "TMUX_PANE"


class BootstrapState(str, Enum):
    """Legal values of the HARBOMUX sentinel."""

    ABSENT = ""
    PRE_SETUP = "pre-setup"
    READY = "1"

    @classmethod
    def parse(cls, value: str | None) -> BootstrapState:
        """
        Parse a raw environment value.

        Args:
            value: Raw value of HARBOMUX, or None when unset

        Returns:
            The matching state (None and "" are ABSENT)

        Raises:
            ValueError: If the value is not one harbomux ever writes
        """
        if value is None:
            return cls.ABSENT
        return cls(value)


class EnvironmentStore:
    """Read/write access to sentinel variables.

    Wraps ``os.environ`` by default so writes are inherited by every process
    spawned afterwards. Tests pass a plain dict.
    """

    def __init__(self, environ: MutableMapping[str, str] | None = None) -> None:
        self._environ = os.environ if environ is None else environ

    @property
    def environ(self) -> MutableMapping[str, str]:
        return self._environ

    def get(self, name: str) -> str | None:
        return self._environ.get(name)

    def has(self, name: str) -> bool:
        return name in self._environ

    def set(self, name: str, value: str) -> None:
        self._environ[name] = value

    def unset(self, name: str) -> None:
        self._environ.pop(name, None)

    def bootstrap_state(self) -> BootstrapState:
        """Current HARBOMUX state; raises ValueError for a foreign value."""
        return BootstrapState.parse(self.get(HARBOMUX_VAR))

    def set_bootstrap_state(self, state: BootstrapState) -> None:
        if state is BootstrapState.ABSENT:
            self.unset(HARBOMUX_VAR)
        else:
            self.set(HARBOMUX_VAR, state.value)


__all__ = [
    "HARBOMUX_VAR",
    "TMUX_PANE_VAR",
    "TMUX_VAR",
    "BootstrapState",
    "EnvironmentStore",
]
