"""
Execution context classification.

Decides where the current process runs:

- NESTED: inside the managed server (HARBOMUX is set)
- PLAIN_MULTIPLEXER: inside some other tmux session (TMUX is set)
- BARE: no multiplexer at all

A process cannot change its own context, so the answer is computed once and
reused for the rest of the invocation.
"""

from __future__ import annotations

import threading
from enum import Enum
from pathlib import Path

from harbomux.core.sentinel import HARBOMUX_VAR, TMUX_VAR, EnvironmentStore

SESSION_DIR_MARKER = ".harbomux"


class ExecutionContext(str, Enum):
    """Where the current process is executing."""

    NESTED = "nested"  # Inside the managed server
    PLAIN_MULTIPLEXER = "plain-multiplexer"  # Inside an unrelated tmux session
    BARE = "bare"  # No multiplexer

    @property
    def is_nested(self) -> bool:
        return self is ExecutionContext.NESTED

    @property
    def in_multiplexer(self) -> bool:
        return self is not ExecutionContext.BARE


def classify_environment(store: EnvironmentStore) -> ExecutionContext:
    """
    Classify an environment from its sentinel variables.

    Presence is all that matters; the HARBOMUX value is the bootstrap
    state and is irrelevant here.

    Examples:
        >>> classify_environment(EnvironmentStore({}))
        <ExecutionContext.BARE: 'bare'>
        >>> classify_environment(EnvironmentStore({"TMUX": "/tmp/tmux-1000/default,1,0"}))
        <ExecutionContext.PLAIN_MULTIPLEXER: 'plain-multiplexer'>
    """
    if store.has(HARBOMUX_VAR):
        return ExecutionContext.NESTED
    if store.has(TMUX_VAR):
        return ExecutionContext.PLAIN_MULTIPLEXER
    return ExecutionContext.BARE


class ContextClassifier:
    """Snapshot-on-first-use classifier."""

    def __init__(self, store: EnvironmentStore, cwd: Path | None = None) -> None:
        self._store = store
        self._cwd = cwd
        self._lock = threading.Lock()
        self._context: ExecutionContext | None = None
        self._in_session_dir: bool | None = None

    def classify(self) -> ExecutionContext:
        with self._lock:
            if self._context is None:
                self._context = classify_environment(self._store)
            return self._context

    def in_session_dir(self) -> bool:
        """Whether the working directory carries a ``.harbomux`` marker."""
        with self._lock:
            if self._in_session_dir is None:
                cwd = self._cwd if self._cwd is not None else Path.cwd()
                self._in_session_dir = (cwd / SESSION_DIR_MARKER).exists()
            return self._in_session_dir


__all__ = [
    "SESSION_DIR_MARKER",
    "ContextClassifier",
    "ExecutionContext",
    "classify_environment",
]
