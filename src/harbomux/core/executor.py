"""
Process executor.

Every external command harbomux runs (tmux, sh) goes through the narrow
``Executor`` protocol defined here, so the tmux handle and the bootstrap
handshake can be exercised against a fake without spawning anything.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Protocol

logger = logging.getLogger(__name__)


class SubprocessIOError(RuntimeError):
    """The external binary could not be started at all."""

    def __init__(self, args: Sequence[str], error: OSError) -> None:
        self.args_list = list(args)
        self.error = error
        super().__init__(f"Failed to run '{self.args_list[0]}': {error.strerror or error}")


@dataclass(frozen=True)
class CommandResult:
    """Result of a captured command."""

    args: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        """Whether the command exited with status 0."""
        return self.returncode == 0


class Executor(Protocol):
    """Protocol for components that can run external commands."""

    def capture(
        self, args: Sequence[str], *, env: Mapping[str, str] | None = None
    ) -> CommandResult:  # pragma: no cover
        """Run a command to completion, capturing stdout and stderr."""
        ...

    def wait(
        self, args: Sequence[str], *, env: Mapping[str, str] | None = None
    ) -> int:  # pragma: no cover
        """Run a command attached to the current terminal and return its exit status."""
        ...


class SubprocessExecutor:
    """Executor backed by :func:`subprocess.run`.

    ``env=None`` means the child inherits ``os.environ`` as it is at spawn
    time, which is how sentinel values reach new processes.
    """

    def capture(
        self, args: Sequence[str], *, env: Mapping[str, str] | None = None
    ) -> CommandResult:
        argv = list(args)
        logger.debug("capture: %s", argv)
        try:
            proc = subprocess.run(
                argv,
                capture_output=True,
                text=True,
                env=dict(env) if env is not None else None,
            )
        except OSError as e:
            raise SubprocessIOError(argv, e) from e
        return CommandResult(
            args=tuple(argv),
            returncode=proc.returncode,
            stdout=proc.stdout or "",
            stderr=proc.stderr or "",
        )

    def wait(self, args: Sequence[str], *, env: Mapping[str, str] | None = None) -> int:
        argv = list(args)
        logger.debug("wait: %s", argv)
        try:
            proc = subprocess.run(argv, env=dict(env) if env is not None else None)
        except OSError as e:
            raise SubprocessIOError(argv, e) from e
        return proc.returncode


__all__ = ["CommandResult", "Executor", "SubprocessExecutor", "SubprocessIOError"]
