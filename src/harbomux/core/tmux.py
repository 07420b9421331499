"""
Tmux server handles.

A ``TmuxServer`` addresses one tmux server instance. With no socket name it
is the user's default server; ``ManagedServer`` always passes ``-L <label>``
so every command lands on harbomux's own server and never on a session the
user started by hand.
"""

from __future__ import annotations

import logging
import shlex
from collections.abc import Mapping, Sequence

from harbomux.core.executor import CommandResult, Executor

logger = logging.getLogger(__name__)

DEFAULT_SERVER_LABEL = "harbonizer"


class TmuxServer:
    """Handle for a single tmux server instance."""

    def __init__(
        self,
        executor: Executor,
        socket_name: str | None = None,
        binary: str = "tmux",
    ) -> None:
        self._executor = executor
        self._socket_name = socket_name
        self._binary = binary

    @property
    def socket_name(self) -> str | None:
        return self._socket_name

    @property
    def prefix(self) -> list[str]:
        """Argv prefix applied to every command for this server."""
        if self._socket_name is None:
            return [self._binary]
        return [self._binary, "-L", self._socket_name]

    def command(self, *args: str) -> list[str]:
        return [*self.prefix, *args]

    def prefixed_command(self, args: Sequence[str]) -> str:
        """Shell-quoted command line for use inside another shell command."""
        return shlex.join(self.command(*args))

    def run(self, *args: str) -> CommandResult:
        return self._executor.capture(self.command(*args))

    def is_running(self) -> bool:
        """
        Probe whether the server has a live session.

        A non-zero exit is tmux saying there is no server (or no session on
        it), which is a normal answer here rather than an error.
        """
        result = self.run("has-session")
        if not result.ok:
            logger.debug("has-session probe negative: %s", result.stderr.strip())
        return result.ok

    def attach(self) -> int:
        """Attach the current terminal; blocks until the client detaches."""
        return self._executor.wait(self.command("attach-session"))

    def run_detached(
        self,
        command_line: str,
        *,
        environment: Mapping[str, str] | None = None,
        session_name: str | None = None,
    ) -> CommandResult:
        """Create a detached session whose first pane runs ``command_line``."""
        args = ["new-session", "-d"]
        if session_name:
            args.extend(["-s", session_name])
        for key, value in (environment or {}).items():
            args.extend(["-e", f"{key}={value}"])
        args.append(command_line)
        return self.run(*args)

    def detach_client(self, exec_command: str) -> CommandResult:
        """Detach the current client and have it run ``exec_command`` instead."""
        return self.run("detach-client", "-E", exec_command)

    def set_environment(self, name: str, value: str) -> CommandResult:
        """Set a variable in the server's global environment."""
        return self.run("set-environment", "-g", name, value)

    def set_session_environment(
        self, name: str, value: str, *, target: str | None = None
    ) -> CommandResult:
        """
        Set a variable in one session's environment.

        New windows read the session environment on top of the global one,
        so a value given with ``new-session -e`` can only be replaced here.
        With no target tmux picks the session of the calling pane.
        """
        args = ["set-environment"]
        if target:
            args.extend(["-t", target])
        args.extend([name, value])
        return self.run(*args)


class ManagedServer(TmuxServer):
    """The dedicated, uniquely named server harbomux owns."""

    def __init__(
        self,
        executor: Executor,
        label: str = DEFAULT_SERVER_LABEL,
        binary: str = "tmux",
    ) -> None:
        if not label or not label.strip():
            raise ValueError("Managed server label must not be empty")
        super().__init__(executor, socket_name=label, binary=binary)
        self._label = label

    @property
    def label(self) -> str:
        return self._label


__all__ = ["DEFAULT_SERVER_LABEL", "ManagedServer", "TmuxServer"]
