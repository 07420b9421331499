"""
Bootstrap handshake.

Gets initialization code to run inside a session that does not exist yet:

1. The launcher (BARE context, server not running) arms the sentinel:
   HARBOMUX=pre-setup in its own environment.
2. It creates a detached session on the managed server with HARBOMUX
   forced into the session environment and a startup command that
   re-invokes harbomux with ``internal setup``.
3. Inside the session, ``run_setup`` checks for exactly "pre-setup",
   initializes once, and advances HARBOMUX to "1" in the session and
   global tmux environments. The startup line then exports "1" into the
   pane shell.

The launcher does not wait for step 3.
"""

from __future__ import annotations

import logging
import shlex
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path

from rich.console import Console

from harbomux.core.bootstrap.protocol import (
    InternalAction,
    SelfInvocation,
    build_startup_command,
)
from harbomux.core.executor import CommandResult, Executor
from harbomux.core.sentinel import HARBOMUX_VAR, BootstrapState, EnvironmentStore
from harbomux.core.tmux import ManagedServer

logger = logging.getLogger(__name__)


class BootstrapError(Exception):
    """Base exception for bootstrap handshake errors."""


class LaunchFailure(BootstrapError):
    """tmux refused to create the managed session."""

    def __init__(self, label: str, returncode: int, stderr: str) -> None:
        self.label = label
        self.returncode = returncode
        self.stderr = stderr.strip()
        detail = f": {self.stderr}" if self.stderr else ""
        super().__init__(
            f"Could not create session on tmux server '{label}' (exit {returncode}){detail}"
        )


class SetupRejectedError(BootstrapError):
    """Hidden setup invoked without a pending handshake."""

    def __init__(self, observed: str | None) -> None:
        self.observed = observed
        shown = "unset" if observed is None else repr(observed)
        super().__init__(
            f"{HARBOMUX_VAR} is {shown}, expected {BootstrapState.PRE_SETUP.value!r}; "
            "setup already ran or was not started by harbomux"
        )


class Bootstrapper:
    """Launch side of the handshake."""

    def __init__(
        self,
        server: ManagedServer,
        store: EnvironmentStore,
        program: Sequence[str],
        *,
        rc_path: Path | None = None,
        session_env: Mapping[str, str] | None = None,
        session_name: str | None = None,
    ) -> None:
        self._server = server
        self._store = store
        self._program = tuple(program)
        self._rc_path = rc_path
        self._session_env = dict(session_env or {})
        self._session_name = session_name

    def startup_command(self) -> str:
        invocation = SelfInvocation(InternalAction.SETUP).argv(self._program)
        return build_startup_command(invocation, self._rc_path)

    def launch(self) -> None:
        """
        Create the managed session and hand setup off to it.

        Raises:
            LaunchFailure: If tmux reports an error creating the session
            SubprocessIOError: If tmux cannot be started at all
        """
        # Armed before the spawn so the new server inherits it
        self._store.set_bootstrap_state(BootstrapState.PRE_SETUP)

        environment = {**self._session_env, HARBOMUX_VAR: BootstrapState.PRE_SETUP.value}
        command_line = self.startup_command()
        logger.info("Creating session on tmux server '%s'", self._server.label)
        logger.debug("Startup command: %s", command_line)

        result = self._server.run_detached(
            command_line,
            environment=environment,
            session_name=self._session_name,
        )
        if not result.ok:
            raise LaunchFailure(self._server.label, result.returncode, result.stderr)


def run_setup(store: EnvironmentStore, initialize: Callable[[], None]) -> None:
    """
    Setup side of the handshake.

    Runs ``initialize`` only when HARBOMUX reads exactly "pre-setup", then
    advances it to "1". Only the new session's startup command performs this
    check, so the check-then-set needs no further locking.

    Raises:
        SetupRejectedError: For any other value, including "1" and unset
    """
    raw = store.get(HARBOMUX_VAR)
    try:
        state = BootstrapState.parse(raw)
    except ValueError:
        raise SetupRejectedError(raw) from None
    if state is not BootstrapState.PRE_SETUP:
        raise SetupRejectedError(raw)

    initialize()
    store.set_bootstrap_state(BootstrapState.READY)


class SessionInitializer:
    """One-time initialization performed inside a new managed session."""

    def __init__(
        self,
        server: ManagedServer,
        executor: Executor,
        setup_commands: Sequence[str] = (),
        console: Console | None = None,
        *,
        session_target: str | None = None,
    ) -> None:
        self._server = server
        self._executor = executor
        self._setup_commands = list(setup_commands)
        self._console = console or Console()
        self._session_target = session_target

    def __call__(self) -> None:
        self._console.print("[cyan]Setting up harbomux session...[/cyan]")

        for command in self._setup_commands:
            logger.debug("Running setup command: %s", command)
            status = self._executor.wait(["sh", "-c", command])
            if status != 0:
                logger.warning("Setup command exited %d: %s", status, shlex.quote(command))

        # The session value from new-session -e shadows the global one, so
        # later windows only see READY once the session copy is replaced
        ready = BootstrapState.READY.value
        self._check_published(
            "session",
            self._server.set_session_environment(HARBOMUX_VAR, ready, target=self._session_target),
        )
        self._check_published("global", self._server.set_environment(HARBOMUX_VAR, ready))

    def _check_published(self, scope: str, result: CommandResult) -> None:
        if not result.ok:
            logger.warning(
                "Could not publish %s to the %s environment of tmux server '%s': %s",
                HARBOMUX_VAR,
                scope,
                self._server.label,
                result.stderr.strip(),
            )


__all__ = [
    "BootstrapError",
    "Bootstrapper",
    "LaunchFailure",
    "SessionInitializer",
    "SetupRejectedError",
    "run_setup",
]
