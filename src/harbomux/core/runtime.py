"""
Runtime - the process-wide collaborators, built once.

The classifier cache, the managed server handle and the resolved program
path live on one immutable object that the CLI passes down explicitly,
instead of being reached for as module globals.
"""

from __future__ import annotations

from collections.abc import MutableMapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from harbomux.core.bootstrap import Bootstrapper, SessionInitializer
from harbomux.core.config import (
    HarbomuxConfig,
    get_session_env_path,
    get_shell_rc_path,
    load_config,
    read_session_env,
)
from harbomux.core.context import ContextClassifier
from harbomux.core.executor import Executor, SubprocessExecutor
from harbomux.core.invoke import self_command
from harbomux.core.sentinel import TMUX_PANE_VAR, EnvironmentStore
from harbomux.core.services.harbour import HarbourService
from harbomux.core.tmux import ManagedServer, TmuxServer


@dataclass(frozen=True)
class Runtime:
    """Collaborators shared by every command of one invocation."""

    config: HarbomuxConfig
    executor: Executor
    store: EnvironmentStore
    classifier: ContextClassifier
    managed_server: ManagedServer
    default_server: TmuxServer
    program: tuple[str, ...]
    rc_path: Path
    session_env_path: Path

    @classmethod
    def create(
        cls,
        *,
        config: HarbomuxConfig | None = None,
        executor: Executor | None = None,
        environ: MutableMapping[str, str] | None = None,
        cwd: Path | None = None,
        program: Sequence[str] | None = None,
    ) -> Runtime:
        """
        Build the runtime for this process.

        Args:
            config: Harbomux configuration (auto-loaded if None)
            executor: Command executor (subprocess-backed if None)
            environ: Environment mapping (os.environ if None)
            cwd: Directory checked for the session marker (cwd if None)
            program: Self-invocation prefix (resolved from the interpreter if None)
        """
        if config is None:
            config = load_config()
        if executor is None:
            executor = SubprocessExecutor()

        store = EnvironmentStore(environ)
        return cls(
            config=config,
            executor=executor,
            store=store,
            classifier=ContextClassifier(store, cwd=cwd),
            managed_server=ManagedServer(
                executor, label=config.server_label, binary=config.tmux_binary
            ),
            default_server=TmuxServer(executor, binary=config.tmux_binary),
            program=tuple(program) if program is not None else self_command(),
            rc_path=get_shell_rc_path(),
            session_env_path=get_session_env_path(),
        )

    def bootstrapper(self) -> Bootstrapper:
        return Bootstrapper(
            self.managed_server,
            self.store,
            self.program,
            rc_path=self.rc_path,
            session_env=read_session_env(self.session_env_path),
            session_name=self.config.session_name,
        )

    def session_initializer(self) -> SessionInitializer:
        return SessionInitializer(
            self.managed_server,
            self.executor,
            self.config.setup_commands,
            session_target=self.store.get(TMUX_PANE_VAR),
        )

    def harbour_service(self) -> HarbourService:
        return HarbourService(
            self.classifier,
            self.managed_server,
            self.default_server,
            self.bootstrapper(),
            self.program,
        )
