"""
Pytest configuration and shared fixtures.

Provides a recording fake executor (no tmux is ever spawned), an isolated
environment mapping, XDG config isolation, and a Runtime wired from fakes.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, MutableMapping, Sequence
from pathlib import Path

import pytest

from harbomux.core.config import HarbomuxConfig, clear_cache
from harbomux.core.executor import CommandResult
from harbomux.core.invoke import self_command
from harbomux.core.runtime import Runtime
from harbomux.core.sentinel import EnvironmentStore

PROGRAM = ("/opt/harbomux/bin/python", "-m", "harbomux")

# ==============================================================================
# Fake executor
# ==============================================================================


def tmux_subcommand(args: Sequence[str]) -> str:
    """Name of the tmux subcommand in argv, skipping any -L prefix."""
    if not args:
        return ""
    if not Path(args[0]).name.startswith("tmux"):
        return args[0]
    rest = list(args[1:])
    if rest[:1] == ["-L"]:
        rest = rest[2:]
    return rest[0] if rest else ""


class FakeExecutor:
    """Records every command and answers from canned responses.

    Unconfigured commands succeed with empty output. Successful
    ``new-session -e`` and ``set-environment`` calls are applied to a model
    of the server's global and session environments.
    """

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self.captured: list[tuple[str, ...]] = []
        self.waited: list[tuple[str, ...]] = []
        self.spawn_environ: list[dict[str, str]] = []
        self._environ = environ
        self._responses: dict[str, tuple[int, str, str]] = {}
        self._wait_status: dict[str, int] = {}
        self.global_env: dict[str, str] = {}
        self.session_env: dict[str, str] = {}

    def respond(self, subcommand: str, returncode: int = 0, stdout: str = "", stderr: str = "") -> None:
        self._responses[subcommand] = (returncode, stdout, stderr)

    def wait_returns(self, subcommand: str, status: int) -> None:
        self._wait_status[subcommand] = status

    def _record_environ(self) -> None:
        if self._environ is not None:
            self.spawn_environ.append(dict(self._environ))

    def capture(self, args: Sequence[str], *, env: Mapping[str, str] | None = None) -> CommandResult:
        argv = tuple(args)
        self.captured.append(argv)
        self._record_environ()
        returncode, stdout, stderr = self._responses.get(tmux_subcommand(argv), (0, "", ""))
        if returncode == 0:
            self._apply_environment(argv)
        return CommandResult(args=argv, returncode=returncode, stdout=stdout, stderr=stderr)

    def wait(self, args: Sequence[str], *, env: Mapping[str, str] | None = None) -> int:
        argv = tuple(args)
        self.waited.append(argv)
        self._record_environ()
        return self._wait_status.get(tmux_subcommand(argv), 0)

    def _apply_environment(self, argv: tuple[str, ...]) -> None:
        subcommand = tmux_subcommand(argv)
        rest = list(argv[argv.index(subcommand) + 1 :]) if subcommand else []
        if subcommand == "new-session":
            # A server started by new-session inherits the launcher environment
            if not self.global_env and self._environ is not None:
                self.global_env = dict(self._environ)
            for flag, value in zip(rest, rest[1:]):
                if flag == "-e":
                    key, _, val = value.partition("=")
                    self.session_env[key] = val
        elif subcommand == "set-environment":
            name, value = rest[-2], rest[-1]
            if "-g" in rest:
                self.global_env[name] = value
            else:
                self.session_env[name] = value

    def window_environment(self) -> dict[str, str]:
        """Environment a window opened now would start with."""
        return {**self.global_env, **self.session_env}

    def calls_to(self, subcommand: str) -> list[tuple[str, ...]]:
        return [
            argv
            for argv in [*self.captured, *self.waited]
            if tmux_subcommand(argv) == subcommand
        ]


# ==============================================================================
# Isolation Fixtures
# ==============================================================================


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Point XDG_CONFIG_HOME at a temp dir and drop cached config."""
    config_home = tmp_path / "xdg"
    config_home.mkdir()
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    for var in (
        "HARBOMUX_SERVER_LABEL",
        "HARBOMUX_TMUX",
        "HARBOMUX_SESSION_NAME",
        "HARBOMUX_DEV_MODE",
    ):
        monkeypatch.delenv(var, raising=False)
    clear_cache()
    self_command.cache_clear()
    yield config_home
    clear_cache()
    self_command.cache_clear()


@pytest.fixture
def harbomux_config_dir(isolated_config: Path) -> Path:
    """The (created) ~/.config/harbomux equivalent."""
    config_dir = isolated_config / "harbomux"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def environ() -> dict[str, str]:
    """Environment mapping for the code under test (bare shell by default)."""
    return {"HOME": "/home/sailor", "SHELL": "/bin/bash"}


@pytest.fixture
def store(environ: MutableMapping[str, str]) -> EnvironmentStore:
    return EnvironmentStore(environ)


@pytest.fixture
def executor(environ: MutableMapping[str, str]) -> FakeExecutor:
    return FakeExecutor(environ)


@pytest.fixture
def work_dir(tmp_path: Path) -> Path:
    work = tmp_path / "work"
    work.mkdir()
    return work


@pytest.fixture
def config() -> HarbomuxConfig:
    return HarbomuxConfig()


@pytest.fixture
def runtime(
    config: HarbomuxConfig,
    executor: FakeExecutor,
    environ: MutableMapping[str, str],
    work_dir: Path,
) -> Runtime:
    """Runtime wired to the fake executor and isolated environment."""
    return Runtime.create(
        config=config,
        executor=executor,
        environ=environ,
        cwd=work_dir,
        program=PROGRAM,
    )


@pytest.fixture
def program() -> tuple[str, ...]:
    """Self-invocation prefix used by the runtime fixture."""
    return PROGRAM
