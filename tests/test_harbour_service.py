"""Tests for the harbour policy."""

from __future__ import annotations

import pytest

from harbomux.core.bootstrap import LaunchFailure
from harbomux.core.config import HarbomuxConfig
from harbomux.core.services.harbour import HarbourOutcome, HarbourResult


def _server_down(executor) -> None:
    executor.respond("has-session", returncode=1, stderr="no server running on /tmp/tmux-1000/harbonizer")


class TestNested:
    def test_already_active_is_a_noop(self, runtime, executor, environ) -> None:
        environ["HARBOMUX"] = "1"

        result = runtime.harbour_service().harbour()

        assert result == HarbourResult(HarbourOutcome.ALREADY_ACTIVE)
        assert executor.captured == []
        assert executor.waited == []


class TestPlainMultiplexer:
    def test_detaches_and_reruns_harbour(self, runtime, executor, environ) -> None:
        environ["TMUX"] = "/tmp/tmux-1000/default,4242,0"

        result = runtime.harbour_service().harbour()

        assert result.outcome is HarbourOutcome.DETACHED
        assert result.exit_status == 0
        assert executor.captured == [
            (
                "tmux",
                "detach-client",
                "-E",
                "/opt/harbomux/bin/python -m harbomux harbour",
            )
        ]

    def test_never_touches_managed_server(self, runtime, executor, environ) -> None:
        environ["TMUX"] = "/tmp/tmux-1000/default,4242,0"

        runtime.harbour_service().harbour()

        assert all("-L" not in argv for argv in executor.captured)

    def test_detach_failure_is_reported(self, runtime, executor, environ) -> None:
        environ["TMUX"] = "/tmp/tmux-1000/default,4242,0"
        executor.respond("detach-client", returncode=1, stderr="no current client")

        result = runtime.harbour_service().harbour()

        assert result.exit_status == 1
        assert result.detail == "no current client"


class TestBare:
    def test_running_server_is_attached(self, runtime, executor) -> None:
        result = runtime.harbour_service().harbour()

        assert result == HarbourResult(HarbourOutcome.ATTACHED, exit_status=0)
        assert executor.waited == [("tmux", "-L", "harbonizer", "attach-session")]
        assert executor.calls_to("new-session") == []

    def test_stopped_server_is_launched_not_attached(self, runtime, executor, environ) -> None:
        _server_down(executor)

        result = runtime.harbour_service().harbour()

        assert result == HarbourResult(HarbourOutcome.LAUNCHED)
        assert len(executor.calls_to("new-session")) == 1
        assert executor.calls_to("attach-session") == []
        assert environ["HARBOMUX"] == "pre-setup"

    def test_launch_failure_propagates(self, runtime, executor) -> None:
        _server_down(executor)
        executor.respond("new-session", returncode=1, stderr="server exited unexpectedly")

        with pytest.raises(LaunchFailure):
            runtime.harbour_service().harbour()

        assert executor.calls_to("attach-session") == []

    def test_context_is_evaluated_once(self, runtime, executor, environ) -> None:
        _server_down(executor)

        runtime.harbour_service().harbour()
        # Launching armed HARBOMUX in this process; the snapshot still says bare
        assert runtime.classifier.classify().value == "bare"


class TestRuntimeConfiguration:
    @pytest.fixture
    def config(self) -> HarbomuxConfig:
        return HarbomuxConfig(server_label="dock", session_name="main", tmux_binary="tmux3")

    def test_label_binary_and_session_name_are_used(self, runtime, executor) -> None:
        _server_down(executor)

        runtime.harbour_service().harbour()

        argv = executor.calls_to("new-session")[0]
        assert argv[:3] == ("tmux3", "-L", "dock")
        assert argv[argv.index("-s") + 1] == "main"