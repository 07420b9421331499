"""Tests for tmux server handles."""

from __future__ import annotations

import pytest

from harbomux.core.tmux import DEFAULT_SERVER_LABEL, ManagedServer, TmuxServer


class TestTmuxServerPrefix:
    """Command prefixing for default and named servers."""

    def test_default_server_has_no_socket(self, executor) -> None:
        server = TmuxServer(executor)
        assert server.command("detach-client") == ["tmux", "detach-client"]

    def test_managed_server_is_namespaced(self, executor) -> None:
        server = ManagedServer(executor)
        assert server.label == DEFAULT_SERVER_LABEL
        assert server.command("has-session") == ["tmux", "-L", "harbonizer", "has-session"]

    def test_custom_binary(self, executor) -> None:
        server = ManagedServer(executor, label="dock", binary="/usr/local/bin/tmux")
        assert server.prefix == ["/usr/local/bin/tmux", "-L", "dock"]
        assert server.label == "dock"
        assert server.socket_name == "dock"

    def test_prefixed_command_is_shell_quoted(self, executor) -> None:
        server = ManagedServer(executor, label="dock")
        line = server.prefixed_command(["new-session", "echo hi; sleep 1"])
        assert line == "tmux -L dock new-session 'echo hi; sleep 1'"

    @pytest.mark.parametrize("label", ["", "   "])
    def test_empty_label_rejected(self, executor, label: str) -> None:
        with pytest.raises(ValueError, match="must not be empty"):
            ManagedServer(executor, label=label)


class TestIsRunning:
    """The has-session probe."""

    def test_running(self, executor) -> None:
        assert ManagedServer(executor).is_running()
        assert executor.captured == [("tmux", "-L", "harbonizer", "has-session")]

    def test_negative_answer_is_false_not_error(self, executor) -> None:
        executor.respond(
            "has-session", returncode=1, stderr="no server running on /tmp/tmux-1000/harbonizer"
        )
        assert ManagedServer(executor).is_running() is False


class TestOperations:
    """attach, run_detached, detach_client and set_environment."""

    def test_attach_blocks_via_wait(self, executor) -> None:
        executor.wait_returns("attach-session", 0)
        status = ManagedServer(executor).attach()
        assert status == 0
        assert executor.waited == [("tmux", "-L", "harbonizer", "attach-session")]
        assert executor.captured == []

    def test_attach_returns_client_status(self, executor) -> None:
        executor.wait_returns("attach-session", 1)
        assert ManagedServer(executor).attach() == 1

    def test_run_detached_minimal(self, executor) -> None:
        result = ManagedServer(executor).run_detached("echo hi")
        assert result.ok
        assert executor.captured == [
            ("tmux", "-L", "harbonizer", "new-session", "-d", "echo hi")
        ]

    def test_run_detached_with_name_and_environment(self, executor) -> None:
        ManagedServer(executor).run_detached(
            "echo hi",
            environment={"HARBOMUX": "pre-setup", "EDITOR": "vim"},
            session_name="main",
        )
        assert executor.captured[0] == (
            "tmux", "-L", "harbonizer",
            "new-session", "-d",
            "-s", "main",
            "-e", "HARBOMUX=pre-setup",
            "-e", "EDITOR=vim",
            "echo hi",
        )

    def test_run_detached_reports_failure(self, executor) -> None:
        executor.respond("new-session", returncode=1, stderr="duplicate session: main")
        result = ManagedServer(executor).run_detached("echo hi", session_name="main")
        assert not result.ok
        assert "duplicate session" in result.stderr

    def test_detach_client_on_default_server(self, executor) -> None:
        TmuxServer(executor).detach_client("harbomux harbour")
        assert executor.captured == [("tmux", "detach-client", "-E", "harbomux harbour")]

    def test_set_environment_is_global(self, executor) -> None:
        ManagedServer(executor).set_environment("HARBOMUX", "1")
        assert executor.captured == [
            ("tmux", "-L", "harbonizer", "set-environment", "-g", "HARBOMUX", "1")
        ]

    def test_set_session_environment_targets_session(self, executor) -> None:
        ManagedServer(executor).set_session_environment("HARBOMUX", "1", target="%3")
        assert executor.captured == [
            ("tmux", "-L", "harbonizer", "set-environment", "-t", "%3", "HARBOMUX", "1")
        ]

    def test_set_session_environment_defaults_to_current_session(self, executor) -> None:
        ManagedServer(executor).set_session_environment("HARBOMUX", "1")
        assert executor.captured == [
            ("tmux", "-L", "harbonizer", "set-environment", "HARBOMUX", "1")
        ]
