"""
Standardized error handling and exit codes for the harbomux CLI.

Consistent error messaging with actionable guidance and standardized exit
codes across all commands.
"""

from enum import IntEnum

from rich.console import Console
from rich.markup import escape

console = Console()


class ExitCode(IntEnum):
    """Standard exit codes for harbomux CLI operations."""

    SUCCESS = 0
    """Operation completed successfully."""

    GENERAL_ERROR = 1
    """tmux reported an error, or could not be started."""

    USER_ERROR = 2
    """Missing or unrecognized command, invalid configuration."""

    SIGINT = 130
    """Terminated by SIGINT (Ctrl+C) - Unix standard."""


def print_error(
    problem: str,
    *,
    reason: str | None = None,
    solution: str | None = None,
) -> None:
    """
    Print a standardized error message with actionable guidance.

    Args:
        problem: Brief description of what went wrong
        reason: Optional explanation of why it happened
        solution: Optional command or action to fix it

    Example:
        >>> print_error(
        ...     "Could not start the harbomux session",
        ...     reason="tmux: server exited unexpectedly",
        ...     solution="tmux -L harbonizer kill-server",
        ... )
    """
    console.print(f"[red]Error:[/red] {escape(problem)}")

    if reason:
        console.print(f"[dim]{escape(reason)}[/dim]")

    if solution:
        console.print(f"[cyan]→ Try:[/cyan] {escape(solution)}")


def print_missing_tmux_error(message: str) -> None:
    """Print error when the tmux binary cannot be started."""
    print_error(
        message,
        reason="harbomux drives tmux for every operation",
        solution="install tmux, or point HARBOMUX_TMUX at the binary",
    )


def print_launch_failure_error(message: str, label: str) -> None:
    """Print error when the managed session could not be created."""
    print_error(
        "Could not start the harbomux session",
        reason=message,
        solution=f"tmux -L {label} kill-server  # then run harbomux harbour again",
    )


def print_invalid_config_error(message: str) -> None:
    """Print error when the configuration fails validation."""
    print_error(
        "Invalid harbomux configuration",
        reason=message,
        solution="check ~/.config/harbomux/config.json and HARBOMUX_* variables",
    )


__all__ = [
    "ExitCode",
    "console",
    "print_error",
    "print_invalid_config_error",
    "print_launch_failure_error",
    "print_missing_tmux_error",
]
