"""
Harbomux CLI - harbour command.

Gets the user into the managed session from wherever they are:
- already inside it: say so
- inside another tmux session: detach, and let the outer shell re-run harbour
- bare shell with the server up: attach
- bare shell with no server: bootstrap a new session in the background
"""

import typer

from harbomux.cli.errors import ExitCode, console, print_error, print_launch_failure_error
from harbomux.cli.state import get_runtime
from harbomux.core.bootstrap import LaunchFailure
from harbomux.core.services.harbour import HarbourOutcome


def harbour(ctx: typer.Context) -> None:
    """
    Enter the harbomux session, creating it if needed.

    Examples:
        harbomux harbour          # from any shell
        harbomux --debug harbour  # log every tmux call
    """
    runtime = get_runtime(ctx)
    service = runtime.harbour_service()

    try:
        result = service.harbour()
    except LaunchFailure as e:
        print_launch_failure_error(str(e), e.label)
        raise typer.Exit(ExitCode.GENERAL_ERROR) from e

    if result.outcome is HarbourOutcome.ALREADY_ACTIVE:
        console.print("[green]Already in harbomux![/green]")
        return

    if result.outcome is HarbourOutcome.DETACHED:
        if result.exit_status != 0:
            print_error(
                "Could not leave the current tmux session",
                reason=result.detail or f"tmux exited {result.exit_status}",
                solution="detach manually (Ctrl+b d) and run harbomux harbour",
            )
            raise typer.Exit(ExitCode.GENERAL_ERROR)
        return

    if result.outcome is HarbourOutcome.ATTACHED:
        if result.exit_status != 0:
            raise typer.Exit(result.exit_status)
        return

    label = runtime.managed_server.label
    console.print(f"[bold]Started harbomux session on tmux server '{label}'[/bold]")
    console.print("Not in a harbomux session yet.")
    console.print("[cyan]→ Attach with:[/cyan] harbomux harbour")
