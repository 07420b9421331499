"""
Harbomux CLI - hidden internal commands.

Reached only through the bootstrap handshake's self-invocation:

    harbomux internal setup --protocol 1

Not listed in help and not meant to be typed by hand.
"""

import logging

import typer

from harbomux.cli.errors import ExitCode, console, print_error
from harbomux.cli.state import get_runtime
from harbomux.core.bootstrap import PROTOCOL_VERSION, SetupRejectedError, run_setup

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="Internal commands used by the session bootstrap",
    no_args_is_help=True,
)


@app.command()
def setup(
    ctx: typer.Context,
    protocol: int = typer.Option(
        PROTOCOL_VERSION,
        "--protocol",
        help="Self-invocation protocol version of the launching build",
    ),
) -> None:
    """Run one-time initialization inside a newly created session."""
    if protocol != PROTOCOL_VERSION:
        print_error(
            f"Unsupported internal protocol version {protocol}",
            reason=f"This harbomux speaks protocol version {PROTOCOL_VERSION}",
            solution="restart the session with a single harbomux install",
        )
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    runtime = get_runtime(ctx)
    try:
        run_setup(runtime.store, runtime.session_initializer())
    except SetupRejectedError as e:
        logger.info("Setup rejected: %s", e)
        console.print(f"[yellow]Setup skipped:[/yellow] {e}")
        return

    console.print("[green]Harbomux session ready[/green]")
