"""
Harbomux CLI - Main application entry point.

Sets up the Typer application and the ``dispatch`` function that resolves
the verb against the closed command set before handing off to Typer.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence

import click
import typer
from rich.markup import escape
from rich.table import Table

from harbomux import __version__
from harbomux.cli import harbour, internal
from harbomux.cli.argv import find_verb, preprocess_argv
from harbomux.cli.errors import ExitCode, console, print_missing_tmux_error
from harbomux.cli.state import get_runtime
from harbomux.cli.verbs import HELP_TEXT, Command
from harbomux.core.executor import SubprocessIOError
from harbomux.core.runtime import Runtime
from harbomux.core.sentinel import HARBOMUX_VAR

app = typer.Typer(
    name="harbomux",
    help="A dedicated, persistent tmux session",
    no_args_is_help=False,
    add_completion=False,
    context_settings={"help_option_names": ["--help", "-h"]},
)


@app.callback()
def main(
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug output with detailed logging",
    ),
) -> None:
    """Harbomux - a dedicated, persistent tmux session."""
    if debug:
        logging.basicConfig(level=logging.DEBUG)


app.command(name="harbour")(harbour.harbour)


@app.command(name="help")
def help_command() -> None:
    """Show usage."""
    console.print(HELP_TEXT, markup=False, highlight=False)


@app.command()
def start() -> None:
    """Reserved."""
    console.print("[dim]start is reserved and does nothing yet[/dim]")


@app.command(name="test")
def test_command(ctx: typer.Context) -> None:
    """Report where this shell is running."""
    runtime = get_runtime(ctx)
    context = runtime.classifier.classify()

    try:
        state = runtime.store.bootstrap_state().name.lower().replace("_", "-")
    except ValueError:
        state = f"unrecognized ({runtime.store.get(HARBOMUX_VAR)!r})"

    try:
        running = "yes" if runtime.managed_server.is_running() else "no"
    except SubprocessIOError:
        running = "unknown (tmux not found)"

    table = Table(title="Harbomux Context", show_header=False)
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    table.add_row("context", context.value)
    table.add_row("bootstrap state", escape(state))
    table.add_row("in session dir", "yes" if runtime.classifier.in_session_dir() else "no")
    table.add_row("server label", escape(runtime.managed_server.label))
    table.add_row("server running", running)
    console.print(table)


@app.command()
def version() -> None:
    """Show harbomux version and exit."""
    console.print(f"harbomux version {__version__}")


app.add_typer(internal.app, name="internal", hidden=True)


def print_unrecognized_command(verb: str) -> None:
    console.print(f"{escape('[' + verb + ']')} is not a recognized command!", highlight=False)
    console.print("  Help:")
    console.print(HELP_TEXT, markup=False, highlight=False)


def dispatch(argv: Sequence[str], *, runtime: Runtime | None = None) -> int:
    """
    Resolve the verb and run it.

    Args:
        argv: Arguments after the program name
        runtime: Prebuilt collaborators (built lazily from config if None)

    Returns:
        Process exit status
    """
    args = preprocess_argv(list(argv))
    verb = find_verb(args)

    if verb is None:
        console.print("[red]Error:[/red] no command given")
        console.print(HELP_TEXT, markup=False, highlight=False)
        return ExitCode.USER_ERROR

    if Command.lookup(verb) is None:
        print_unrecognized_command(verb)
        return ExitCode.USER_ERROR

    try:
        rv = app(args=args, prog_name="harbomux", standalone_mode=False, obj=runtime)
    except click.ClickException as e:
        e.show()
        return e.exit_code
    except click.exceptions.Abort:
        return ExitCode.SIGINT
    except SubprocessIOError as e:
        print_missing_tmux_error(str(e))
        return ExitCode.GENERAL_ERROR

    return int(rv) if isinstance(rv, int) else ExitCode.SUCCESS


def cli_main() -> None:
    """Console-script entry point."""
    sys.exit(dispatch(sys.argv[1:]))


__all__ = ["app", "cli_main", "dispatch"]
