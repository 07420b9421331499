"""Access to the per-invocation Runtime from inside commands."""

from __future__ import annotations

import typer
from pydantic import ValidationError

from harbomux.cli.errors import ExitCode, print_invalid_config_error
from harbomux.core.runtime import Runtime


def get_runtime(ctx: typer.Context) -> Runtime:
    """
    Return the Runtime for this invocation, building it on first use.

    ``dispatch`` passes a prebuilt Runtime as the root context object;
    otherwise it is created here and stored on the root context.
    """
    root = ctx.find_root()
    if root.obj is None:
        try:
            root.obj = Runtime.create()
        except ValidationError as e:
            print_invalid_config_error(str(e))
            raise typer.Exit(ExitCode.USER_ERROR) from e
    runtime: Runtime = root.obj
    return runtime
