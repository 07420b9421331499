"""
Self-invocation protocol.

The bootstrap handshake runs harbomux a second time, inside the session it
just created, through the hidden ``internal`` verb:

    <program> internal <action> --protocol <version>

The version lets the hidden handler refuse a command line written by an
incompatible build (e.g. an upgrade between launch and setup).
"""

from __future__ import annotations

import shlex
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from harbomux.core.sentinel import HARBOMUX_VAR, BootstrapState

INTERNAL_VERB = "internal"
PROTOCOL_VERSION = 1
PROTOCOL_OPTION = "--protocol"

# Keeps the pane alive as an interactive shell once setup has returned
KEEP_ALIVE = 'exec "${SHELL:-/bin/sh}"'

# The pane shell is spawned before setup runs; only the startup line can
# advance its copy of the sentinel
ADVANCE_PANE = f"export {HARBOMUX_VAR}={BootstrapState.READY.value}"


class InternalAction(str, Enum):
    """Actions reachable through the hidden verb."""

    SETUP = "setup"


@dataclass(frozen=True)
class SelfInvocation:
    """One hidden-verb invocation of harbomux."""

    action: InternalAction
    version: int = PROTOCOL_VERSION

    def argv(self, program: Sequence[str]) -> list[str]:
        """
        Render the full argv.

        Example:
            >>> SelfInvocation(InternalAction.SETUP).argv(["/usr/bin/python3", "-m", "harbomux"])
            ['/usr/bin/python3', '-m', 'harbomux', 'internal', 'setup', '--protocol', '1']
        """
        return [*program, INTERNAL_VERB, self.action.value, PROTOCOL_OPTION, str(self.version)]


def build_startup_command(invocation_argv: Sequence[str], rc_path: Path | None = None) -> str:
    """
    Build the shell command line the new session starts with.

    Args:
        invocation_argv: Full argv of the hidden setup invocation
        rc_path: Shell file to source first; skipped when missing

    Returns:
        A single ``sh -c`` compatible command line. The sentinel is
        advanced in the pane shell only when setup exits 0.
    """
    parts: list[str] = []
    if rc_path is not None and rc_path.is_file():
        parts.append(f". {shlex.quote(str(rc_path))}")
    parts.append(f"{shlex.join(invocation_argv)} && {ADVANCE_PANE}")
    parts.append(KEEP_ALIVE)
    return "; ".join(parts)
