"""
The closed set of harbomux commands and the static help text.

``internal`` is reserved for the bootstrap handshake's self-invocation and is
never listed in help or offered as a suggestion.
"""

from __future__ import annotations

from enum import Enum


class Command(str, Enum):
    """Recognized top-level verbs."""

    HARBOUR = "harbour"
    HELP = "help"
    START = "start"
    TEST = "test"
    VERSION = "version"
    INTERNAL = "internal"

    @classmethod
    def lookup(cls, name: str) -> Command | None:
        try:
            return cls(name)
        except ValueError:
            return None

    @property
    def hidden(self) -> bool:
        return self is Command.INTERNAL


_DESCRIPTIONS: dict[Command, str] = {
    Command.HARBOUR: "Enter the harbomux session, creating it if needed",
    Command.HELP: "Show this message",
    Command.START: "Reserved",
    Command.TEST: "Report where this shell is running",
    Command.VERSION: "Show harbomux version",
}

PUBLIC_COMMANDS: tuple[Command, ...] = tuple(c for c in Command if not c.hidden)


def render_help() -> str:
    """Static usage text listing every public command."""
    width = max(len(c.value) for c in PUBLIC_COMMANDS)
    lines = ["Usage: harbomux [--debug] COMMAND", "", "Commands:"]
    for command in PUBLIC_COMMANDS:
        lines.append(f"  {command.value.ljust(width)}  {_DESCRIPTIONS[command]}")
    lines.append("")
    lines.append("Use 'harbomux COMMAND --help' for command options.")
    return "\n".join(lines)


HELP_TEXT = render_help()

__all__ = ["HELP_TEXT", "PUBLIC_COMMANDS", "Command", "render_help"]
