"""
Argv preprocessor for forgiving CLI flag and command handling.

Normalizes argv before the verb is resolved:
- ``harbomux --help`` → ``harbomux help``
- ``harbomux --version`` → ``harbomux version``
- ``harbomux --hidden setup`` → ``harbomux internal setup``
- ``harbomux help harbour`` → ``harbomux harbour --help``
- ``harbomux harbour --debug`` → ``harbomux --debug harbour``
"""

from harbomux.cli.verbs import PUBLIC_COMMANDS

_GLOBAL_FLAGS = {"--debug"}

_VERB_ALIASES = {
    "--help": "help",
    "-h": "help",
    "--version": "version",
    "-V": "version",
    "--hidden": "internal",
}

_PUBLIC_VERBS = {c.value for c in PUBLIC_COMMANDS}


def preprocess_argv(argv: list[str]) -> list[str]:
    """Normalize CLI arguments for Typer.

    Applied rules (in order):
    1. Global flags hoisted before the verb
    2. Flag spellings of verbs in verb position rewritten to the verb
    3. ``help <verb>`` → ``<verb> --help`` for public verbs, plain ``help`` otherwise
    """
    if not argv:
        return argv

    hoisted, rest = _hoist_global_flags(argv)

    if rest and rest[0] in _VERB_ALIASES:
        rest = [_VERB_ALIASES[rest[0]], *rest[1:]]

    if len(rest) > 1 and rest[0] == "help":
        target = rest[1]
        rest = [target, "--help"] if target in _PUBLIC_VERBS and target != "help" else ["help"]

    return [*hoisted, *rest]


def find_verb(argv: list[str]) -> str | None:
    """First non-flag token of a preprocessed argv, if any."""
    for token in argv:
        if not token.startswith("-"):
            return token
    return None


def _hoist_global_flags(argv: list[str]) -> tuple[list[str], list[str]]:
    """Move global flags (e.g. ``--debug``) before the verb."""
    hoisted: list[str] = []
    rest: list[str] = []
    seen: set[str] = set()
    for token in argv:
        if token in _GLOBAL_FLAGS:
            if token not in seen:
                hoisted.append(token)
                seen.add(token)
            # Drop duplicates entirely
        else:
            rest.append(token)
    return hoisted, rest
