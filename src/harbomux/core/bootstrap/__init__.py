"""
Bootstrap handshake for the managed tmux session.

Modules:
    protocol: Versioned self-invocation contract (hidden ``internal`` verb)
    handshake: Launch side (Bootstrapper) and setup side (run_setup)

Example Usage:
    >>> from harbomux.core.bootstrap import Bootstrapper, run_setup
    >>>
    >>> # In a bare shell, server not running
    >>> Bootstrapper(server, store, program).launch()
    >>>
    >>> # Inside the new session (harbomux internal setup --protocol 1)
    >>> run_setup(store, initializer)
"""

from harbomux.core.bootstrap.handshake import (
    BootstrapError,
    Bootstrapper,
    LaunchFailure,
    SessionInitializer,
    SetupRejectedError,
    run_setup,
)
from harbomux.core.bootstrap.protocol import (
    INTERNAL_VERB,
    PROTOCOL_OPTION,
    PROTOCOL_VERSION,
    InternalAction,
    SelfInvocation,
    build_startup_command,
)

__all__ = [
    # Handshake
    "Bootstrapper",
    "SessionInitializer",
    "run_setup",
    "BootstrapError",
    "LaunchFailure",
    "SetupRejectedError",
    # Protocol
    "INTERNAL_VERB",
    "PROTOCOL_OPTION",
    "PROTOCOL_VERSION",
    "InternalAction",
    "SelfInvocation",
    "build_startup_command",
]
