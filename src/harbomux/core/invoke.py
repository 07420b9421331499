"""
Utilities for harbomux self-invocation.

A freshly created tmux session runs a plain shell that has no way to find
this program, so the command used to re-invoke harbomux is resolved once
from the running interpreter and passed along as a literal.

When dev_mode is active, harbomux uses ``uv run`` so the local checkout is
used instead of a globally installed copy.

Usage:
    from harbomux.core.invoke import self_command

    cmd = self_command() + ["harbour"]
"""

from __future__ import annotations

import os
import sys
from functools import lru_cache


def is_dev_mode() -> bool:
    """Check whether harbomux is running in development mode.

    Checks HARBOMUX_DEV_MODE env var first (fast path), then falls back
    to loading config from disk.

    Returns:
        True if dev_mode is active.
    """
    env_val = os.environ.get("HARBOMUX_DEV_MODE")
    if env_val is not None:
        return env_val.lower() not in ("false", "0", "")

    try:
        from harbomux.core.config import load_config

        return load_config().dev_mode
    except Exception:
        return False


@lru_cache(maxsize=1)
def self_command() -> tuple[str, ...]:
    """Return the command prefix for re-invoking this program.

    Returns ``("uv", "run", "python", "-m", "harbomux")`` in dev mode,
    ``(sys.executable, "-m", "harbomux")`` otherwise. Resolved once per
    process.
    """
    if is_dev_mode():
        return ("uv", "run", "python", "-m", "harbomux")
    return (os.path.abspath(sys.executable), "-m", "harbomux")
