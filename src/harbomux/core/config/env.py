"""Session environment file.

Values in ~/.config/harbomux/session.env (dotenv format) are exported into a
newly created managed session with ``new-session -e``. The sentinel
variables are protocol state and are never taken from this file.
"""

from __future__ import annotations

import logging
from pathlib import Path

from dotenv import dotenv_values

from harbomux.core.sentinel import HARBOMUX_VAR, TMUX_VAR

logger = logging.getLogger(__name__)

_RESERVED = frozenset({HARBOMUX_VAR, TMUX_VAR})


def read_session_env(path: Path) -> dict[str, str]:
    if not path.exists():
        return {}
    values = dotenv_values(path)
    out: dict[str, str] = {}
    for k, v in values.items():
        if k is None or v is None:
            continue
        if k in _RESERVED:
            logger.warning("Ignoring reserved variable %s in %s", k, path)
            continue
        out[str(k)] = str(v)
    return out
