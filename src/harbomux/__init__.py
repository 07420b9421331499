"""
Harbomux - a dedicated, persistent tmux session for one application.

Launches, attaches to, and bootstraps a background tmux server that lives
alongside (and never interferes with) any tmux the user runs by hand.
"""

__version__ = "0.1.0"

from harbomux.core.context import ExecutionContext
from harbomux.core.sentinel import BootstrapState

__all__ = ["BootstrapState", "ExecutionContext", "__version__"]
