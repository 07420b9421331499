"""
Configuration models and loading.

Pydantic models for harbomux configuration with layered merging:
defaults < user config < env vars.
"""

from .env import read_session_env
from .loader import (
    clear_cache,
    get_config_dir,
    get_session_env_path,
    get_shell_rc_path,
    get_user_config_path,
    get_xdg_config_home,
    load_config,
)
from .models import HarbomuxConfig

__all__ = [
    # Models
    "HarbomuxConfig",
    # Loader functions
    "clear_cache",
    "get_config_dir",
    "get_session_env_path",
    "get_shell_rc_path",
    "get_user_config_path",
    "get_xdg_config_home",
    "load_config",
    "read_session_env",
]
