"""
Configuration loading with layered merging.

Implements the configuration precedence chain:
    defaults < user config < env vars
"""

import json
import logging
import os
from pathlib import Path
from typing import Any

from .models import HarbomuxConfig

logger = logging.getLogger(__name__)

# Global cache to avoid reloading config multiple times per invocation
_config_cache: HarbomuxConfig | None = None


def get_xdg_config_home() -> Path:
    """
    Get XDG config home directory.

    Returns:
        Path to config directory (defaults to ~/.config)
    """
    if xdg_home := os.environ.get("XDG_CONFIG_HOME"):
        return Path(xdg_home)
    return Path.home() / ".config"


def get_config_dir() -> Path:
    """~/.config/harbomux/ (or XDG equivalent)"""
    return get_xdg_config_home() / "harbomux"


def get_user_config_path() -> Path:
    """~/.config/harbomux/config.json"""
    return get_config_dir() / "config.json"


def get_shell_rc_path() -> Path:
    """~/.config/harbomux/harbomuxrc - sourced by the shell of a new session."""
    return get_config_dir() / "harbomuxrc"


def get_session_env_path() -> Path:
    """~/.config/harbomux/session.env - exported into a new session."""
    return get_config_dir() / "session.env"


def load_json_file(path: Path) -> dict[str, Any] | None:
    """
    Load a JSON file, returning None if it doesn't exist or is invalid.

    Args:
        path: Path to JSON file

    Returns:
        Parsed JSON as dict, or None if file doesn't exist or can't be parsed
    """
    if not path.exists():
        return None

    try:
        with path.open() as f:
            data = json.load(f)
            if isinstance(data, dict):
                return data
            logger.warning("Ignoring config at %s: top level is not an object", path)
            return None
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("Failed to parse config at %s: %s", path, e)
        return None


def apply_env_overrides(config_dict: dict[str, Any]) -> dict[str, Any]:
    """
    Apply environment variable overrides to configuration.

    Supported env vars:
        HARBOMUX_SERVER_LABEL - overrides server_label
        HARBOMUX_TMUX - overrides tmux_binary
        HARBOMUX_SESSION_NAME - overrides session_name
        HARBOMUX_DEV_MODE - overrides dev_mode

    Args:
        config_dict: Configuration dictionary to override

    Returns:
        Configuration dictionary with env var overrides applied
    """
    result = config_dict.copy()

    if label := os.environ.get("HARBOMUX_SERVER_LABEL"):
        result["server_label"] = label

    if binary := os.environ.get("HARBOMUX_TMUX"):
        result["tmux_binary"] = binary

    if session_name := os.environ.get("HARBOMUX_SESSION_NAME"):
        result["session_name"] = session_name

    dev_mode = os.environ.get("HARBOMUX_DEV_MODE")
    if dev_mode is not None:
        result["dev_mode"] = dev_mode.lower() not in ("false", "0", "")

    return result


def load_config(use_cache: bool = True) -> HarbomuxConfig:
    """
    Load configuration with layered merging.

    Configuration precedence (highest to lowest):
        1. Environment variables (HARBOMUX_*)
        2. User config (~/.config/harbomux/config.json)
        3. Model defaults

    Args:
        use_cache: If True, return cached config from previous load

    Returns:
        Validated HarbomuxConfig instance

    Raises:
        ValidationError: If the merged config fails Pydantic validation
    """
    global _config_cache

    if use_cache and _config_cache is not None:
        return _config_cache

    merged: dict[str, Any] = {}

    if user_config := load_json_file(get_user_config_path()):
        merged.update(user_config)

    merged = apply_env_overrides(merged)

    config = HarbomuxConfig(**merged)
    _config_cache = config
    return config


def clear_cache() -> None:
    """
    Clear the cached configuration.

    Useful for testing or when config files change during execution.
    """
    global _config_cache
    _config_cache = None
