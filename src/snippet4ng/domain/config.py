from __future__ import annotations

"""
Configuration Domain Management.

Dict-based runtime configuration with defaults, persisted as JSON in the user
data directory so a project's paths and generator command need to be given
only once.
"""

import json
import logging
import os
from typing import Any, Dict

from snippet4ng.domain.constants import (
    CURRENT_CONFIG_VERSION,
    DEFAULT_APP_ROOT,
    DEFAULT_ERROR_LOG_NAME,
    DEFAULT_INPUT_DIR,
    DEFAULT_NG_COMMAND,
    DEFAULT_SELECTOR_PREFIX,
    DEFAULT_SNIPPET_EXTENSION,
)
from snippet4ng.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "config.json"


def get_config_file() -> str:
    return os.path.join(get_user_data_dir(), CONFIG_FILE_NAME)


# -----------------------------------------------------------------------------
# Defaults
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Relative paths are resolved against 'project_root', which defaults to the
    current working directory.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # IO Paths
        "input_path": DEFAULT_INPUT_DIR,
        "project_root": os.getcwd(),
        "app_root": DEFAULT_APP_ROOT,
        "snippet_extension": DEFAULT_SNIPPET_EXTENSION,

        # Generator
        "ng_command": DEFAULT_NG_COMMAND,
        "selector_prefix": DEFAULT_SELECTOR_PREFIX,

        # Diagnostics
        "save_error_log": False,
        "error_log_path": DEFAULT_ERROR_LOG_NAME,
    }


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config() -> Dict[str, Any]:
    """
    Load the persisted configuration merged over the defaults.

    A missing or unreadable file yields the defaults.
    """
    config = get_default_config()
    config_file = get_config_file()

    if not os.path.exists(config_file):
        logger.debug("Config file not found. Using defaults.")
        return config

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config: {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Using defaults.")
        return config

    config.update(data.get("settings", {}))
    return config


def save_config(config: Dict[str, Any]) -> None:
    """
    Persist the configuration to the user data directory.
    """
    config_file = get_config_file()
    state = {"version": CURRENT_CONFIG_VERSION, "settings": dict(config)}
    try:
        os.makedirs(os.path.dirname(config_file), exist_ok=True)
        with open(config_file, "w", encoding="utf-8") as f:
            json.dump(state, f, ensure_ascii=False, indent=4)
        logger.debug(f"Configuration saved to {config_file}")
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")
