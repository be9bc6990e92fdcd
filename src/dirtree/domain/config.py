from __future__ import annotations

"""
Configuration Domain Management.

Handles persistent storage of the last session settings using JSON in the
user data directory. Stored values are merged over defaults so new keys are
always present.
"""

import json
import logging
import os
from typing import Any, Dict

from dirtree.infra.fs import get_user_data_dir
from dirtree.infra.logging.config import DEFAULT_LOG_BACKUP_COUNT, DEFAULT_LOG_MAX_BYTES

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
CONFIG_FILE_NAME = "config.json"
ERROR_LOG_FILE_NAME = "scan_errors.txt"
CURRENT_CONFIG_VERSION = "1.0.0"


def get_config_file() -> str:
    """Absolute path of the persistent configuration file."""
    return os.path.join(get_user_data_dir(), CONFIG_FILE_NAME)


def get_default_error_log_path() -> str:
    """Absolute path used for the scan error report when none is configured."""
    return os.path.join(get_user_data_dir(), ERROR_LOG_FILE_NAME)


# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # IO Paths
        "input_path": os.getcwd(),
        "output_file": "",

        # Output
        "print_listing": True,

        # Diagnostics
        "save_error_log": False,
        "error_log_path": "",
        "log_level": "INFO",
        "log_file": "",
        "log_max_bytes": DEFAULT_LOG_MAX_BYTES,
        "log_backup_count": DEFAULT_LOG_BACKUP_COUNT,
    }


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config() -> Dict[str, Any]:
    """
    Load the last session configuration from disk.

    Returns:
        Dict[str, Any]: Stored values merged over defaults, or plain defaults
                        when the file is missing or unreadable.
    """
    config = get_default_config()
    config_file = get_config_file()

    if not os.path.exists(config_file):
        logger.debug("Config file not found. Returning defaults.")
        return config

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config: {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Resetting to defaults.")
        return config

    session = data.get("last_session", {})
    if isinstance(session, dict):
        config.update({k: v for k, v in session.items() if k in config})
    return config


def save_config(config: Dict[str, Any]) -> None:
    """
    Persist the provided config as the 'last_session'.

    Args:
        config: The configuration dictionary to save.
    """
    config_file = get_config_file()
    state = {
        "version": CURRENT_CONFIG_VERSION,
        "last_session": config,
    }
    try:
        os.makedirs(os.path.dirname(config_file), exist_ok=True)
        with open(config_file, "w", encoding="utf-8") as f:
            json.dump(state, f, ensure_ascii=False, indent=4)
        logger.debug(f"Configuration saved to {config_file}")
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")
