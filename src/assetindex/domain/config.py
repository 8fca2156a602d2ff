from __future__ import annotations

"""
Configuration Domain Management.

Handles persistent storage of the last indexing session using JSON in the
user data directory. Missing or corrupted files fall back to defaults.
"""

import json
import logging
import os
from typing import Any, Dict

from assetindex.core.indexing.filters import default_exclude_patterns
from assetindex.domain.constants import (
    CURRENT_CONFIG_VERSION,
    DEFAULT_OUTPUT_FILE,
    DEFAULT_OUTPUT_FORMAT,
)
from assetindex.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "config.json"


def get_config_file() -> str:
    return os.path.join(get_user_data_dir(), CONFIG_FILE_NAME)


# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration (Session State).
    This dictionary drives the behavior of the indexing pipeline.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # IO Paths
        "input_path": os.getcwd(),
        "output_file": DEFAULT_OUTPUT_FILE,
        "diff_dump_dir": "",

        # Manifest Format
        "output_format": DEFAULT_OUTPUT_FORMAT,
        "pretty": False,

        # Scanning
        "exclude_patterns": default_exclude_patterns(),
        "compute_crc": True,

        # Diagnostics
        "debug": False,
    }


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config() -> Dict[str, Any]:
    """
    Load the last session from disk merged over the defaults.

    Returns:
        Dict[str, Any]: The loaded configuration or defaults on failure.
    """
    defaults = get_default_config()
    config_file = get_config_file()

    if not os.path.exists(config_file):
        logger.debug("Config file not found. Returning defaults.")
        return defaults

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config: {e}. Using defaults.")
        return defaults

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Resetting to defaults.")
        return defaults

    defaults.update(data.get("last_session", {}))
    return defaults


def save_config(config: Dict[str, Any]) -> None:
    """
    Persist the provided config as the 'last_session'.

    Args:
        config: The configuration dictionary to save.
    """
    config_file = get_config_file()
    state = {"version": CURRENT_CONFIG_VERSION, "last_session": config}
    try:
        os.makedirs(os.path.dirname(config_file), exist_ok=True)
        with open(config_file, "w", encoding="utf-8") as f:
            json.dump(state, f, ensure_ascii=False, indent=4)
        logger.debug(f"Configuration saved to {config_file}")
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")
