from __future__ import annotations

"""
Configuration Domain Management.

Provides the default runtime configuration and loads user overrides from
a JSON file (by default '<user data dir>/config.json'). A missing or
corrupted file never stops the tool: defaults are used instead.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

from transmatrix.domain.constants import (
    DEFAULT_FORMAT,
    DEFAULT_LANGUAGE,
    DEFAULT_VIEW_EXTENSION,
)
from transmatrix.infra.fs import get_user_data_dir, safe_mkdir

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "config.json"


def default_config_path() -> str:
    return os.path.join(get_user_data_dir(), CONFIG_FILE_NAME)


# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Paths default to the conventional layout below the working directory:
    'lang/' for translation trees and 'views/' for templates. Exports are
    written to (and imports read from) the working directory.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    base = os.getcwd()
    return {
        # IO Paths
        "lang_path": os.path.join(base, "lang"),
        "views_path": os.path.join(base, "views"),
        "storage_path": base,

        # Behaviour
        "view_extension": DEFAULT_VIEW_EXTENSION,
        "default_language": DEFAULT_LANGUAGE,
        "default_format": DEFAULT_FORMAT,

        # Diagnostics
        "log_level": "INFO",
        "log_file": "",
    }


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load the configuration file merged over the defaults.

    Unknown keys are ignored.

    Args:
        config_path: Explicit JSON file; defaults to the user data directory.

    Returns:
        Dict[str, Any]: Configuration dictionary (not yet validated).
    """
    config = get_default_config()
    path = config_path or default_config_path()

    if not os.path.exists(path):
        logger.debug(f"Config file '{path}' not found. Using defaults.")
        return config

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Failed to load config '{path}': {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.warning(f"Corrupted config file '{path}'. Using defaults.")
        return config

    for key, value in data.items():
        if key in config:
            config[key] = value
        else:
            logger.debug(f"Ignoring unknown config key '{key}'")
    return config


def save_config(config: Dict[str, Any], config_path: Optional[str] = None) -> bool:
    """
    Persist a configuration dictionary as pretty JSON.

    Args:
        config: The configuration to save.
        config_path: Target file; defaults to the user data directory.

    Returns:
        bool: True if the file was written.
    """
    path = config_path or default_config_path()
    ok, err = safe_mkdir(os.path.dirname(os.path.abspath(path)))
    if not ok:
        logger.error(f"Failed to save configuration: {err}")
        return False
    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(config, f, ensure_ascii=False, indent=4)
        logger.debug(f"Configuration saved to {path}")
        return True
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")
        return False
