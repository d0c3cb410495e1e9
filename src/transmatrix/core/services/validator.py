from __future__ import annotations

"""
Configuration Validation Service.

Normalizes configuration dictionaries coming from the config file or the
command line: coerces types, expands paths and fills missing keys with
defaults. Problems are collected as warnings unless strict mode is on.
"""

import logging
from typing import Any, Dict, List, Tuple

from transmatrix.core.codecs import available_formats
from transmatrix.domain.config import get_default_config
from transmatrix.infra.fs import normalize_path

logger = logging.getLogger(__name__)

_PATH_FIELDS = ["lang_path", "views_path", "storage_path"]
_STRING_FIELDS = ["view_extension", "default_language", "default_format", "log_level", "log_file"]
_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "WARN", "ERROR", "CRITICAL"]


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize a configuration dictionary.

    Args:
        config: Raw configuration data.
        strict: Raise instead of falling back to defaults.

    Returns:
        Tuple[Dict[str, Any], List[str]]: Normalized configuration and warnings.

    Raises:
        TypeError: In strict mode, on a wrongly typed field.
        ValueError: In strict mode, on an unknown format or log level.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        config = {}

    merged: Dict[str, Any] = dict(defaults)
    merged.update({k: v for k, v in config.items() if k in defaults})

    for field in _STRING_FIELDS:
        merged[field] = _as_str(merged.get(field), defaults[field], field, warnings, strict)

    for field in _PATH_FIELDS:
        raw = _as_str(merged.get(field), defaults[field], field, warnings, strict)
        merged[field] = normalize_path(raw, defaults[field])

    merged["default_format"] = merged["default_format"].lower()
    if merged["default_format"] not in available_formats():
        _reject(
            f"Unknown default_format '{merged['default_format']}'.",
            "default_format", defaults, merged, warnings, strict,
        )

    merged["log_level"] = merged["log_level"].upper()
    if merged["log_level"] not in _LOG_LEVELS:
        _reject(
            f"Unknown log_level '{merged['log_level']}'.",
            "log_level", defaults, merged, warnings, strict,
        )

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate and strip string inputs; empty strings keep the fallback."""
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _reject(
        msg: str,
        field: str,
        defaults: Dict[str, Any],
        merged: Dict[str, Any],
        warnings: List[str],
        strict: bool,
) -> None:
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using '{defaults[field]}'.")
    merged[field] = defaults[field]
