from __future__ import annotations

"""
Internationalization (i18n) Utility.

Resolves the tool's own user-facing messages from nested JSON locale
files using the same dotted-path notation as the translation engine, with
'str.format' interpolation.
"""

import json
import logging
import os
from typing import Any, Dict

from transmatrix.core.tree.paths import split_path
from transmatrix.domain.constants import DEFAULT_LANGUAGE
from transmatrix.domain.exceptions import InvalidPath

logger = logging.getLogger(__name__)

LOCALES_REL_PATH = os.path.join("..", "interface", "locales")


class I18n:
    """
    Resource manager for locale-specific message strings.
    """

    def __init__(self, locale: str = DEFAULT_LANGUAGE):
        self._locale = locale
        self._translations: Dict[str, Any] = {}
        self.is_loaded = False

        base_dir = os.path.dirname(os.path.abspath(__file__))
        self._locales_path = os.path.abspath(os.path.join(base_dir, LOCALES_REL_PATH))

        self.load_locale(locale)

    @property
    def locale(self) -> str:
        return self._locale

    def load_locale(self, locale: str) -> None:
        """
        Load a locale dictionary from the locales directory.

        Args:
            locale: Locale identifier (e.g. 'en').
        """
        file_path = os.path.join(self._locales_path, f"{locale}.json")

        if not os.path.exists(file_path):
            logger.warning(f"I18n: Locale resource missing at '{file_path}'. Fallback active.")
            self._translations = {}
            self.is_loaded = False
            return

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                self._translations = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"I18n: Corruption in locale file {file_path}: {e}")
            self._translations = {}
            self.is_loaded = False
            return

        self._locale = locale
        self.is_loaded = True

    def t(self, key: str, default: str = "", **kwargs: Any) -> str:
        """
        Resolve and format a message by dotted key.

        Args:
            key: Hierarchical identifier (e.g. 'cli.status.exported').
            default: Text used when the key is not found (the key itself if empty).
            **kwargs: Interpolation variables.

        Returns:
            str: The formatted message.
        """
        try:
            current: Any = self._translations
            for segment in split_path(key):
                current = current.get(segment) if isinstance(current, dict) else None
        except InvalidPath:
            current = None

        template = current if isinstance(current, str) else (default or key)
        if not kwargs:
            return template
        try:
            return template.format(**kwargs)
        except (KeyError, IndexError, ValueError) as e:
            logger.debug(f"I18n: Interpolation failed for '{key}': {e}")
            return template


# Shared instance for the interface layer
i18n = I18n(DEFAULT_LANGUAGE)
