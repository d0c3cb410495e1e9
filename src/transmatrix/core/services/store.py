from __future__ import annotations

"""
Translation Tree Store.

Abstracts where per-language translation trees live. The engine only
talks to the TreeStore interface; JsonTreeStore keeps one JSON document
per file and language under '<root>/<language>/<file>.json', and
MemoryTreeStore keeps trees in a dictionary for embedding.
"""

import copy
import json
import logging
import os
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Tuple

from transmatrix.domain.constants import STORE_FILE_EXTENSION
from transmatrix.domain.exceptions import InvalidPath, MalformedInput, StoreUnavailable
from transmatrix.domain.tree_models import Tree
from transmatrix.infra.fs import atomic_write_bytes

logger = logging.getLogger(__name__)


class TreeStore(ABC):
    """
    Persistence collaborator for translation trees.
    """

    @abstractmethod
    def list_languages(self) -> List[str]:
        """Return the language codes known to the store."""

    @abstractmethod
    def list_files(self, language: str) -> List[str]:
        """Return the file ids stored for a language."""

    @abstractmethod
    def load_tree(self, file_id: str, language: str) -> Tree:
        """Return the tree of a file/language pair, or an empty tree if absent."""

    @abstractmethod
    def save_tree(self, file_id: str, language: str, tree: Tree) -> bool:
        """Persist a tree; return False if this single write failed."""


# ==============================================================================
# JSON FILE STORE
# ==============================================================================

class JsonTreeStore(TreeStore):
    """
    Filesystem store with one pretty-printed JSON document per file and language.
    """

    def __init__(self, root: str) -> None:
        self._root = os.path.abspath(root)

    @property
    def root(self) -> str:
        return self._root

    def list_languages(self) -> List[str]:
        self._check_root()
        try:
            entries = sorted(os.listdir(self._root))
        except OSError as e:
            raise StoreUnavailable(f"Cannot list language directories in '{self._root}': {e}") from e

        return [
            name for name in entries
            if not name.startswith(".") and os.path.isdir(os.path.join(self._root, name))
        ]

    def list_files(self, language: str) -> List[str]:
        _check_identifier(language, "language")
        self._check_root()
        lang_dir = os.path.join(self._root, language)
        if not os.path.isdir(lang_dir):
            return []

        try:
            entries = sorted(os.listdir(lang_dir))
        except OSError as e:
            raise StoreUnavailable(f"Cannot list files in '{lang_dir}': {e}") from e

        return [
            name[:-len(STORE_FILE_EXTENSION)] for name in entries
            if name.endswith(STORE_FILE_EXTENSION) and not name.startswith(".")
        ]

    def load_tree(self, file_id: str, language: str) -> Tree:
        path = self.tree_path(file_id, language)
        self._check_root()
        if not os.path.exists(path):
            logger.debug(f"No stored tree for '{file_id}' [{language}]. Starting empty.")
            return {}

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise MalformedInput(f"Corrupted translation file '{path}': {e}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise StoreUnavailable(f"Cannot read translation file '{path}': {e}") from e

        if not isinstance(data, dict):
            raise MalformedInput(f"Translation file '{path}' must contain a JSON object.")
        return data

    def save_tree(self, file_id: str, language: str, tree: Tree) -> bool:
        path = self.tree_path(file_id, language)
        self._check_root()
        payload = json.dumps(tree, ensure_ascii=False, indent=4) + "\n"
        try:
            atomic_write_bytes(path, payload.encode("utf-8"))
        except OSError as e:
            logger.error(f"Failed to write '{path}': {e}")
            return False

        logger.debug(f"Wrote: {path}")
        return True

    def tree_path(self, file_id: str, language: str) -> str:
        """Absolute path of the document holding a file/language tree."""
        _check_identifier(file_id, "file id")
        _check_identifier(language, "language")
        return os.path.join(self._root, language, f"{file_id}{STORE_FILE_EXTENSION}")

    def _check_root(self) -> None:
        if not os.path.isdir(self._root):
            raise StoreUnavailable(f"Translation directory '{self._root}' does not exist.")


# ==============================================================================
# IN-MEMORY STORE
# ==============================================================================

class MemoryTreeStore(TreeStore):
    """
    Dictionary-backed store. Trees are copied in and out so callers never
    share state with the store.
    """

    def __init__(self, trees: Optional[Dict[Tuple[str, str], Tree]] = None) -> None:
        self._trees: Dict[Tuple[str, str], Tree] = {}
        for (file_id, language), tree in (trees or {}).items():
            self._trees[(file_id, language)] = copy.deepcopy(tree)

    def list_languages(self) -> List[str]:
        seen: Dict[str, None] = {}
        for _, language in self._trees:
            seen.setdefault(language, None)
        return list(seen)

    def list_files(self, language: str) -> List[str]:
        return [file_id for file_id, lang in self._trees if lang == language]

    def load_tree(self, file_id: str, language: str) -> Tree:
        return copy.deepcopy(self._trees.get((file_id, language), {}))

    def save_tree(self, file_id: str, language: str, tree: Tree) -> bool:
        self._trees[(file_id, language)] = copy.deepcopy(tree)
        return True


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _check_identifier(value: str, what: str) -> None:
    """Reject ids that would escape the store layout."""
    if (
            not isinstance(value, str)
            or not value
            or value.startswith(".")
            or "/" in value
            or "\\" in value
            or os.sep in value
    ):
        raise InvalidPath(f"Invalid {what} {value!r} for the translation store.")
