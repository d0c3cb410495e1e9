from __future__ import annotations

"""
Language Matrix Builder.

Pivots per-language translation trees into the flat (file, key) x language
matrix shared by every tabular format, and provides the inverse regrouping
used by the importer together with payload validation and row filters.
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Set

from transmatrix.core.tree.flatten import flatten
from transmatrix.core.tree.paths import split_path
from transmatrix.domain.constants import DEFAULT_LANGUAGE
from transmatrix.domain.exceptions import MalformedInput, ValueTypeError
from transmatrix.domain.tree_models import LanguageMatrix, OverlayMap, Tree

logger = logging.getLogger(__name__)

# ==============================================================================
# EXPORT DIRECTION
# ==============================================================================

def build_entry(per_language_trees: Mapping[str, Tree], file_id: str) -> Dict[str, Dict[str, str]]:
    """
    Flatten every language tree of one file and pivot to key -> language -> value.

    Key order is first-seen while walking the languages in the given order.

    Args:
        per_language_trees: Language code -> tree of that file.
        file_id: Translation file identifier (for diagnostics).

    Returns:
        Dict[str, Dict[str, str]]: Matrix entry for the file.
    """
    entry: Dict[str, Dict[str, str]] = {}
    for language, tree in per_language_trees.items():
        flat = flatten(tree)
        logger.debug(f"Flattened '{file_id}' [{language}]: {len(flat)} key(s)")
        for key, value in flat.items():
            entry.setdefault(key, {})[language] = value
    return entry


def extract_languages(matrix: LanguageMatrix, default_language: str = DEFAULT_LANGUAGE) -> List[str]:
    """
    Collect the language codes of a matrix.

    Scans files, then keys, then languages; the default language is moved
    to the front when present.

    Args:
        matrix: Language matrix.
        default_language: Code forced to the first position.

    Returns:
        List[str]: De-duplicated, ordered language codes.
    """
    seen: Dict[str, None] = {}
    for keys in matrix.values():
        for values in keys.values():
            for language in values:
                seen.setdefault(language, None)

    languages = list(seen)
    if default_language in seen:
        languages.remove(default_language)
        languages.insert(0, default_language)
    return languages


def count_rows(matrix: LanguageMatrix) -> int:
    """Number of (file, key) rows of a matrix."""
    return sum(len(keys) for keys in matrix.values())

# ==============================================================================
# IMPORT DIRECTION
# ==============================================================================

def validate_matrix(matrix: Any) -> None:
    """
    Validate an import payload before anything is written.

    Args:
        matrix: Decoded payload.

    Raises:
        MalformedInput: If a level is not a mapping.
        InvalidPath: If a key is not a valid dotted path.
        ValueTypeError: If a value is not a string.
    """
    if not isinstance(matrix, dict):
        raise MalformedInput(f"Expected a mapping of files, received {type(matrix).__name__}.")

    for file_id, keys in matrix.items():
        if not isinstance(file_id, str) or not file_id:
            raise MalformedInput(f"Invalid file identifier {file_id!r}.")
        if not isinstance(keys, dict):
            raise MalformedInput(f"File '{file_id}' must map keys to languages.")

        for key, values in keys.items():
            split_path(key)
            if not isinstance(values, dict):
                raise MalformedInput(f"Key '{file_id}:{key}' must map languages to values.")

            for language, value in values.items():
                if not isinstance(language, str) or not language:
                    raise MalformedInput(f"Invalid language code {language!r} at '{file_id}:{key}'.")
                if not isinstance(value, str):
                    raise ValueTypeError(
                        f"Value of '{file_id}:{key}' [{language}] must be a string, "
                        f"received {type(value).__name__}."
                    )


def regroup(matrix: LanguageMatrix) -> OverlayMap:
    """
    Re-group a matrix into per (file, language) flat overlays.

    Args:
        matrix: Language matrix.

    Returns:
        OverlayMap: (file, language) -> dotted key -> value, insertion ordered.
    """
    groups: OverlayMap = {}
    for file_id, keys in matrix.items():
        for key, values in keys.items():
            for language, value in values.items():
                groups.setdefault((file_id, language), {})[key] = value
    return groups

# ==============================================================================
# ROW FILTERS
# ==============================================================================

def filter_missing(matrix: LanguageMatrix, languages: Iterable[str]) -> LanguageMatrix:
    """
    Keep rows where at least one language is absent or blank.

    Args:
        matrix: Language matrix.
        languages: Languages every row is expected to carry.

    Returns:
        LanguageMatrix: Filtered matrix (files without missing rows are dropped).
    """
    expected = list(languages)
    missing: LanguageMatrix = {}
    for file_id, keys in matrix.items():
        for key, values in keys.items():
            if any(not values.get(lang, "").strip() for lang in expected):
                missing.setdefault(file_id, {})[key] = values
    return missing


def filter_unused(matrix: LanguageMatrix, used_keys: Set[str]) -> LanguageMatrix:
    """
    Keep rows whose 'file.key' reference is not in the used key set.

    Args:
        matrix: Language matrix.
        used_keys: Fully qualified keys referenced by views (e.g. 'auth.failed').

    Returns:
        LanguageMatrix: Filtered matrix.
    """
    unused: LanguageMatrix = {}
    for file_id, keys in matrix.items():
        for key, values in keys.items():
            if f"{file_id}.{key}" not in used_keys:
                unused.setdefault(file_id, {})[key] = values
    return unused
