from __future__ import annotations

"""
Translation Export Service.

Reads every language tree from the store, pivots them into a language
matrix and writes it through the selected tabular codec. Also provides
the 'missing' and 'unused' exports, which write a filtered subset of the
same rows.

The document is fully encoded in memory before anything touches the
disk, and then written atomically: a failed export never leaves a
partial file behind.
"""

import logging
import os
from datetime import datetime
from typing import Dict, List, Optional, Set

from transmatrix.core.codecs import TabularCodec, get_codec
from transmatrix.core.matrix import (
    build_entry,
    count_rows,
    extract_languages,
    filter_missing,
    filter_unused,
)
from transmatrix.core.services.store import TreeStore
from transmatrix.domain.constants import (
    DEFAULT_EXPORT_FILE,
    DEFAULT_FORMAT,
    DEFAULT_LANGUAGE,
    EXPORT_TIMESTAMP_FMT,
)
from transmatrix.domain.exceptions import TranslationError
from transmatrix.domain.result_models import ExportResult, create_export_error
from transmatrix.domain.tree_models import LanguageMatrix, Tree
from transmatrix.infra.fs import atomic_write_bytes

logger = logging.getLogger(__name__)


# ==============================================================================
# PUBLIC API
# ==============================================================================

def collect_matrix(store: TreeStore, target_file: Optional[str] = None) -> LanguageMatrix:
    """
    Load every stored tree and pivot it into a language matrix.

    Files appear in first-seen order while walking the store's languages.

    Args:
        store: Tree store to read from.
        target_file: Restrict the scan to one file id.

    Returns:
        LanguageMatrix: file -> key -> language -> value.
    """
    trees_by_file: Dict[str, Dict[str, Tree]] = {}
    for language in store.list_languages():
        for file_id in store.list_files(language):
            if target_file and file_id != target_file:
                continue
            trees_by_file.setdefault(file_id, {})[language] = store.load_tree(file_id, language)

    matrix: LanguageMatrix = {}
    for file_id, trees in trees_by_file.items():
        matrix[file_id] = build_entry(trees, file_id)

    logger.info(f"Scan complete. Found {len(matrix)} translation file(s), {count_rows(matrix)} key(s)")
    return matrix


def resolve_export_filename(fmt: str, output_name: str, now: Optional[datetime] = None) -> str:
    """
    Timestamp the default CSV export name so repeated exports don't collide.

    'translations.csv' becomes 'translations_YYYYMMDD_HHMMSS.csv' for CSV
    exports; any other name or format is returned unchanged.
    """
    if fmt.lower() != "csv" or output_name != DEFAULT_EXPORT_FILE:
        return output_name

    stamp = (now or datetime.now()).strftime(EXPORT_TIMESTAMP_FMT)
    stem, ext = os.path.splitext(DEFAULT_EXPORT_FILE)
    renamed = f"{stem}_{stamp}{ext}"
    logger.info(f"Default CSV filename detected. Writing to '{renamed}' instead")
    return renamed


def export_translations(
        store: TreeStore,
        output_path: str,
        fmt: str = DEFAULT_FORMAT,
        target_file: Optional[str] = None,
        default_language: str = DEFAULT_LANGUAGE,
) -> ExportResult:
    """
    Export every translation row.

    Args:
        store: Tree store to read from.
        output_path: Destination file.
        fmt: Codec name.
        target_file: Restrict the export to one file id.
        default_language: Language forced to the first column.

    Returns:
        ExportResult: Outcome of the export.
    """
    logger.info(f"Starting export in format '{fmt}' (file filter: {target_file or 'none'})")
    try:
        codec = get_codec(fmt)
        matrix = collect_matrix(store, target_file)
        languages = extract_languages(matrix, default_language)
        return _write_matrix(codec, matrix, languages, output_path)
    except (TranslationError, OSError) as e:
        logger.error(f"Export failed: {e}")
        return create_export_error(str(e), os.path.abspath(output_path), fmt)


def export_missing(
        store: TreeStore,
        output_path: str,
        fmt: str = DEFAULT_FORMAT,
        target_file: Optional[str] = None,
        default_language: str = DEFAULT_LANGUAGE,
) -> ExportResult:
    """
    Export rows where at least one known language is empty or absent.

    The language columns are those of the whole scan, so the exported file
    shows which language is missing and can be re-imported after editing.
    """
    logger.info(f"Starting missing translations export (file filter: {target_file or 'none'})")
    try:
        codec = get_codec(fmt)
        matrix = collect_matrix(store, target_file)
        languages = extract_languages(matrix, default_language)
        missing = filter_missing(matrix, languages)
        logger.info(f"Total missing translation rows: {count_rows(missing)}")
        return _write_matrix(codec, missing, languages, output_path)
    except (TranslationError, OSError) as e:
        logger.error(f"Missing translations export failed: {e}")
        return create_export_error(str(e), os.path.abspath(output_path), fmt)


def export_unused(
        store: TreeStore,
        used_keys: Set[str],
        output_path: str,
        fmt: str = DEFAULT_FORMAT,
        target_file: Optional[str] = None,
        default_language: str = DEFAULT_LANGUAGE,
) -> ExportResult:
    """
    Export rows whose 'file.key' is not referenced by any view.

    Args:
        store: Tree store to read from.
        used_keys: Keys found by the usage scanner.
        output_path: Destination file.
        fmt: Codec name.
        target_file: Restrict the export to one file id.
        default_language: Language forced to the first column.

    Returns:
        ExportResult: Outcome of the export.
    """
    logger.info(f"Starting unused translations export (file filter: {target_file or 'none'})")
    try:
        codec = get_codec(fmt)
        matrix = collect_matrix(store, target_file)
        languages = extract_languages(matrix, default_language)
        unused = filter_unused(matrix, used_keys)
        logger.info(
            f"{count_rows(matrix)} key(s) defined, {len(used_keys)} used in views, "
            f"{count_rows(unused)} unused"
        )
        return _write_matrix(codec, unused, languages, output_path)
    except (TranslationError, OSError) as e:
        logger.error(f"Unused translations export failed: {e}")
        return create_export_error(str(e), os.path.abspath(output_path), fmt)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _write_matrix(
        codec: TabularCodec,
        matrix: LanguageMatrix,
        languages: List[str],
        output_path: str,
) -> ExportResult:
    logger.info(f"Languages found: {', '.join(languages) or '(none)'}")
    payload = codec.encode(matrix, languages)

    full_path = os.path.abspath(output_path)
    atomic_write_bytes(full_path, payload)

    rows = count_rows(matrix)
    logger.info(f"Wrote {rows} row(s) to {full_path}")
    return ExportResult(
        ok=True,
        error="",
        output_path=full_path,
        format=codec.name,
        files=len(matrix),
        rows=rows,
        languages=list(languages),
    )
