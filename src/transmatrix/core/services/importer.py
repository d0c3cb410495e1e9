from __future__ import annotations

"""
Translation Import Reconciler.

Decodes a tabular document, validates it, re-groups its rows per
(file, language) and merges each group into the tree already stored for
that pair. Groups are independent: a failing group is logged and reported
while the remaining groups are still processed. Only an unavailable store
aborts the run. There is no rollback; re-running the same import is
idempotent.
"""

import logging
import os
from typing import List, Tuple

from transmatrix.core.codecs import get_codec
from transmatrix.core.matrix import regroup, validate_matrix
from transmatrix.core.services.store import TreeStore
from transmatrix.core.tree.flatten import unflatten
from transmatrix.core.tree.merge import merge_trees
from transmatrix.domain.constants import DEFAULT_FORMAT
from transmatrix.domain.exceptions import (
    ReconciliationError,
    StoreUnavailable,
    TranslationError,
)
from transmatrix.domain.result_models import (
    GroupFailure,
    ImportResult,
    create_import_error,
    create_import_result,
)
from transmatrix.domain.tree_models import FlatTree, LanguageMatrix

logger = logging.getLogger(__name__)


class ImportReconciler:
    """
    Merges imported language matrices into a tree store.
    """

    def __init__(self, store: TreeStore, dry_run: bool = False) -> None:
        """
        Args:
            store: Destination tree store.
            dry_run: Compute every merge but skip persistence.
        """
        self._store = store
        self._dry_run = dry_run

    def import_bytes(self, data: bytes, fmt: str = DEFAULT_FORMAT, source: str = "") -> ImportResult:
        """
        Decode a document with the codec of 'fmt' and reconcile it.

        Raises:
            UnsupportedFormat, MalformedInput: The document cannot be decoded.
            InvalidPath, ValueTypeError: The payload fails validation.
        """
        codec = get_codec(fmt)
        matrix = codec.decode(data)
        logger.info(f"{codec.name.upper()} data read successfully: {len(matrix)} file(s)")
        return self.reconcile(matrix, source=source, fmt=codec.name)

    def reconcile(self, matrix: LanguageMatrix, source: str = "", fmt: str = "") -> ImportResult:
        """
        Validate a matrix and merge every (file, language) group into the store.

        Validation runs over the whole payload before the first write, so a
        systemically bad payload never produces a partial import.

        Args:
            matrix: Decoded language matrix.
            source: Input path, for reporting.
            fmt: Codec name, for reporting.

        Returns:
            ImportResult: Succeeded and failed groups. If the store becomes
                unavailable the run stops and the result carries the error
                plus the groups processed so far.

        Raises:
            InvalidPath, ValueTypeError, MalformedInput: The payload fails validation.
        """
        validate_matrix(matrix)
        groups = regroup(matrix)
        logger.info(f"Merging {len(groups)} file/language group(s) into the store")

        succeeded: List[Tuple[str, str]] = []
        failed: List[GroupFailure] = []

        for (file_id, language), overlay in groups.items():
            try:
                self._reconcile_group(file_id, language, overlay)
            except StoreUnavailable as e:
                remaining = len(groups) - len(succeeded) - len(failed)
                logger.critical(f"Store unavailable, aborting with {remaining} group(s) left unprocessed: {e}")
                return create_import_error(
                    f"StoreUnavailable: {e}", source, fmt, succeeded=succeeded, failed=failed
                )
            except ReconciliationError as e:
                logger.error(f"{e} (keys: {', '.join(e.keys)})")
                failed.append(GroupFailure(file_id=file_id, language=language, keys=e.keys, error=str(e)))
                continue

            succeeded.append((file_id, language))

        logger.info(f"Import finished: {len(succeeded)} group(s) merged, {len(failed)} failed")
        return create_import_result(source, fmt, succeeded, failed, dry_run=self._dry_run)

    def _reconcile_group(self, file_id: str, language: str, overlay: FlatTree) -> None:
        """
        Read-modify-write one (file, language) tree.

        Raises:
            ReconciliationError: Any failure confined to this group.
            StoreUnavailable: The store itself is gone.
        """
        keys = list(overlay)
        try:
            existing = self._store.load_tree(file_id, language)
            merged = merge_trees(existing, unflatten(overlay))
            if self._dry_run:
                logger.info(f"[dry-run] Would merge {len(keys)} key(s) into '{file_id}' [{language}]")
                return
            saved = self._store.save_tree(file_id, language, merged)
        except StoreUnavailable:
            raise
        except (TranslationError, OSError, ValueError, TypeError) as e:
            raise ReconciliationError(file_id, language, str(e), keys) from e

        if not saved:
            raise ReconciliationError(file_id, language, "store rejected the write", keys)

        logger.info(f"Merged '{file_id}' for [{language}], updated {len(keys)} key(s)")


def import_file(
        store: TreeStore,
        input_path: str,
        fmt: str = DEFAULT_FORMAT,
        dry_run: bool = False,
) -> ImportResult:
    """
    Import a document from disk into the store.

    Every fatal condition (missing file, undecodable or invalid payload,
    unavailable store) is reported through the result instead of raised.

    Args:
        store: Destination tree store.
        input_path: Document to import.
        fmt: Codec name.
        dry_run: Skip persistence.

    Returns:
        ImportResult: Outcome of the import.
    """
    full_path = os.path.abspath(input_path)
    logger.info(f"Starting import in format '{fmt}' from {full_path}")

    if not os.path.isfile(full_path):
        msg = f"File not found: {full_path}"
        logger.error(msg)
        return create_import_error(msg, full_path, fmt)

    try:
        with open(full_path, "rb") as f:
            data = f.read()
    except OSError as e:
        logger.error(f"Cannot read '{full_path}': {e}")
        return create_import_error(str(e), full_path, fmt)

    reconciler = ImportReconciler(store, dry_run=dry_run)
    try:
        return reconciler.import_bytes(data, fmt, source=full_path)
    except TranslationError as e:
        logger.error(f"Import aborted: {type(e).__name__}: {e}")
        return create_import_error(f"{type(e).__name__}: {e}", full_path, fmt)
