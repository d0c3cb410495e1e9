from __future__ import annotations

"""
Operation Result Data Models.

Defines the immutable result objects returned by the export and import
services to the interface layer, plus the factory functions used to build
them.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class GroupFailure:
    """
    One (file, language) group that could not be reconciled.

    Attributes:
        file_id: Translation file identifier.
        language: Language code.
        keys: Dotted keys the group was carrying.
        error: Descriptive failure message.
    """
    file_id: str
    language: str
    keys: List[str]
    error: str


@dataclass(frozen=True)
class ExportResult:
    """
    Result of an export run.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure.
        output_path: Absolute path of the written artifact.
        format: Codec name used for encoding.
        files: Number of translation files exported.
        rows: Number of (file, key) rows exported.
        languages: Ordered language columns.
    """
    ok: bool
    error: str
    output_path: str
    format: str
    files: int = 0
    rows: int = 0
    languages: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class ImportResult:
    """
    Result of an import run.

    Attributes:
        ok: True when decoding succeeded and no group failed.
        error: Fatal error message, empty unless the whole import aborted.
        input_path: Absolute path of the imported artifact.
        format: Codec name used for decoding.
        succeeded: Reconciled (file, language) groups in processing order.
        failed: Groups that could not be reconciled.
        dry_run: Whether writes were skipped.
    """
    ok: bool
    error: str
    input_path: str
    format: str
    succeeded: List[Tuple[str, str]] = field(default_factory=list)
    failed: List[GroupFailure] = field(default_factory=list)
    dry_run: bool = False

    @property
    def succeeded_count(self) -> int:
        return len(self.succeeded)

    @property
    def failed_count(self) -> int:
        return len(self.failed)

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_export_error(error: str, output_path: str, fmt: str) -> ExportResult:
    """Create a failed export result."""
    return ExportResult(ok=False, error=error, output_path=output_path, format=fmt)


def create_import_result(
        input_path: str,
        fmt: str,
        succeeded: List[Tuple[str, str]],
        failed: List[GroupFailure],
        dry_run: bool = False,
) -> ImportResult:
    """
    Create an import result from the per-group outcome lists.

    The result is only 'ok' when every group was reconciled.

    Args:
        input_path: Imported artifact path.
        fmt: Codec name.
        succeeded: Reconciled groups.
        failed: Failed groups.
        dry_run: Whether persistence was skipped.

    Returns:
        ImportResult: An immutable result object.
    """
    return ImportResult(
        ok=not failed,
        error="",
        input_path=input_path,
        format=fmt,
        succeeded=list(succeeded),
        failed=list(failed),
        dry_run=dry_run,
    )


def create_import_error(
        error: str,
        input_path: str,
        fmt: str,
        succeeded: Optional[List[Tuple[str, str]]] = None,
        failed: Optional[List[GroupFailure]] = None,
) -> ImportResult:
    """Create an aborted import result, keeping whatever groups already ran."""
    return ImportResult(
        ok=False,
        error=error,
        input_path=input_path,
        format=fmt,
        succeeded=list(succeeded or []),
        failed=list(failed or []),
    )
