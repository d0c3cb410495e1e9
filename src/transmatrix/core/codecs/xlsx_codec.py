from __future__ import annotations

"""
Spreadsheet (XLSX) Codec.

The active worksheet holds the same header and rows as the CSV format.
Spreadsheet applications drop trailing empty cells, so short rows are
padded with empty values instead of being rejected. Every text cell is
written with the string type, so a value such as "=> Next" is never stored
as a formula.
"""

import io
import logging
import zipfile
from typing import Any, List, Sequence

from openpyxl import Workbook, load_workbook
from openpyxl.utils.exceptions import IllegalCharacterError, InvalidFileException

from transmatrix.core.codecs.base import TabularCodec, header_row, iter_rows, rows_to_matrix
from transmatrix.domain.exceptions import MalformedInput
from transmatrix.domain.tree_models import LanguageMatrix

logger = logging.getLogger(__name__)

SHEET_TITLE = "Translations"


class XlsxCodec(TabularCodec):
    name = "xlsx"
    extension = ".xlsx"

    def encode(self, matrix: LanguageMatrix, languages: Sequence[str]) -> bytes:
        workbook = Workbook()
        worksheet = workbook.active
        worksheet.title = SHEET_TITLE
        rows = 0
        try:
            _append_text_row(worksheet, header_row(languages))
            for row in iter_rows(matrix, languages):
                _append_text_row(worksheet, row)
                rows += 1
        except IllegalCharacterError as e:
            raise MalformedInput(f"Value cannot be stored in a spreadsheet: {e}") from e

        buffer = io.BytesIO()
        workbook.save(buffer)
        logger.debug(f"Workbook built with {rows} data row(s)")
        return buffer.getvalue()

    def decode(self, data: bytes) -> LanguageMatrix:
        try:
            workbook = load_workbook(io.BytesIO(data), read_only=True, data_only=True)
        except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError) as e:
            raise MalformedInput(f"Unreadable spreadsheet: {e}") from e

        try:
            worksheet = workbook.active
            if worksheet is None:
                raise MalformedInput("Spreadsheet has no active worksheet.")
            rows = [_normalize_row(row) for row in worksheet.iter_rows(values_only=True)]
        finally:
            workbook.close()

        return rows_to_matrix(rows, pad_short_rows=True)


def _append_text_row(worksheet: Any, row: Sequence[str]) -> None:
    """Append a row, pinning text cells to the string type (openpyxl reads a leading '=' as a formula)."""
    worksheet.append(row)
    for cell in worksheet[worksheet.max_row]:
        if isinstance(cell.value, str):
            cell.data_type = "s"


def _normalize_row(row: Sequence[Any]) -> List[str]:
    """Render cells as strings, empty cells as '', and drop trailing empty cells."""
    cells = ["" if cell is None else str(cell) for cell in row]
    while cells and cells[-1] == "":
        cells.pop()
    return cells
