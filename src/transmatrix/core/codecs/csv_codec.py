from __future__ import annotations

"""
CSV Codec.

Header 'File,Key,<languages...>' followed by one row per (file, key),
standard CSV quoting, UTF-8. A leading BOM (as written by spreadsheet
applications) is accepted on decode.
"""

import csv
import io
from typing import Sequence

from transmatrix.core.codecs.base import TabularCodec, header_row, iter_rows, rows_to_matrix
from transmatrix.domain.exceptions import MalformedInput
from transmatrix.domain.tree_models import LanguageMatrix


class CsvCodec(TabularCodec):
    name = "csv"
    extension = ".csv"

    def encode(self, matrix: LanguageMatrix, languages: Sequence[str]) -> bytes:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(header_row(languages))
        writer.writerows(iter_rows(matrix, languages))
        return buffer.getvalue().encode("utf-8")

    def decode(self, data: bytes) -> LanguageMatrix:
        try:
            text = data.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise MalformedInput(f"CSV input is not valid UTF-8: {e}") from e

        try:
            return rows_to_matrix(csv.reader(io.StringIO(text, newline="")))
        except csv.Error as e:
            raise MalformedInput(f"Unreadable CSV input: {e}") from e
