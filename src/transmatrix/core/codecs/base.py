from __future__ import annotations

"""
Base Definitions for Tabular Codecs.

Provides the abstract codec interface and the row helpers shared by the
row-oriented formats (CSV, XLSX): one row per (file, key) laid out as
'File, Key, <lang_1>, ..., <lang_n>'.
"""

from abc import ABC, abstractmethod
from typing import Iterable, Iterator, List, Sequence

from transmatrix.domain.constants import RESERVED_COLUMNS
from transmatrix.domain.exceptions import MalformedInput
from transmatrix.domain.tree_models import LanguageMatrix


class TabularCodec(ABC):
    """
    Abstract encoder/decoder between a LanguageMatrix and an external format.
    """

    name: str = ""
    extension: str = ""

    @abstractmethod
    def encode(self, matrix: LanguageMatrix, languages: Sequence[str]) -> bytes:
        """
        Serialize a matrix.

        Args:
            matrix: File -> key -> language -> value.
            languages: Ordered language columns; absent values render as "".

        Returns:
            bytes: Encoded document.
        """

    @abstractmethod
    def decode(self, data: bytes) -> LanguageMatrix:
        """
        Parse a document back into a matrix.

        Args:
            data: Encoded document.

        Returns:
            LanguageMatrix: Decoded matrix; empty cells decode to "".

        Raises:
            MalformedInput: If the document is structurally broken.
        """

# -----------------------------------------------------------------------------
# ROW HELPERS
# -----------------------------------------------------------------------------

def header_row(languages: Sequence[str]) -> List[str]:
    return RESERVED_COLUMNS + list(languages)


def iter_rows(matrix: LanguageMatrix, languages: Sequence[str]) -> Iterator[List[str]]:
    """Yield one '[file, key, values...]' row per matrix entry."""
    for file_id, keys in matrix.items():
        for key, values in keys.items():
            yield [file_id, key] + [values.get(lang, "") for lang in languages]


def rows_to_matrix(rows: Iterable[Sequence[str]], pad_short_rows: bool = False) -> LanguageMatrix:
    """
    Build a matrix from a header row followed by data rows.

    Args:
        rows: Header first, then data rows. Blank rows are skipped.
        pad_short_rows: Treat cells missing at the end of a row as empty
            instead of rejecting the row.

    Returns:
        LanguageMatrix: Decoded matrix.

    Raises:
        MalformedInput: On a missing header, a short row or an empty File/Key cell.
    """
    iterator = iter(rows)
    header = _next_non_blank(iterator)
    if header is None:
        raise MalformedInput("Missing header row.")
    if len(header) < len(RESERVED_COLUMNS):
        raise MalformedInput(f"Header must start with {', '.join(RESERVED_COLUMNS)}; got {list(header)}.")

    languages = list(header[len(RESERVED_COLUMNS):])
    if any(not lang for lang in languages):
        raise MalformedInput(f"Header contains an empty language column: {list(header)}.")

    width = len(header)
    matrix: LanguageMatrix = {}
    line_no = 1
    for row in iterator:
        line_no += 1
        if _is_blank(row):
            continue

        cells = list(row)
        if len(cells) < width:
            if not pad_short_rows:
                raise MalformedInput(f"Row {line_no} has {len(cells)} column(s), header has {width}.")
            cells.extend([""] * (width - len(cells)))

        file_id, key = cells[0], cells[1]
        if not file_id or not key:
            raise MalformedInput(f"Row {line_no} is missing its File or Key cell.")

        matrix.setdefault(file_id, {})[key] = {
            lang: cells[idx + len(RESERVED_COLUMNS)] for idx, lang in enumerate(languages)
        }

    return matrix


def _is_blank(row: Sequence[str]) -> bool:
    return all(cell == "" for cell in row)


def _next_non_blank(iterator: Iterator[Sequence[str]]):
    for row in iterator:
        if not _is_blank(row):
            return row
    return None


def fill_missing_languages(matrix: LanguageMatrix) -> LanguageMatrix:
    """
    Give every entry a value for every language seen in the document.

    Document formats may omit a language on some entries; those cells
    decode to "" exactly like an empty CSV cell. Languages are ordered by
    first appearance.
    """
    languages: List[str] = []
    seen = set()
    for keys in matrix.values():
        for values in keys.values():
            for lang in values:
                if lang not in seen:
                    seen.add(lang)
                    languages.append(lang)

    return {
        file_id: {
            key: {lang: values.get(lang, "") for lang in languages}
            for key, values in keys.items()
        }
        for file_id, keys in matrix.items()
    }
