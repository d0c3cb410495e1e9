from __future__ import annotations

"""
Translation Domain Exceptions.

All errors raised by the tree engine, the tabular codecs and the
import/export services. Only ReconciliationError is recoverable: the
importer records it per (file, language) group and keeps going.
"""

from typing import List, Optional, Sequence


class TranslationError(Exception):
    """Base exception for translation engine errors."""


class InvalidPath(TranslationError):
    """Raised when a dotted key or an identifier cannot form a valid path."""


class MalformedInput(TranslationError):
    """Raised when tabular input (or a stored tree document) is structurally broken."""


class ValueTypeError(TranslationError):
    """Raised when a leaf value is not a string."""


class StoreUnavailable(TranslationError):
    """Raised when the translation store cannot be read or written at all."""


class UnsupportedFormat(TranslationError):
    """Raised when no codec is registered for the requested format."""


class ReconciliationError(TranslationError):
    """
    Failure while merging or persisting one (file, language) group.

    Attributes:
        file_id: Translation file identifier of the failed group.
        language: Language code of the failed group.
        keys: Dotted keys carried by the failed group.
    """

    def __init__(
            self,
            file_id: str,
            language: str,
            message: str,
            keys: Optional[Sequence[str]] = None,
    ) -> None:
        self.file_id = file_id
        self.language = language
        self.keys: List[str] = list(keys or [])
        super().__init__(f"[{file_id}/{language}] {message}")
