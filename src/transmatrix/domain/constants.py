from __future__ import annotations

"""
Domain Constants.

Centralizes the reserved column names, default file names and format
identifiers shared by the codecs, services and interfaces.
"""

from typing import List

PATH_DELIMITER = "."
DEFAULT_LANGUAGE = "en"

# Reserved leading columns of every row-based format
HEADER_FILE = "File"
HEADER_KEY = "Key"
RESERVED_COLUMNS: List[str] = [HEADER_FILE, HEADER_KEY]

DEFAULT_FORMAT = "csv"

DEFAULT_EXPORT_FILE = "translations.csv"
DEFAULT_IMPORT_FILE = "translations.csv"
DEFAULT_MISSING_FILE = "missing_translations.csv"
DEFAULT_UNUSED_FILE = "unused_translations.csv"

EXPORT_TIMESTAMP_FMT = "%Y%m%d_%H%M%S"

DEFAULT_VIEW_EXTENSION = ".blade.php"

# Extension used by the JSON-backed tree store
STORE_FILE_EXTENSION = ".json"

