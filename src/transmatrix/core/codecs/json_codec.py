from __future__ import annotations

"""
JSON Codec.

Nested '{file: {key: {lang: value}}}' document, UTF-8 without ASCII
escaping, pretty printed.
"""

import json
from typing import Any, Sequence

from transmatrix.core.codecs.base import TabularCodec, fill_missing_languages
from transmatrix.domain.exceptions import MalformedInput
from transmatrix.domain.tree_models import LanguageMatrix

JSON_INDENT = 4


class JsonCodec(TabularCodec):
    name = "json"
    extension = ".json"

    def encode(self, matrix: LanguageMatrix, languages: Sequence[str]) -> bytes:
        document = {
            file_id: {
                key: {lang: values.get(lang, "") for lang in languages}
                for key, values in keys.items()
            }
            for file_id, keys in matrix.items()
        }
        return json.dumps(document, ensure_ascii=False, indent=JSON_INDENT).encode("utf-8")

    def decode(self, data: bytes) -> LanguageMatrix:
        """
        Parse the nested document.

        Only the three mapping levels are checked here; leaf types are
        validated later so a numeric value surfaces as a ValueTypeError.
        A language left out of an entry decodes to "".
        """
        try:
            document: Any = json.loads(data.decode("utf-8-sig"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise MalformedInput(f"Invalid JSON document: {e}") from e

        if not isinstance(document, dict):
            raise MalformedInput("JSON root must be an object of files.")

        for file_id, keys in document.items():
            if not isinstance(keys, dict):
                raise MalformedInput(f"JSON file entry '{file_id}' must be an object of keys.")
            for key, values in keys.items():
                if not isinstance(values, dict):
                    raise MalformedInput(f"JSON key '{file_id}:{key}' must be an object of languages.")

        return fill_missing_languages(document)
