from __future__ import annotations

"""
XML Codec.

Layout:
    <translations>
      <messages>
        <entry key="welcome.title"><en>Hi</en><fr></fr></entry>
      </messages>
    </translations>

File ids and language codes become element names, so they must be valid
XML names. Values are entity-escaped by the serializer; characters XML 1.0
cannot carry at all (most control characters) are rejected on encode.
A language element left out of an entry decodes to "".
"""

import re
import xml.etree.ElementTree as ET
from typing import Sequence

from transmatrix.core.codecs.base import TabularCodec, fill_missing_languages
from transmatrix.domain.exceptions import MalformedInput
from transmatrix.domain.tree_models import LanguageMatrix

ROOT_TAG = "translations"
ENTRY_TAG = "entry"
KEY_ATTR = "key"

_XML_NAME_RX = re.compile(r"^[^\W\d][\w.\-]*$")
_XML_ILLEGAL_CHAR_RX = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


class XmlCodec(TabularCodec):
    name = "xml"
    extension = ".xml"

    def encode(self, matrix: LanguageMatrix, languages: Sequence[str]) -> bytes:
        for lang in languages:
            _check_name(lang, "language code")

        root = ET.Element(ROOT_TAG)
        for file_id, keys in matrix.items():
            _check_name(file_id, "file id")
            file_el = ET.SubElement(root, file_id)
            for key, values in keys.items():
                _check_text(key, f"key '{file_id}:{key}'")
                entry = ET.SubElement(file_el, ENTRY_TAG, {KEY_ATTR: key})
                for lang in languages:
                    value = values.get(lang, "")
                    _check_text(value, f"value of '{file_id}:{key}' [{lang}]")
                    ET.SubElement(entry, lang).text = value

        ET.indent(root)
        return ET.tostring(root, encoding="utf-8", xml_declaration=True)

    def decode(self, data: bytes) -> LanguageMatrix:
        try:
            root = ET.fromstring(data)
        except ET.ParseError as e:
            raise MalformedInput(f"Invalid XML document: {e}") from e

        if root.tag != ROOT_TAG:
            raise MalformedInput(f"XML root must be <{ROOT_TAG}>, found <{root.tag}>.")

        matrix: LanguageMatrix = {}
        for file_el in root:
            keys = matrix.setdefault(file_el.tag, {})
            for entry in file_el.findall(ENTRY_TAG):
                key = entry.get(KEY_ATTR)
                if not key:
                    raise MalformedInput(f"<{ENTRY_TAG}> in <{file_el.tag}> lacks a '{KEY_ATTR}' attribute.")
                keys[key] = {lang_el.tag: lang_el.text or "" for lang_el in entry}

        return fill_missing_languages(matrix)


def _check_name(name: str, what: str) -> None:
    if not _XML_NAME_RX.match(name) or name.lower().startswith("xml"):
        raise MalformedInput(f"The {what} '{name}' cannot be used as an XML element name.")


def _check_text(text: str, what: str) -> None:
    if isinstance(text, str) and _XML_ILLEGAL_CHAR_RX.search(text):
        raise MalformedInput(f"The {what} contains a character that XML cannot represent.")
