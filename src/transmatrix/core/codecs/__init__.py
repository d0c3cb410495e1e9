from __future__ import annotations

"""
Tabular Codec Registry.

Maps format names to codec implementations.
"""

from typing import Dict, List, Type

from transmatrix.domain.exceptions import UnsupportedFormat

from .base import TabularCodec
from .csv_codec import CsvCodec
from .json_codec import JsonCodec
from .xlsx_codec import XlsxCodec
from .xml_codec import XmlCodec

_REGISTRY: Dict[str, Type[TabularCodec]] = {
    CsvCodec.name: CsvCodec,
    JsonCodec.name: JsonCodec,
    XmlCodec.name: XmlCodec,
    XlsxCodec.name: XlsxCodec,
}


def get_codec(fmt: str) -> TabularCodec:
    """
    Instantiate the codec registered for a format name.

    Args:
        fmt: Format name ('csv', 'json', 'xml', 'xlsx'), case-insensitive.

    Returns:
        TabularCodec: Codec instance.

    Raises:
        UnsupportedFormat: If no codec handles the format.
    """
    key = (fmt or "").strip().lower()
    if key not in _REGISTRY:
        raise UnsupportedFormat(f"Unsupported format '{fmt}'. Expected one of: {', '.join(_REGISTRY)}.")
    return _REGISTRY[key]()


def available_formats() -> List[str]:
    return list(_REGISTRY)


__all__ = [
    "TabularCodec",
    "CsvCodec",
    "JsonCodec",
    "XmlCodec",
    "XlsxCodec",
    "get_codec",
    "available_formats",
]
