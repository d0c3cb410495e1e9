from __future__ import annotations

"""
View Usage Scanner.

Walks the view templates of a project and collects the translation keys
they reference through '__()', '@lang()', 'trans()' and 'trans_choice()'
calls. Used to detect translation keys that no view uses.
"""

import logging
import os
import re
from typing import Iterable, Set

from transmatrix.domain.constants import DEFAULT_VIEW_EXTENSION

logger = logging.getLogger(__name__)

# First quoted argument of a translation helper call
TRANSLATION_CALL_RX = re.compile(
    r"""(?:__|@lang|trans_choice|trans)\(\s*['"]([^'"]+)['"]\s*(?:,[^)]*)?\)"""
)


def scan_used_keys(views_path: str, extension: str = DEFAULT_VIEW_EXTENSION) -> Set[str]:
    """
    Collect the translation keys referenced by view files.

    Args:
        views_path: Root directory of the view templates.
        extension: File suffix of templates to inspect ('' for every file).

    Returns:
        Set[str]: Unique keys in their fully qualified form ('file.key').
    """
    used: Set[str] = set()
    if not os.path.isdir(views_path):
        logger.warning(f"Views directory '{views_path}' not found. No keys are considered used.")
        return used

    files_scanned = 0
    for file_path in _iter_view_files(views_path, extension):
        try:
            with open(file_path, "r", encoding="utf-8", errors="replace") as f:
                content = f.read()
        except OSError as e:
            logger.warning(f"Skipping unreadable view '{file_path}': {e}")
            continue

        files_scanned += 1
        used.update(extract_keys(content))

    logger.info(f"Scanned {files_scanned} view file(s); {len(used)} unique translation key(s) in use")
    return used


def extract_keys(content: str) -> Set[str]:
    """Return the keys referenced in one template's source."""
    return set(TRANSLATION_CALL_RX.findall(content))


def _iter_view_files(root_dir: str, extension: str) -> Iterable[str]:
    for root, dirs, files in os.walk(root_dir):
        dirs.sort()
        files.sort()
        for file_name in files:
            if not extension or file_name.endswith(extension):
                yield os.path.join(root, file_name)
