from __future__ import annotations

"""
Dotted Path Codec.

Converts between the textual dot-notation of translation keys
('welcome.title') and the segment tuples used to walk nested trees.
Segments holding a literal delimiter are not escaped: they are joined
verbatim and will split differently.
"""

from typing import Any, Iterable

from transmatrix.domain.constants import PATH_DELIMITER
from transmatrix.domain.exceptions import InvalidPath
from transmatrix.domain.tree_models import Path


def split_path(path_string: Any) -> Path:
    """
    Split a dotted key into its path segments.

    Args:
        path_string: Dot-notation key (e.g. 'auth.failed').

    Returns:
        Path: Tuple of non-empty segments.

    Raises:
        InvalidPath: If the key is not a string or holds an empty segment.
    """
    if not isinstance(path_string, str):
        raise InvalidPath(f"Path must be a string, received {type(path_string).__name__}.")

    segments = tuple(path_string.split(PATH_DELIMITER))
    if any(seg == "" for seg in segments):
        raise InvalidPath(f"Empty segment in path '{path_string}'.")
    return segments


def join_path(path: Iterable[str]) -> str:
    """
    Join path segments back into the dotted textual form.

    Args:
        path: Sequence of segments.

    Returns:
        str: Dot-notation key.

    Raises:
        InvalidPath: If the path is empty or a segment is empty or not a string.
    """
    segments = tuple(path)
    if not segments:
        raise InvalidPath("Cannot join an empty path.")

    for seg in segments:
        if not isinstance(seg, str) or seg == "":
            raise InvalidPath(f"Invalid path segment {seg!r} in {segments!r}.")

    return PATH_DELIMITER.join(segments)
