from __future__ import annotations

from .flatten import flatten, unflatten
from .merge import insert, merge_trees
from .paths import join_path, split_path

__all__ = [
    "flatten",
    "unflatten",
    "insert",
    "merge_trees",
    "join_path",
    "split_path",
]
