from __future__ import annotations

"""
Translation Tree Merging.

Inserts single values into nested translation trees and merges whole
trees. Leaf/branch clashes resolve as last-writer-wins at the clashing
node; the overwritten content is reported through the logger.
"""

import logging
from typing import Any, Sequence

from transmatrix.domain.exceptions import InvalidPath
from transmatrix.domain.tree_models import Tree

logger = logging.getLogger(__name__)


def insert(tree: Tree, path: Sequence[str], value: Any) -> Tree:
    """
    Set the leaf at 'path' to 'value', creating intermediate branches.

    The tree is modified in place and returned. An intermediate node that
    currently holds a leaf is replaced by an empty branch; the terminal node
    is replaced whatever it held.

    Args:
        tree: Target tree (branch).
        path: Non-empty sequence of segments.
        value: Leaf value to store.

    Returns:
        Tree: The same tree instance.

    Raises:
        InvalidPath: If the path is empty.
    """
    if not path:
        raise InvalidPath("Cannot insert at an empty path.")

    current = tree
    for depth, segment in enumerate(path[:-1]):
        child = current.get(segment)
        if not isinstance(child, dict):
            if child is not None:
                logger.warning(
                    f"Leaf at '{'.'.join(path[:depth + 1])}' replaced by a branch "
                    f"(lost value: {child!r})"
                )
            child = {}
            current[segment] = child
        current = child

    last = path[-1]
    previous = current.get(last)
    if isinstance(previous, dict) and previous and not isinstance(value, dict):
        logger.warning(f"Branch at '{'.'.join(path)}' replaced by a leaf value")
    current[last] = value
    return tree


def merge_trees(base: Tree, overlay: Tree) -> Tree:
    """
    Structurally merge 'overlay' into a copy of 'base'.

    Keys where both sides hold branches are merged recursively; any other
    overlay key replaces the base node. Base keys missing from the overlay
    are kept. Neither input is modified.

    Args:
        base: Existing tree (e.g. the stored file content).
        overlay: Incoming tree (e.g. the imported keys).

    Returns:
        Tree: The merged tree.
    """
    merged: Tree = {k: _copy_node(v) for k, v in base.items()}

    for key, value in overlay.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = merge_trees(current, value)
        else:
            if key in merged and isinstance(current, dict) != isinstance(value, dict):
                logger.warning(f"Type clash at key '{key}': overlay value replaces existing node")
            merged[key] = _copy_node(value)

    return merged


def _copy_node(node: Any) -> Any:
    """Deep copy branches so merged output never aliases its inputs."""
    if isinstance(node, dict):
        return {k: _copy_node(v) for k, v in node.items()}
    return node
