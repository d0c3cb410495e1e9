from __future__ import annotations

"""
Tree Flattening.

Walks nested translation trees into flat dot-notation mappings and
rebuilds trees from such mappings.
"""

from typing import Dict, Mapping, Sequence

from transmatrix.core.tree.merge import insert
from transmatrix.core.tree.paths import join_path, split_path
from transmatrix.domain.exceptions import ValueTypeError
from transmatrix.domain.tree_models import FlatTree, Tree


def flatten(tree: Tree, prefix: Sequence[str] = ()) -> FlatTree:
    """
    Flatten a nested tree into a 'dotted key -> value' mapping.

    Leaves are emitted depth-first in dict order. Empty branches produce
    no entry.

    Args:
        tree: Branch to walk.
        prefix: Segments prepended to every emitted key.

    Returns:
        FlatTree: Flat mapping in stable order.

    Raises:
        ValueTypeError: If a leaf is not a string.
        InvalidPath: If a key cannot form a path segment.
    """
    result: Dict[str, str] = {}
    base = tuple(prefix)

    for key, value in tree.items():
        path = base + (key,)
        if isinstance(value, dict):
            result.update(flatten(value, path))
        elif isinstance(value, str):
            result[join_path(path)] = value
        else:
            raise ValueTypeError(
                f"Leaf '{'.'.join(str(p) for p in path)}' must be a string, "
                f"received {type(value).__name__}."
            )

    return result


def unflatten(mapping: Mapping[str, str]) -> Tree:
    """
    Rebuild a nested tree from a 'dotted key -> value' mapping.

    Pairs are applied in order; when one key is a strict prefix of another,
    the pair applied last wins at the shared node.

    Args:
        mapping: Flat mapping.

    Returns:
        Tree: Newly built tree.
    """
    tree: Tree = {}
    for dotted_key, value in mapping.items():
        insert(tree, split_path(dotted_key), value)
    return tree
