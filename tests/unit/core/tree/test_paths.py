from __future__ import annotations

"""
Unit tests for the dotted path codec.

Verifies:
1. Splitting and joining of dotted keys.
2. Rejection of empty segments and non-string input.
3. The split/join round-trip law on valid paths.
"""

import pytest

from transmatrix.core.tree.paths import join_path, split_path
from transmatrix.domain.exceptions import InvalidPath


def test_split_path_basic() -> None:
    assert split_path("welcome.title") == ("welcome", "title")
    assert split_path("failed") == ("failed",)


@pytest.mark.parametrize("bad", ["", ".", "a..b", ".a", "a."])
def test_split_path_rejects_empty_segments(bad: str) -> None:
    with pytest.raises(InvalidPath):
        split_path(bad)


def test_split_path_rejects_non_string() -> None:
    with pytest.raises(InvalidPath):
        split_path(42)


def test_join_path_basic() -> None:
    assert join_path(("a", "b", "c")) == "a.b.c"
    assert join_path(["single"]) == "single"


@pytest.mark.parametrize("bad", [(), ("a", ""), ("a", None)])
def test_join_path_rejects_invalid(bad) -> None:
    with pytest.raises(InvalidPath):
        join_path(bad)


@pytest.mark.parametrize("path", [("a",), ("a", "b"), ("validation", "custom", "email", "required")])
def test_split_join_round_trip(path) -> None:
    assert split_path(join_path(path)) == path


def test_segment_with_delimiter_is_joined_verbatim() -> None:
    """A literal '.' inside a segment is not escaped and splits differently."""
    joined = join_path(("v1.2", "notes"))
    assert joined == "v1.2.notes"
    assert split_path(joined) == ("v1", "2", "notes")
