from __future__ import annotations

"""
Translation Tree Data Models.

Provides the recursive type definitions for nested translation trees and
the flat language matrix used as the interchange shape of every tabular
format.
"""

from typing import Dict, Tuple, Union

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

# Ordered sequence of non-empty key segments, e.g. ("welcome", "title")
Path = Tuple[str, ...]

# A node is either a leaf (str) or a branch (dict of child nodes)
Tree = Dict[str, Union["Tree", str]]

# dotted key -> value, for one (file, language)
FlatTree = Dict[str, str]

# file id -> dotted key -> language -> value
LanguageMatrix = Dict[str, Dict[str, Dict[str, str]]]

# (file id, language) -> dotted key -> value
OverlayMap = Dict[Tuple[str, str], FlatTree]
