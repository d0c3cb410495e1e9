from __future__ import annotations

"""
transmatrix: bulk export/import of nested translation trees.
"""

__version__ = "1.0.0"
