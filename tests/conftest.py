from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures: a sample language matrix and a populated JSON tree store.
"""

import json
import os
import sys
from pathlib import Path
from typing import Any, Dict

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def sample_matrix() -> Dict[str, Any]:
    """
    Return a small language matrix spanning two files and three languages.

    'auth.failed' has no German value and 'messages.welcome.subtitle' has
    an empty French one.
    """
    return {
        "messages": {
            "welcome.title": {"en": "Hi", "fr": "Salut", "de": "Hallo"},
            "welcome.subtitle": {"en": "Welcome", "fr": "", "de": "Willkommen"},
        },
        "auth": {
            "failed": {"en": "Bad credentials", "fr": "Identifiants invalides"},
        },
    }


def _write_tree(root: Path, language: str, file_id: str, tree: Dict[str, Any]) -> None:
    lang_dir = root / language
    lang_dir.mkdir(parents=True, exist_ok=True)
    (lang_dir / f"{file_id}.json").write_text(json.dumps(tree, ensure_ascii=False), encoding="utf-8")


@pytest.fixture
def lang_dir(tmp_path: Path) -> Path:
    """
    Create a 'lang/' directory laid out as '<language>/<file>.json'.

    Structure:
    /lang
      /en  messages.json, auth.json
      /fr  messages.json, auth.json
      /de  messages.json
    """
    root = tmp_path / "lang"
    _write_tree(root, "en", "messages", {"welcome": {"title": "Hi", "subtitle": "Welcome"}})
    _write_tree(root, "en", "auth", {"failed": "Bad credentials"})
    _write_tree(root, "fr", "messages", {"welcome": {"title": "Salut", "subtitle": ""}})
    _write_tree(root, "fr", "auth", {"failed": "Identifiants invalides"})
    _write_tree(root, "de", "messages", {"welcome": {"title": "Hallo", "subtitle": "Willkommen"}})
    return root


@pytest.fixture
def json_store(lang_dir: Path):
    """JsonTreeStore over the populated 'lang/' fixture."""
    from transmatrix.core.services.store import JsonTreeStore
    return JsonTreeStore(str(lang_dir))
