from __future__ import annotations

"""
Unit tests for Internationalization (i18n).

Ensures the bundled locale loads, dot-notation resolution works and
missing keys or broken interpolation degrade gracefully.
"""

import json
import os
from typing import Any, Dict, Set

import pytest

from transmatrix.utils.i18n import I18n


def _get_flat_keys(d: Dict[str, Any], prefix: str = "") -> Set[str]:
    """Helper to flatten nested dictionary keys into dot-notation sets."""
    keys = set()
    for k, v in d.items():
        new_key = f"{prefix}.{k}" if prefix else k
        if isinstance(v, dict):
            keys.update(_get_flat_keys(v, new_key))
        else:
            keys.add(new_key)
    return keys


@pytest.fixture
def en() -> I18n:
    return I18n("en")


def test_bundled_locale_is_loaded(en: I18n) -> None:
    assert en.is_loaded
    assert en.locale == "en"


def test_every_locale_value_resolves(en: I18n) -> None:
    base_path = os.path.dirname(os.path.abspath(__file__))
    en_path = os.path.abspath(
        os.path.join(base_path, "..", "..", "..", "src", "transmatrix", "interface", "locales", "en.json")
    )
    with open(en_path, "r", encoding="utf-8") as f:
        keys = _get_flat_keys(json.load(f))

    assert "cli.status.exported" in keys
    for key in keys:
        assert en.t(key) != key


def test_interpolation(en: I18n) -> None:
    assert en.t("cli.status.exported", path="/tmp/x.csv") == "Export completed: /tmp/x.csv"


def test_missing_key_falls_back(en: I18n) -> None:
    assert en.t("cli.nothing.here") == "cli.nothing.here"
    assert en.t("cli.nothing.here", default="fallback") == "fallback"
    assert en.t("bad..key") == "bad..key"


def test_branch_key_is_not_a_message(en: I18n) -> None:
    assert en.t("cli.status") == "cli.status"


def test_broken_interpolation_returns_template(en: I18n) -> None:
    assert en.t("cli.status.exported", other="x") == "Export completed: {path}"


def test_unknown_locale_degrades() -> None:
    i = I18n("xx")
    assert not i.is_loaded
    assert i.t("cli.status.exported") == "cli.status.exported"
