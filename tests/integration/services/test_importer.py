from __future__ import annotations

"""
Integration tests for the Import Reconciler.

Verifies:
1. Merging imported keys into stored trees (base keys preserved).
2. Per-group failure isolation (rejected writes, I/O errors).
3. Whole-payload validation before the first write.
4. Dry runs and aborts on an unavailable store.
"""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from transmatrix.core.codecs import XlsxCodec
from transmatrix.core.services.importer import ImportReconciler, import_file
from transmatrix.core.services.store import JsonTreeStore, MemoryTreeStore
from transmatrix.domain.exceptions import InvalidPath, StoreUnavailable, ValueTypeError

# -----------------------------------------------------------------------------
# RECONCILER
# -----------------------------------------------------------------------------

def test_import_merges_into_existing_tree() -> None:
    store = MemoryTreeStore({("messages", "en"): {"a": {"b": {"c": "OLD", "d": "KEEP"}}}})

    result = ImportReconciler(store).reconcile({"messages": {"a.b.c": {"en": "X"}}})

    assert result.ok
    assert result.succeeded == [("messages", "en")]
    assert store.load_tree("messages", "en") == {"a": {"b": {"c": "X", "d": "KEEP"}}}


def test_import_creates_missing_trees() -> None:
    store = MemoryTreeStore()
    matrix = {"auth": {"failed": {"en": "Bad", "fr": "Mauvais"}}}

    result = ImportReconciler(store).reconcile(matrix)

    assert result.succeeded == [("auth", "en"), ("auth", "fr")]
    assert store.load_tree("auth", "fr") == {"failed": "Mauvais"}


def test_import_is_idempotent() -> None:
    store = MemoryTreeStore({("f", "en"): {"x": "1"}})
    matrix = {"f": {"y.z": {"en": "2"}}}

    ImportReconciler(store).reconcile(matrix)
    first = store.load_tree("f", "en")
    ImportReconciler(store).reconcile(matrix)

    assert store.load_tree("f", "en") == first == {"x": "1", "y": {"z": "2"}}


def test_xlsx_import_keeps_values_starting_with_equals() -> None:
    store = MemoryTreeStore({("f", "en"): {"k": "=> Next"}})
    data = XlsxCodec().encode({"f": {"k": {"en": "=> Next"}}}, ["en"])

    result = ImportReconciler(store).import_bytes(data, "xlsx")

    assert result.ok
    assert store.load_tree("f", "en") == {"k": "=> Next"}

def test_failed_group_does_not_affect_others() -> None:
    store = MemoryTreeStore()
    matrix = {
        "fileA": {"k": {"en": "A"}},
        "fileB": {"k": {"fr": "B"}},
    }
    original_save = store.save_tree

    def flaky_save(file_id, language, tree):
        if (file_id, language) == ("fileB", "fr"):
            return False
        return original_save(file_id, language, tree)

    with patch.object(store, "save_tree", side_effect=flaky_save):
        result = ImportReconciler(store).reconcile(matrix)

    assert not result.ok
    assert result.error == ""
    assert result.succeeded == [("fileA", "en")]
    assert len(result.failed) == 1
    failure = result.failed[0]
    assert (failure.file_id, failure.language, failure.keys) == ("fileB", "fr", ["k"])
    assert "store rejected the write" in failure.error
    assert store.load_tree("fileA", "en") == {"k": "A"}
    assert store.load_tree("fileB", "fr") == {}


def test_io_error_in_one_group_is_isolated() -> None:
    store = MemoryTreeStore()
    original_load = store.load_tree

    def flaky_load(file_id, language):
        if file_id == "broken":
            raise OSError("permission denied")
        return original_load(file_id, language)

    with patch.object(store, "load_tree", side_effect=flaky_load):
        result = ImportReconciler(store).reconcile({
            "broken": {"k": {"en": "x"}},
            "fine": {"k": {"en": "y"}},
        })

    assert result.succeeded == [("fine", "en")]
    assert result.failed[0].file_id == "broken"
    assert "permission denied" in result.failed[0].error


def test_invalid_file_id_is_a_group_failure(tmp_path: Path) -> None:
    (tmp_path / "lang").mkdir()
    store = JsonTreeStore(str(tmp_path / "lang"))

    result = ImportReconciler(store).reconcile({
        "../escape": {"k": {"en": "x"}},
        "ok": {"k": {"en": "y"}},
    })

    assert result.succeeded == [("ok", "en")]
    assert result.failed[0].file_id == "../escape"
    assert not (tmp_path / "escape.json").exists()


def test_validation_runs_before_any_write() -> None:
    store = MemoryTreeStore()
    matrix = {
        "first": {"k": {"en": "fine"}},
        "second": {"k": {"en": 42}},
    }

    with pytest.raises(ValueTypeError):
        ImportReconciler(store).reconcile(matrix)
    assert store.list_languages() == []

    with pytest.raises(InvalidPath):
        ImportReconciler(store).reconcile({"first": {"a..b": {"en": "x"}}})


def test_dry_run_skips_persistence() -> None:
    store = MemoryTreeStore({("f", "en"): {"a": "1"}})

    result = ImportReconciler(store, dry_run=True).reconcile({"f": {"a": {"en": "2"}}})

    assert result.ok and result.dry_run
    assert result.succeeded == [("f", "en")]
    assert store.load_tree("f", "en") == {"a": "1"}


def test_store_unavailable_aborts_with_progress() -> None:
    store = MemoryTreeStore()
    original_load = store.load_tree

    def vanishing_load(file_id, language):
        if file_id == "second":
            raise StoreUnavailable("translation directory removed")
        return original_load(file_id, language)

    with patch.object(store, "load_tree", side_effect=vanishing_load):
        result = ImportReconciler(store).reconcile({
            "first": {"k": {"en": "1"}},
            "second": {"k": {"en": "2"}},
            "third": {"k": {"en": "3"}},
        })

    assert not result.ok
    assert "StoreUnavailable" in result.error
    assert result.succeeded == [("first", "en")]
    assert store.list_files("en") == ["first"]

# -----------------------------------------------------------------------------
# FILE IMPORT
# -----------------------------------------------------------------------------

def test_import_file_csv_into_json_store(json_store, lang_dir: Path, tmp_path: Path) -> None:
    source = tmp_path / "translations.csv"
    source.write_text(
        "File,Key,en,fr\n"
        "messages,welcome.title,Hello,Bonjour\n"
        "messages,welcome.footer,Bye,\n",
        encoding="utf-8",
    )

    result = import_file(json_store, str(source), "csv")

    assert result.ok
    assert result.input_path == str(source)
    fr_tree = json.loads((lang_dir / "fr" / "messages.json").read_text(encoding="utf-8"))
    assert fr_tree == {"welcome": {"title": "Bonjour", "subtitle": "", "footer": ""}}
    en_tree = json.loads((lang_dir / "en" / "messages.json").read_text(encoding="utf-8"))
    assert en_tree["welcome"]["subtitle"] == "Welcome"


def test_import_file_missing_input(json_store, tmp_path: Path) -> None:
    result = import_file(json_store, str(tmp_path / "absent.csv"))
    assert not result.ok
    assert "File not found" in result.error


def test_import_file_malformed_payload_writes_nothing(json_store, lang_dir: Path, tmp_path: Path) -> None:
    source = tmp_path / "bad.json"
    source.write_text('{"messages": {"welcome.title": {"en": null}}}', encoding="utf-8")
    before = (lang_dir / "en" / "messages.json").read_text(encoding="utf-8")

    result = import_file(json_store, str(source), "json")

    assert not result.ok
    assert result.error.startswith("ValueTypeError")
    assert (lang_dir / "en" / "messages.json").read_text(encoding="utf-8") == before


def test_import_file_unsupported_format(json_store, tmp_path: Path) -> None:
    source = tmp_path / "t.yaml"
    source.write_text("x: 1", encoding="utf-8")
    result = import_file(json_store, str(source), "yaml")
    assert not result.ok
    assert result.error.startswith("UnsupportedFormat")


def test_import_file_missing_store(tmp_path: Path) -> None:
    source = tmp_path / "t.csv"
    source.write_text("File,Key,en\nf,k,v\n", encoding="utf-8")

    result = import_file(JsonTreeStore(str(tmp_path / "no_lang")), str(source))

    assert not result.ok
    assert "StoreUnavailable" in result.error
    assert result.succeeded == []
