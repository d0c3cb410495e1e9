from __future__ import annotations

"""
Integration tests for FileSystem Infrastructure.

Validates path normalization, cross-platform data directory resolution
and atomic writes.
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from transmatrix.infra.fs import (
    atomic_write_bytes,
    get_user_data_dir,
    normalize_path,
    resolve_in_dir,
    safe_mkdir,
)

# -----------------------------------------------------------------------------
# PATH RESOLUTION TESTS
# -----------------------------------------------------------------------------

def test_get_user_data_dir_windows() -> None:
    """TC-01: Verify resolution of %LOCALAPPDATA% on Windows systems."""
    mock_appdata = "C:/Users/Test/AppData/Local"
    with patch("os.name", "nt"):
        with patch.dict(os.environ, {"LOCALAPPDATA": mock_appdata}):
            path = get_user_data_dir()
            assert "Transmatrix" in path


def test_get_user_data_dir_unix() -> None:
    """TC-01: Verify resolution of ~/.transmatrix on Unix-like systems."""
    mock_home = "/home/testuser"
    with patch("os.name", "posix"):
        with patch("os.path.expanduser", return_value=mock_home):
            path = get_user_data_dir()
            assert path.replace("\\", "/").endswith("/home/testuser/.transmatrix")


def test_normalize_path_expansion() -> None:
    """TC-02: Verify expansion of environment variables and the fallback."""
    with patch.dict(os.environ, {"TEST_VAR": "my_folder"}):
        path = normalize_path("$TEST_VAR/sub", fallback=".")
        assert path.endswith(os.path.join("my_folder", "sub"))

    assert normalize_path("   ", fallback="/srv/app") == os.path.abspath("/srv/app")
    assert normalize_path(None, fallback="/srv/app") == os.path.abspath("/srv/app")


def test_resolve_in_dir(tmp_path: Path) -> None:
    assert resolve_in_dir(str(tmp_path), "out.csv") == str(tmp_path / "out.csv")
    absolute = str(tmp_path / "elsewhere" / "x.csv")
    assert resolve_in_dir("/ignored", absolute) == absolute

# -----------------------------------------------------------------------------
# WRITE OPERATIONS
# -----------------------------------------------------------------------------

def test_atomic_write_creates_parents_and_replaces(tmp_path: Path) -> None:
    target = tmp_path / "a" / "b" / "file.bin"
    atomic_write_bytes(str(target), b"first")
    atomic_write_bytes(str(target), b"second")

    assert target.read_bytes() == b"second"
    assert [p.name for p in target.parent.iterdir()] == ["file.bin"]


def test_atomic_write_failure_keeps_previous_content(tmp_path: Path) -> None:
    target = tmp_path / "file.txt"
    target.write_bytes(b"original")

    with patch("os.replace", side_effect=OSError("boom")):
        with pytest.raises(OSError):
            atomic_write_bytes(str(target), b"new")

    assert target.read_bytes() == b"original"
    assert [p.name for p in tmp_path.iterdir()] == ["file.txt"]


def test_safe_mkdir(tmp_path: Path) -> None:
    ok, err = safe_mkdir(str(tmp_path / "x" / "y"))
    assert ok and err is None

    blocker = tmp_path / "file"
    blocker.write_text("", encoding="utf-8")
    ok, err = safe_mkdir(str(blocker / "child"))
    assert not ok
    assert err
