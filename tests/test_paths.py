# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for path resolution and display helpers."""

from pathlib import Path

import pytest

from denolint.errors import PathError
from denolint.paths import (
    display_path,
    make_absolute,
    path_to_str,
    relative_posix,
    resolve_path,
    strip_extended_prefix,
)


def test_absolute_input_is_returned_unchanged(tmp_path: Path) -> None:
    missing = tmp_path / "does" / "not" / "exist"

    resolved = resolve_path(missing, Path("/elsewhere"))

    assert resolved.path == missing
    assert resolved.canonical is False


def test_relative_input_is_canonicalised(tmp_path: Path) -> None:
    (tmp_path / "src").mkdir()

    resolved = resolve_path("./src/../src", tmp_path)

    assert resolved.canonical is True
    assert resolved.path == (tmp_path / "src").resolve()


def test_missing_relative_input_falls_back_to_joined_path(tmp_path: Path) -> None:
    resolved = resolve_path("missing/dir", tmp_path)

    assert resolved.canonical is False
    assert resolved.path == tmp_path / "missing" / "dir"
    assert make_absolute("missing/dir", tmp_path) == tmp_path / "missing" / "dir"


def test_strip_extended_prefix() -> None:
    assert strip_extended_prefix(Path("\\\\?\\C:\\work")) == Path("C:\\work")
    assert strip_extended_prefix(Path("/work")) == Path("/work")


def test_path_to_str_rejects_unencodable_paths() -> None:
    with pytest.raises(PathError, match="Convert path to string failed"):
        path_to_str("bad-\udcff.ts")

    assert path_to_str(Path("/work/a.ts")) == "/work/a.ts"


def test_relative_and_display_paths(tmp_path: Path) -> None:
    inside = tmp_path / "pkg" / "a.ts"
    outside = Path("/opt/other.ts")

    assert relative_posix(inside, tmp_path) == "pkg/a.ts"
    assert relative_posix(outside, tmp_path) is None
    assert display_path(inside, tmp_path) == "pkg/a.ts"
    assert display_path(outside, tmp_path) == "/opt/other.ts"
