# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Discovery helpers: ignore policy construction and directory traversal."""

from __future__ import annotations

from .policy import (
    DEFAULT_FILE_TYPES,
    DENOLINT_IGNORE_NAME,
    ESLINT_IGNORE_NAME,
    IGNORE_FILE_NAMES,
    FileTypeFilter,
    IgnorePolicy,
    OverrideSet,
    build_ignore_policy,
    build_override_set,
    select_ignore_file,
)
from .walker import WalkRoots, Walker, select_roots, walk

__all__ = [
    "DEFAULT_FILE_TYPES",
    "DENOLINT_IGNORE_NAME",
    "ESLINT_IGNORE_NAME",
    "IGNORE_FILE_NAMES",
    "FileTypeFilter",
    "IgnorePolicy",
    "OverrideSet",
    "WalkRoots",
    "Walker",
    "build_ignore_policy",
    "build_override_set",
    "select_ignore_file",
    "select_roots",
    "walk",
]
