# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Lint engine contracts and the default deno adapter."""

from __future__ import annotations

from .base import (
    FILE_IGNORE_DIRECTIVE,
    LINE_IGNORE_DIRECTIVE,
    BaseLintEngine,
    LintDiagnostic,
    LintEngine,
    LinterOptions,
    RuleCatalog,
    SourceInfo,
)
from .deno import DenoEngine

__all__ = [
    "FILE_IGNORE_DIRECTIVE",
    "LINE_IGNORE_DIRECTIVE",
    "BaseLintEngine",
    "DenoEngine",
    "LintDiagnostic",
    "LintEngine",
    "LinterOptions",
    "RuleCatalog",
    "SourceInfo",
    "default_engine",
]


def default_engine() -> LintEngine:
    """Return the engine used when callers do not supply one."""

    return DenoEngine()
