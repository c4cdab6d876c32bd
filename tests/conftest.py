# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import re
from collections.abc import Callable
from pathlib import Path

import pytest

from denolint.engine.base import BaseLintEngine, LintDiagnostic, LinterOptions, SourceInfo
from denolint.errors import EngineError

FAILURE_MARKER = "@@engine-failure@@"

_PATTERNS: dict[str, tuple[re.Pattern[str], str, str | None]] = {
    "no-empty": (re.compile(r"\{\s*\}"), "Empty block statement", "Add code or comment to the empty block"),
    "no-debugger": (re.compile(r"\bdebugger\b"), "`debugger` statement is not allowed", None),
    "no-var": (re.compile(r"\bvar\b"), "`var` keyword is not allowed.", None),
}


class RegexEngine(BaseLintEngine):
    """In-memory engine matching a handful of rules with regular expressions."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, LinterOptions]] = []

    def all_rules(self) -> frozenset[str]:
        return frozenset(_PATTERNS)

    def recommended_rules(self) -> frozenset[str]:
        return frozenset({"no-empty", "no-debugger"})

    def check(self, file_name: str, source: str, options: LinterOptions) -> list[LintDiagnostic]:
        self.calls.append((file_name, options))
        if FAILURE_MARKER in source:
            raise EngineError("parser exploded")
        info = SourceInfo(source)
        found: list[LintDiagnostic] = []
        for code in sorted(options.rules & self.all_rules()):
            pattern, message, hint = _PATTERNS[code]
            for match in pattern.finditer(source):
                line, column = info.location(match.start())
                end_line, end_column = info.location(match.end())
                found.append(
                    LintDiagnostic(
                        file=file_name,
                        line=line,
                        column=column,
                        end_line=end_line,
                        end_column=end_column,
                        code=code,
                        message=message,
                        hint=hint,
                    ),
                )
        return sorted(found, key=lambda diag: (diag.line, diag.column))


@pytest.fixture
def engine() -> RegexEngine:
    """Return a fresh regex-backed lint engine."""
    return RegexEngine()


@pytest.fixture
def write_file() -> Callable[..., Path]:
    """Return a helper writing text files below a root, creating parents."""

    def _write(root: Path, relative: str, content: str = "") -> Path:
        target = root / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
        return target

    return _write


@pytest.fixture
def failure_marker() -> str:
    """Return source text that makes :class:`RegexEngine` raise."""
    return FAILURE_MARKER
