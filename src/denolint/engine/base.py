# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Contracts shared by lint engine adapters."""

from __future__ import annotations

from abc import ABC, abstractmethod
from bisect import bisect_right
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Final, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict

from ..media import Dialect
from .directives import filter_suppressed

FILE_IGNORE_DIRECTIVE: Final[str] = "eslint-disable"
LINE_IGNORE_DIRECTIVE: Final[str] = "eslint-disable-next-line"


class LintDiagnostic(BaseModel):
    """One rule violation reported by an engine."""

    model_config = ConfigDict(frozen=True)

    file: str
    line: int
    column: int
    end_line: int | None = None
    end_column: int | None = None
    code: str
    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class SourceInfo:
    """Source text with a line index for rendering code excerpts.

    Lines and columns exposed by this class are 1-based.
    """

    text: str
    _line_starts: tuple[int, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        starts = [0]
        for index, char in enumerate(self.text):
            if char == "\n":
                starts.append(index + 1)
        object.__setattr__(self, "_line_starts", tuple(starts))

    @property
    def line_count(self) -> int:
        """Return the number of lines in the source text."""

        return len(self._line_starts)

    def line_text(self, line: int) -> str:
        """Return the text of ``line`` without its trailing newline.

        Args:
            line: 1-based line number.

        Returns:
            str: Line contents, or an empty string when out of range.
        """

        if line < 1 or line > self.line_count:
            return ""
        start = self._line_starts[line - 1]
        end = self._line_starts[line] - 1 if line < self.line_count else len(self.text)
        return self.text[start:end].rstrip("\r")

    def location(self, offset: int) -> tuple[int, int]:
        """Return the 1-based ``(line, column)`` pair for a character ``offset``."""

        index = bisect_right(self._line_starts, offset) - 1
        return index + 1, offset - self._line_starts[index] + 1


@dataclass(frozen=True, slots=True)
class LinterOptions:
    """Per-file engine configuration.

    Attributes:
        rules: Rule codes enabled for the file.
        dialect: Grammar used to parse the file.
        file_ignore_directive: Comment directive disabling a whole file.
        line_ignore_directive: Comment directive disabling the following line.
    """

    rules: frozenset[str]
    dialect: Dialect
    file_ignore_directive: str = FILE_IGNORE_DIRECTIVE
    line_ignore_directive: str = LINE_IGNORE_DIRECTIVE


@runtime_checkable
class RuleCatalog(Protocol):
    """Expose the rule codes known to an engine."""

    def all_rules(self) -> frozenset[str]:
        """Return every rule code the engine implements."""
        ...

    def recommended_rules(self) -> frozenset[str]:
        """Return the engine's default-enabled rule codes."""
        ...


@runtime_checkable
class LintEngine(RuleCatalog, Protocol):
    """Opaque lint service consumed by the orchestrator."""

    def lint(
        self,
        file_name: str,
        source: str,
        options: LinterOptions,
    ) -> tuple[SourceInfo, list[LintDiagnostic]]:
        """Lint ``source`` and return its source info and diagnostics.

        Raises:
            EngineError: If the engine cannot process the source.
        """
        ...


class BaseLintEngine(ABC):
    """Template engine that applies ignore directives to raw diagnostics."""

    @abstractmethod
    def all_rules(self) -> frozenset[str]:
        """Return every rule code the engine implements."""

    @abstractmethod
    def recommended_rules(self) -> frozenset[str]:
        """Return the engine's default-enabled rule codes."""

    @abstractmethod
    def check(self, file_name: str, source: str, options: LinterOptions) -> Sequence[LintDiagnostic]:
        """Return raw diagnostics for ``source`` before directives are applied."""

    def lint(
        self,
        file_name: str,
        source: str,
        options: LinterOptions,
    ) -> tuple[SourceInfo, list[LintDiagnostic]]:
        """Lint ``source`` honouring the file and next-line ignore directives.

        Args:
            file_name: Name reported on each diagnostic.
            source: Decoded source text.
            options: Rule set, dialect, and directive names.

        Returns:
            tuple[SourceInfo, list[LintDiagnostic]]: Source info and surviving
            diagnostics in engine order.
        """

        info = SourceInfo(source)
        if not options.rules:
            return info, []
        raw = [diag for diag in self.check(file_name, source, options) if diag.code in options.rules]
        return info, filter_suppressed(raw, info, options)


__all__ = [
    "FILE_IGNORE_DIRECTIVE",
    "LINE_IGNORE_DIRECTIVE",
    "BaseLintEngine",
    "LintDiagnostic",
    "LintEngine",
    "LinterOptions",
    "RuleCatalog",
    "SourceInfo",
]
