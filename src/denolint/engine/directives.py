# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""In-source comment directives that suppress lint diagnostics."""

from __future__ import annotations

import re
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:  # pragma: no cover
    from .base import LintDiagnostic, LinterOptions, SourceInfo

_LINE_COMMENT: Final[re.Pattern[str]] = re.compile(r"//\s*(?P<body>.*)$")
_BLOCK_COMMENT: Final[re.Pattern[str]] = re.compile(r"/\*\s*(?P<body>.*?)\s*\*/")
_CODE_SPLIT: Final[re.Pattern[str]] = re.compile(r"[,\s]+")
_REASON_SEPARATOR: Final[str] = "--"


@dataclass(frozen=True, slots=True)
class Suppression:
    """A parsed directive.

    Attributes:
        line: 1-based line the directive appears on.
        codes: Rule codes targeted by the directive; empty means every rule.
    """

    line: int
    codes: frozenset[str]

    def covers(self, code: str) -> bool:
        """Return whether the directive suppresses ``code``."""

        return not self.codes or code in self.codes


def _parse_directive(body: str, directive: str) -> frozenset[str] | None:
    """Return targeted codes when ``body`` starts with ``directive``.

    Args:
        body: Comment text without the comment markers.
        directive: Directive keyword to look for.

    Returns:
        frozenset[str] | None: Targeted rule codes, or ``None`` when the comment
        is not the requested directive.
    """

    parts = body.split(_REASON_SEPARATOR, 1)[0].split(None, 1)
    if not parts or parts[0] != directive:
        return None
    rest = parts[1] if len(parts) > 1 else ""
    return frozenset(code for code in _CODE_SPLIT.split(rest.strip()) if code)


def _iter_comment_bodies(line: str) -> Iterator[str]:
    for match in _BLOCK_COMMENT.finditer(line):
        yield match.group("body")
    stripped = _BLOCK_COMMENT.sub("", line)
    match = _LINE_COMMENT.search(stripped)
    if match:
        yield match.group("body")


def _leading_comments(source: SourceInfo) -> Iterator[str]:
    """Yield the bodies of comments preceding the first statement."""

    in_block = False
    block_parts: list[str] = []
    for number in range(1, source.line_count + 1):
        text = source.line_text(number).strip()
        if in_block:
            head, closed, _ = text.partition("*/")
            block_parts.append(head.lstrip("*").strip())
            if closed:
                in_block = False
                yield " ".join(part for part in block_parts if part)
                block_parts = []
            continue
        if not text or (number == 1 and text.startswith("#!")):
            continue
        if text.startswith("//"):
            yield text[2:].strip()
            continue
        if text.startswith("/*"):
            body, closed, _ = text[2:].partition("*/")
            if closed:
                yield body.strip()
            else:
                in_block = True
                block_parts = [body.lstrip("*").strip()]
            continue
        return


def file_suppression(source: SourceInfo, directive: str) -> Suppression | None:
    """Return the whole-file suppression declared in the leading comments."""

    for body in _leading_comments(source):
        codes = _parse_directive(body, directive)
        if codes is not None:
            return Suppression(line=0, codes=codes)
    return None


def line_suppressions(source: SourceInfo, directive: str) -> dict[int, Suppression]:
    """Return next-line suppressions keyed by the line they silence.

    Args:
        source: Source being linted.
        directive: Next-line directive keyword.

    Returns:
        dict[int, Suppression]: Mapping from the suppressed 1-based line number
        to its directive.
    """

    found: dict[int, Suppression] = {}
    for number in range(1, source.line_count + 1):
        for body in _iter_comment_bodies(source.line_text(number)):
            codes = _parse_directive(body, directive)
            if codes is not None:
                found[number + 1] = Suppression(line=number, codes=codes)
    return found


def filter_suppressed(
    diagnostics: Sequence[LintDiagnostic],
    source: SourceInfo,
    options: LinterOptions,
) -> list[LintDiagnostic]:
    """Drop diagnostics silenced by file or next-line directives.

    Args:
        diagnostics: Raw diagnostics in engine order.
        source: Source text the diagnostics refer to.
        options: Engine options carrying the directive names.

    Returns:
        list[LintDiagnostic]: Diagnostics that remain visible, order preserved.
    """

    whole_file = file_suppression(source, options.file_ignore_directive)
    per_line = line_suppressions(source, options.line_ignore_directive)
    kept: list[LintDiagnostic] = []
    for diagnostic in diagnostics:
        if whole_file is not None and whole_file.covers(diagnostic.code):
            continue
        directive = per_line.get(diagnostic.line)
        if directive is not None and directive.covers(diagnostic.code):
            continue
        kept.append(diagnostic)
    return kept


__all__ = ["Suppression", "file_suppression", "filter_suppressed", "line_suppressions"]
