# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Render diagnostics and fold per-file outcomes into a run verdict."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Final

from rich.console import Console
from rich.text import Text

from .console import report_console
from .engine.base import LintDiagnostic, SourceInfo
from .logging import fail, ok, warn
from .models import FileDiagnostics, LintFailure, RunResult
from .paths import display_path

LOCATION_ARROW: Final[str] = "-->"
CARET: Final[str] = "^"
HINT_PREFIX: Final[str] = "= hint:"


def _caret_span(diagnostic: LintDiagnostic, line_text: str) -> tuple[int, int]:
    """Return the ``(start, width)`` of the caret underline on the first line."""

    start = max(diagnostic.column - 1, 0)
    if diagnostic.end_line in (None, diagnostic.line) and diagnostic.end_column is not None:
        width = diagnostic.end_column - diagnostic.column
    else:
        width = len(line_text) - start
    return start, max(width, 1)


def format_diagnostic(
    diagnostic: LintDiagnostic,
    source: SourceInfo,
    file_name: str,
) -> str:
    """Render one diagnostic as a multi-line report entry.

    Args:
        diagnostic: Diagnostic to render.
        source: Source info used to extract the offending line.
        file_name: Location label printed after the arrow.

    Returns:
        str: Entry made of the code and message, the locator, the source
        excerpt with carets and, when present, the hint.
    """

    line_text = source.line_text(diagnostic.line)
    gutter = " " * len(str(diagnostic.line))
    start, width = _caret_span(diagnostic, line_text)
    parts = [
        f"({diagnostic.code}) {diagnostic.message}",
        f"{gutter}{LOCATION_ARROW} {file_name}:{diagnostic.line}:{diagnostic.column}",
        f"{gutter} |",
        f"{diagnostic.line} | {line_text}",
        f"{gutter} | {' ' * start}{CARET * width}",
    ]
    if diagnostic.hint:
        parts.append(f"{gutter} {HINT_PREFIX} {diagnostic.hint}")
    return "\n".join(parts)


def format_diagnostics(
    diagnostics: Sequence[LintDiagnostic],
    source: SourceInfo,
    file_name: str,
    *,
    root: Path | None = None,
) -> list[str]:
    """Render every diagnostic for one file, preserving engine order.

    Args:
        diagnostics: Diagnostics reported for the file.
        source: Source info for the file.
        file_name: Name of the file as passed to the engine.
        root: Optional working directory used to shorten the displayed path.

    Returns:
        list[str]: One rendered entry per diagnostic.
    """

    label = display_path(file_name, root) if root is not None else file_name
    return [format_diagnostic(diagnostic, source, label) for diagnostic in diagnostics]


def aggregate(
    reports: Iterable[FileDiagnostics],
    failures: Iterable[LintFailure] = (),
) -> RunResult:
    """Fold per-file outcomes into a :class:`RunResult`.

    ``has_error`` reflects diagnostics only; failures are carried separately.
    """

    collected = tuple(reports)
    return RunResult(
        has_error=any(report.has_issues for report in collected),
        reports=collected,
        failures=tuple(failures),
    )


def emit_lines(lines: Iterable[str], console: Console | None = None) -> None:
    """Write rendered report entries to the operator stream."""

    target = console if console is not None else report_console()
    for line in lines:
        target.print(Text(line))


def emit_report(result: RunResult, console: Console | None = None) -> None:
    """Write every report entry of ``result`` in emission order."""

    emit_lines(result.lines(), console)


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


def summary_text(result: RunResult) -> str:
    """Return the closing summary sentence for ``result``."""

    text = f"{_plural(result.files_checked, 'file')} checked, {_plural(result.problem_count, 'problem')} found"
    if result.failures:
        text += f", {_plural(len(result.failures), 'file')} failed"
    return text


def log_summary(result: RunResult, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Print the closing summary through the logging helper matching the verdict."""

    message = summary_text(result)
    if result.failures:
        fail(message, use_emoji=use_emoji, use_color=use_color)
    elif result.has_error:
        warn(message, use_emoji=use_emoji, use_color=use_color)
    else:
        ok(message, use_emoji=use_emoji, use_color=use_color)


__all__ = [
    "aggregate",
    "emit_lines",
    "emit_report",
    "format_diagnostic",
    "format_diagnostics",
    "log_summary",
    "summary_text",
]
