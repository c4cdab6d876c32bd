# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run-scoped data models shared across the orchestration layers."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .engine.base import LintDiagnostic


@dataclass(frozen=True, slots=True)
class RunConfig:
    """Inputs fixed at invocation time for one directory scan.

    Attributes:
        working_dir: Absolute directory anchoring relative paths and ignore files.
        config_path: Location of the optional JSON configuration file.
        scan_roots: Explicit scan roots supplied by the caller.
        default_ignore_path: Fallback ignore file used when neither well-known
            ignore file exists in ``working_dir``.
    """

    working_dir: Path
    config_path: Path
    scan_roots: tuple[Path, ...] = ()
    default_ignore_path: Path | None = None


@dataclass(frozen=True, slots=True)
class FileDiagnostics:
    """Diagnostics and rendered report lines for a single file."""

    path: Path
    diagnostics: tuple[LintDiagnostic, ...] = ()
    lines: tuple[str, ...] = ()

    @property
    def has_issues(self) -> bool:
        """Return whether the engine reported at least one diagnostic."""

        return bool(self.diagnostics)


@dataclass(frozen=True, slots=True)
class LintFailure:
    """A per-file error collected instead of aborting the run."""

    path: Path
    message: str
    error: Exception = field(compare=False, repr=False)


@dataclass(frozen=True, slots=True)
class RunResult:
    """Folded outcome of a directory scan.

    Attributes:
        has_error: ``True`` iff at least one file produced diagnostics.
        reports: Per-file results in emission order.
        failures: Files whose read, decode, or lint step failed.
    """

    has_error: bool
    reports: tuple[FileDiagnostics, ...] = ()
    failures: tuple[LintFailure, ...] = ()

    @property
    def files_checked(self) -> int:
        """Return how many files were linted successfully."""

        return len(self.reports)

    @property
    def problem_count(self) -> int:
        """Return the total number of diagnostics across all files."""

        return sum(len(report.diagnostics) for report in self.reports)

    def lines(self) -> list[str]:
        """Return every rendered report line in emission order."""

        return [line for report in self.reports for line in report.lines]

    def paths_with_issues(self) -> list[Path]:
        """Return the files that produced diagnostics."""

        return [report.path for report in self.reports if report.has_issues]


__all__ = ["FileDiagnostics", "LintFailure", "RunConfig", "RunResult"]
