# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Public entry points for single-buffer linting and directory scans."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Sequence
from pathlib import Path

from rich.console import Console

from .config import load_optional_config
from .console import report_console
from .discovery import build_ignore_policy, select_roots, walk
from .engine import LintEngine, default_engine
from .logging import fail
from .models import FileDiagnostics, LintFailure, RunConfig, RunResult
from .paths import make_absolute
from .reporting import aggregate, emit_lines, format_diagnostics
from .rules import select_rules
from .runner import decode_source, lint_source, run_jobs

LOGGER = logging.getLogger(__name__)

_Pathish = str | os.PathLike[str]


def lint(
    file_name: str,
    source: str | bytes,
    all_rules: bool | None = None,
    exclude_rules: Iterable[str] | None = None,
    include_rules: Iterable[str] | None = None,
    *,
    engine: LintEngine | None = None,
) -> list[str]:
    """Lint a single in-memory buffer and return the rendered report entries.

    Args:
        file_name: Name used for dialect detection and in the report.
        source: Source text, or UTF-8 encoded bytes.
        all_rules: Start from every known rule instead of the recommended set.
        exclude_rules: Rule codes removed from the starting set.
        include_rules: Rule codes added after exclusions are applied.
        engine: Lint engine override; defaults to the deno adapter.

    Returns:
        list[str]: One rendered entry per diagnostic, empty when clean.

    Raises:
        DecodeError: If ``source`` is bytes that are not valid UTF-8.
        EngineError: If the engine fails on the buffer.
    """

    active = engine if engine is not None else default_engine()
    content = decode_source(source, file_name)
    rules = select_rules(
        active,
        all_rules=bool(all_rules),
        exclude=exclude_rules,
        include=include_rules,
    )
    info, diagnostics = lint_source(file_name, content, rules, active)
    return format_diagnostics(diagnostics, info, file_name)


def build_run_config(
    default_ignore_dir: _Pathish | None,
    config_path: _Pathish,
    scan_dirs: Sequence[_Pathish] | None = None,
    *,
    cwd: _Pathish | None = None,
) -> RunConfig:
    """Resolve invocation arguments into an immutable :class:`RunConfig`."""

    working_dir = Path(cwd).resolve() if cwd is not None else Path.cwd().resolve()
    return RunConfig(
        working_dir=working_dir,
        config_path=make_absolute(config_path, working_dir),
        scan_roots=tuple(Path(entry) for entry in scan_dirs or ()),
        default_ignore_path=make_absolute(default_ignore_dir, working_dir) if default_ignore_dir else None,
    )


def run_scan(
    default_ignore_dir: _Pathish | None,
    config_path: _Pathish,
    scan_dirs: Sequence[_Pathish] | None = None,
    *,
    cwd: _Pathish | None = None,
    engine: LintEngine | None = None,
    jobs: int = 1,
    fail_fast: bool = False,
    console: Console | None = None,
    use_emoji: bool = False,
) -> RunResult:
    """Discover and lint every candidate file below the selected roots.

    Report entries are written to ``console`` as each file completes; with
    ``jobs > 1`` they are written after all jobs settle, sorted by path.

    Args:
        default_ignore_dir: Fallback ignore file used when the working
            directory has neither ``.denolintignore`` nor ``.eslintignore``.
        config_path: Configuration file, relative to the working directory.
        scan_dirs: Explicit scan roots overriding ``files.include``.
        cwd: Working directory; defaults to the process working directory.
        engine: Lint engine override; defaults to the deno adapter.
        jobs: Number of files linted concurrently.
        fail_fast: Re-raise the first per-file error instead of collecting it.
        console: Destination for report entries; defaults to standard error.
        use_emoji: Prefix failure messages with emoji.

    Returns:
        RunResult: Aggregated diagnostics and collected failures.

    Raises:
        ConfigError: If the configuration or an exclude pattern is invalid.
        DenolintError: With ``fail_fast``, the first per-file error.
    """

    run = build_run_config(default_ignore_dir, config_path, scan_dirs, cwd=cwd)
    loaded = load_optional_config(run.config_path)
    active = engine if engine is not None else default_engine()
    rules = select_rules(active, config=loaded)
    policy = build_ignore_policy(run, loaded)
    roots = select_roots(run, loaded)
    LOGGER.debug("scanning %s roots from %s with %d rules", roots.source, run.working_dir, len(rules))

    target = console if console is not None else report_console()
    reports: list[FileDiagnostics] = []
    failures: list[LintFailure] = []
    for outcome in run_jobs(
        walk(roots, policy),
        rules=rules,
        engine=active,
        working_dir=run.working_dir,
        jobs=jobs,
        fail_fast=fail_fast,
    ):
        if isinstance(outcome, LintFailure):
            failures.append(outcome)
            fail(outcome.message, use_emoji=use_emoji)
            continue
        reports.append(outcome)
        emit_lines(outcome.lines, target)
    return aggregate(reports, failures)


def denolint(
    default_ignore_dir: _Pathish | None,
    config_path: _Pathish,
    scan_dirs: Sequence[_Pathish] | None = None,
    *,
    cwd: _Pathish | None = None,
    engine: LintEngine | None = None,
    jobs: int = 1,
    fail_fast: bool = False,
    console: Console | None = None,
) -> bool:
    """Scan a project and return ``True`` when any diagnostics were reported.

    See :func:`run_scan` for the arguments.
    """

    result = run_scan(
        default_ignore_dir,
        config_path,
        scan_dirs,
        cwd=cwd,
        engine=engine,
        jobs=jobs,
        fail_fast=fail_fast,
        console=console,
    )
    return result.has_error


__all__ = ["build_run_config", "denolint", "lint", "run_scan"]
