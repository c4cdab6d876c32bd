# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Per-file lint jobs and their sequential or pooled execution."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path

from .engine.base import LintDiagnostic, LintEngine, LinterOptions, SourceInfo
from .errors import DecodeError, DenolintError, EngineError, FileReadError
from .media import classify
from .models import FileDiagnostics, LintFailure
from .paths import path_to_str
from .reporting import format_diagnostics
from .rules import RuleSet

LOGGER = logging.getLogger(__name__)

JobOutcome = FileDiagnostics | LintFailure


def decode_source(source: str | bytes, file_name: str | Path) -> str:
    """Return ``source`` as text, decoding bytes as strict UTF-8.

    Raises:
        DecodeError: If ``source`` is not valid UTF-8.
    """

    if isinstance(source, str):
        return source
    try:
        return bytes(source).decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DecodeError(file_name, exc) from exc


def lint_source(
    file_name: str,
    source: str,
    rules: RuleSet,
    engine: LintEngine,
) -> tuple[SourceInfo, list[LintDiagnostic]]:
    """Lint one decoded buffer.

    Args:
        file_name: Name used for dialect detection and reported on diagnostics.
        source: Decoded source text.
        rules: Effective rule set.
        engine: Lint engine invoked for the buffer.

    Returns:
        tuple[SourceInfo, list[LintDiagnostic]]: Source info and diagnostics in
        engine order.

    Raises:
        EngineError: If the engine fails; the message names ``file_name``.
    """

    options = LinterOptions(rules=rules, dialect=classify(file_name))
    try:
        return engine.lint(file_name, source, options)
    except EngineError as exc:
        raise EngineError(str(exc), path=file_name) from exc


@dataclass(frozen=True, slots=True)
class LintJob:
    """Read, classify, lint, and format one file."""

    path: Path
    rules: RuleSet
    engine: LintEngine
    working_dir: Path

    def run(self) -> FileDiagnostics:
        """Execute the job.

        Returns:
            FileDiagnostics: Diagnostics and rendered lines for :attr:`path`.

        Raises:
            FileReadError: If the file cannot be read.
            DecodeError: If the file is not valid UTF-8.
            EngineError: If the engine fails on the file.
            PathError: If the path cannot be represented as text.
        """

        file_name = path_to_str(self.path)
        try:
            raw = self.path.read_bytes()
        except OSError as exc:
            raise FileReadError(self.path, exc) from exc
        content = decode_source(raw, self.path)
        info, diagnostics = lint_source(file_name, content, self.rules, self.engine)
        lines = format_diagnostics(diagnostics, info, file_name, root=self.working_dir)
        return FileDiagnostics(path=self.path, diagnostics=tuple(diagnostics), lines=tuple(lines))


def _run_safely(job: LintJob, *, fail_fast: bool) -> JobOutcome:
    try:
        return job.run()
    except DenolintError as exc:
        if fail_fast:
            raise
        LOGGER.debug("lint job failed for %s: %s", job.path, exc)
        return LintFailure(path=job.path, message=str(exc), error=exc)


def run_jobs(
    paths: Iterable[Path],
    *,
    rules: RuleSet,
    engine: LintEngine,
    working_dir: Path,
    jobs: int = 1,
    fail_fast: bool = False,
) -> Iterator[JobOutcome]:
    """Run a lint job for every path.

    With ``jobs == 1`` outcomes stream in input order. With more workers the
    jobs run in a thread pool, every job settles, and outcomes are yielded
    sorted by path.

    Args:
        paths: Candidate files, typically from the walker.
        rules: Effective rule set shared by every job.
        engine: Lint engine shared by every job.
        working_dir: Directory used to render display paths.
        jobs: Maximum number of concurrent jobs.
        fail_fast: Re-raise the first per-file error instead of collecting it.

    Yields:
        JobOutcome: Per-file diagnostics or a collected failure.
    """

    def make(path: Path) -> LintJob:
        return LintJob(path=path, rules=rules, engine=engine, working_dir=working_dir)

    if jobs <= 1:
        for path in paths:
            yield _run_safely(make(path), fail_fast=fail_fast)
        return

    settled: list[JobOutcome] = []
    with ThreadPoolExecutor(max_workers=jobs) as executor:
        futures = [executor.submit(_run_safely, make(path), fail_fast=False) for path in paths]
        for future in as_completed(futures):
            settled.append(future.result())
    settled.sort(key=lambda outcome: str(outcome.path))
    if fail_fast:
        for outcome in settled:
            if isinstance(outcome, LintFailure):
                raise outcome.error
    yield from settled


__all__ = ["JobOutcome", "LintJob", "decode_source", "lint_source", "run_jobs"]
