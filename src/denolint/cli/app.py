# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point for project scans and single-file linting."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from .. import __version__
from ..api import lint, run_scan
from ..config import DEFAULT_CONFIG_NAME
from ..engine import DenoEngine, LintEngine
from ..engine.deno import DENO_EXECUTABLE
from ..errors import DenolintError, FileReadError
from ..models import RunResult
from ..reporting import log_summary
from .shared import EXIT_CLEAN, EXIT_FAILURE, EXIT_PROBLEMS, CLIError, CLILogger, build_cli_logger

STDIN_MARKER = "-"

app = typer.Typer(
    name="denolint",
    help="Lint JavaScript and TypeScript projects with deno lint rules.",
    no_args_is_help=True,
    add_completion=False,
)


def build_engine(executable: str) -> LintEngine:
    """Return the lint engine used by CLI commands."""

    return DenoEngine(executable)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"denolint {__version__}")
        raise typer.Exit(code=EXIT_CLEAN)


@app.callback()
def main_callback(
    version: Annotated[
        bool,
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show the version and exit."),
    ] = False,
) -> None:
    """Lint JavaScript and TypeScript projects with deno lint rules."""


def scan_exit_code(result: RunResult, *, check_only: bool) -> int:
    """Return the process exit status for a finished scan.

    Args:
        result: Aggregated scan result.
        check_only: Report diagnostics without failing the command.

    Returns:
        int: ``2`` when any file failed, ``1`` when diagnostics were found and
        ``check_only`` is false, otherwise ``0``.
    """

    if result.failures:
        return EXIT_FAILURE
    if result.has_error and not check_only:
        return EXIT_PROBLEMS
    return EXIT_CLEAN


@app.command("scan")
def scan_command(
    scan_dirs: Annotated[
        list[Path] | None,
        typer.Argument(help="Directories or files to scan instead of files.include.", show_default=False),
    ] = None,
    config: Annotated[
        Path,
        typer.Option("--config", "-c", help="Configuration file, relative to the working directory."),
    ] = Path(DEFAULT_CONFIG_NAME),
    cwd: Annotated[
        Path | None,
        typer.Option("--cwd", help="Working directory anchoring ignore files and relative paths."),
    ] = None,
    ignore_path: Annotated[
        Path | None,
        typer.Option("--ignore-path", help="Fallback ignore file when no .denolintignore or .eslintignore exists."),
    ] = None,
    deno: Annotated[str, typer.Option("--deno", help="deno executable used to run the rules.")] = DENO_EXECUTABLE,
    check_only: Annotated[
        bool,
        typer.Option("--check-only", help="Report diagnostics without a failing exit status."),
    ] = False,
    jobs: Annotated[int, typer.Option("--jobs", "-j", min=1, help="Number of files linted concurrently.")] = 1,
    fail_fast: Annotated[bool, typer.Option("--fail-fast", help="Abort on the first file that cannot be linted.")] = False,
    no_emoji: Annotated[bool, typer.Option("--no-emoji", help="Disable emoji in status messages.")] = False,
    debug: Annotated[bool, typer.Option("--debug", help="Print run details.")] = False,
) -> None:
    """Scan a project and report every diagnostic."""

    logger = build_cli_logger(emoji=not no_emoji, debug=debug)
    try:
        result = _execute_scan(
            scan_dirs=scan_dirs or [],
            config=config,
            cwd=cwd,
            ignore_path=ignore_path,
            engine=build_engine(deno),
            jobs=jobs,
            fail_fast=fail_fast,
            logger=logger,
        )
    except CLIError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc
    log_summary(result, use_emoji=logger.use_emoji)
    raise typer.Exit(code=scan_exit_code(result, check_only=check_only))


def _execute_scan(
    *,
    scan_dirs: list[Path],
    config: Path,
    cwd: Path | None,
    ignore_path: Path | None,
    engine: LintEngine,
    jobs: int,
    fail_fast: bool,
    logger: CLILogger,
) -> RunResult:
    """Run the scan translating orchestrator errors into :class:`CLIError`."""

    logger.debug(f"config={config} cwd={cwd or Path.cwd()} jobs={jobs} roots={len(scan_dirs)}")
    try:
        return run_scan(
            ignore_path,
            config,
            scan_dirs,
            cwd=cwd,
            engine=engine,
            jobs=jobs,
            fail_fast=fail_fast,
            use_emoji=logger.use_emoji,
        )
    except DenolintError as exc:
        raise CLIError(str(exc)) from exc


def _read_input(path: str) -> bytes:
    if path == STDIN_MARKER:
        return typer.get_binary_stream("stdin").read()
    try:
        return Path(path).read_bytes()
    except OSError as exc:
        raise FileReadError(path, exc) from exc


@app.command("file")
def file_command(
    path: Annotated[str, typer.Argument(help="File to lint, or '-' to read standard input.")],
    all_rules: Annotated[bool, typer.Option("--all-rules", help="Start from every known rule.")] = False,
    exclude_rule: Annotated[
        list[str] | None,
        typer.Option("--exclude-rule", help="Rule code to disable; repeatable."),
    ] = None,
    include_rule: Annotated[
        list[str] | None,
        typer.Option("--include-rule", help="Rule code to enable; repeatable."),
    ] = None,
    stdin_filename: Annotated[
        str,
        typer.Option("--stdin-filename", help="File name reported for standard input."),
    ] = "<stdin>",
    deno: Annotated[str, typer.Option("--deno", help="deno executable used to run the rules.")] = DENO_EXECUTABLE,
    no_emoji: Annotated[bool, typer.Option("--no-emoji", help="Disable emoji in status messages.")] = False,
) -> None:
    """Lint a single file and print its diagnostics to standard output."""

    logger = build_cli_logger(emoji=not no_emoji)
    file_name = stdin_filename if path == STDIN_MARKER else path
    try:
        lines = lint(
            file_name,
            _read_input(path),
            all_rules,
            exclude_rule or (),
            include_rule or (),
            engine=build_engine(deno),
        )
    except DenolintError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=EXIT_FAILURE) from exc
    for line in lines:
        logger.echo(line)
    raise typer.Exit(code=EXIT_PROBLEMS if lines else EXIT_CLEAN)


def main() -> None:
    """Run the ``denolint`` console script."""

    app()


__all__ = ["app", "build_engine", "main", "scan_exit_code"]
