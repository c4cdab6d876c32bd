# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Lint engine adapter driving the ``deno lint`` command line."""

from __future__ import annotations

import json
import os
import tempfile
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Final, TypeAlias, cast

from ..errors import EngineError
from ..process import CommandOptions, run_command
from .base import BaseLintEngine, LintDiagnostic, LinterOptions

JsonValue: TypeAlias = "str | int | float | bool | None | list[JsonValue] | dict[str, JsonValue]"

DENO_EXECUTABLE: Final[str] = "deno"
RECOMMENDED_TAG: Final[str] = "recommended"
_SOURCE_STEM: Final[str] = "input"
_CONFIG_NAME: Final[str] = "deno.json"


def _load_json(stdout: str, *, command: str) -> JsonValue:
    """Decode ``stdout`` as JSON raising :class:`EngineError` on failure."""

    text = stdout.strip()
    if not text:
        raise EngineError(f"deno {command} produced no output")
    try:
        return cast(JsonValue, json.loads(text))
    except json.JSONDecodeError as exc:
        raise EngineError(f"deno {command} produced invalid JSON: {exc}") from exc


def _as_int(value: JsonValue | None) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    return None


def _as_str(value: JsonValue | None) -> str | None:
    return value if isinstance(value, str) else None


def parse_rule_catalog(payload: JsonValue) -> tuple[frozenset[str], frozenset[str]]:
    """Parse ``deno lint --rules --json`` output.

    Args:
        payload: Decoded JSON payload, either a list of rule objects or an
            object carrying a ``rules`` list.

    Returns:
        tuple[frozenset[str], frozenset[str]]: All rule codes and the subset
        tagged as recommended.
    """

    entries = payload.get("rules") if isinstance(payload, Mapping) else payload
    if not isinstance(entries, Sequence) or isinstance(entries, str):
        raise EngineError("deno rule catalog is not a list")
    all_codes: set[str] = set()
    recommended: set[str] = set()
    for entry in entries:
        if not isinstance(entry, Mapping):
            continue
        code = _as_str(entry.get("code"))
        if not code:
            continue
        all_codes.add(code)
        tags = entry.get("tags")
        if isinstance(tags, Sequence) and RECOMMENDED_TAG in tags:
            recommended.add(code)
    return frozenset(all_codes), frozenset(recommended)


def parse_lint_output(payload: JsonValue, file_name: str) -> list[LintDiagnostic]:
    """Parse ``deno lint --json`` output into diagnostics for ``file_name``.

    Deno reports 1-based lines and 0-based columns; the returned diagnostics
    use 1-based columns.

    Raises:
        EngineError: If deno reported a parse or runtime error for the file.
    """

    if not isinstance(payload, Mapping):
        raise EngineError("deno lint output is not an object")
    errors = payload.get("errors")
    if isinstance(errors, Sequence) and not isinstance(errors, str) and errors:
        first = errors[0]
        message = _as_str(first.get("message")) if isinstance(first, Mapping) else None
        raise EngineError(message or "deno lint reported an error")
    entries = payload.get("diagnostics")
    if not isinstance(entries, Sequence) or isinstance(entries, str):
        return []
    results: list[LintDiagnostic] = []
    for entry in entries:
        if not isinstance(entry, Mapping):
            continue
        span = entry.get("range")
        start = span.get("start") if isinstance(span, Mapping) else None
        end = span.get("end") if isinstance(span, Mapping) else None
        line = _as_int(start.get("line")) if isinstance(start, Mapping) else None
        col = _as_int(start.get("col")) if isinstance(start, Mapping) else None
        end_line = _as_int(end.get("line")) if isinstance(end, Mapping) else None
        end_col = _as_int(end.get("col")) if isinstance(end, Mapping) else None
        results.append(
            LintDiagnostic(
                file=file_name,
                line=line or 1,
                column=(col or 0) + 1,
                end_line=end_line,
                end_column=end_col + 1 if end_col is not None else None,
                code=_as_str(entry.get("code")) or "unknown",
                message=_as_str(entry.get("message")) or "",
                hint=_as_str(entry.get("hint")),
            ),
        )
    return results


class DenoEngine(BaseLintEngine):
    """Run rules through the ``deno lint`` executable.

    Each buffer is written to a scratch directory next to a generated config
    that enables exactly the requested rules, so the dialect follows the
    scratch file's extension.
    """

    def __init__(self, executable: str = DENO_EXECUTABLE, *, timeout: float | None = 120.0) -> None:
        self._executable = executable
        env = {**os.environ, "NO_COLOR": "1", "DENO_NO_UPDATE_CHECK": "1"}
        self._options = CommandOptions(timeout=timeout, env=env)
        self._catalog: tuple[frozenset[str], frozenset[str]] | None = None

    def _run(self, args: Sequence[str], *, cwd: Path | None = None) -> str:
        options = self._options if cwd is None else self._options.with_overrides(cwd=cwd)
        try:
            completed = run_command([self._executable, *args], options=options)
        except OSError as exc:
            raise EngineError(f"cannot run {self._executable}: {exc}") from exc
        if not (completed.stdout or "").strip():
            detail = (completed.stderr or "").strip() or f"exit status {completed.returncode}"
            raise EngineError(f"{self._executable} {args[0]} failed: {detail}")
        return completed.stdout

    def _load_catalog(self) -> tuple[frozenset[str], frozenset[str]]:
        if self._catalog is None:
            stdout = self._run(["lint", "--rules", "--json"])
            self._catalog = parse_rule_catalog(_load_json(stdout, command="lint --rules"))
        return self._catalog

    def all_rules(self) -> frozenset[str]:
        """Return every rule code known to the deno executable."""

        return self._load_catalog()[0]

    def recommended_rules(self) -> frozenset[str]:
        """Return the rule codes deno tags as recommended."""

        return self._load_catalog()[1]

    def check(self, file_name: str, source: str, options: LinterOptions) -> list[LintDiagnostic]:
        """Lint ``source`` in a scratch directory and parse the JSON report."""

        with tempfile.TemporaryDirectory(prefix="denolint-") as scratch:
            workdir = Path(scratch)
            config = {"lint": {"rules": {"tags": [], "include": sorted(options.rules)}}}
            (workdir / _CONFIG_NAME).write_text(json.dumps(config), encoding="utf-8")
            target = workdir / f"{_SOURCE_STEM}.{options.dialect.extension}"
            target.write_text(source, encoding="utf-8")
            stdout = self._run(
                ["lint", "--json", "--config", _CONFIG_NAME, target.name],
                cwd=workdir,
            )
        return parse_lint_output(_load_json(stdout, command="lint"), file_name)


__all__ = ["DENO_EXECUTABLE", "DenoEngine", "parse_lint_output", "parse_rule_catalog"]
