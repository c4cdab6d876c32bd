# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Ignore-policy construction for directory scans."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Final

from pathspec import GitIgnoreSpec

from ..config import LintConfig
from ..errors import ConfigError
from ..models import RunConfig
from ..paths import relative_posix

LOGGER = logging.getLogger(__name__)

DENOLINT_IGNORE_NAME: Final[str] = ".denolintignore"
ESLINT_IGNORE_NAME: Final[str] = ".eslintignore"
IGNORE_FILE_NAMES: Final[tuple[str, ...]] = (DENOLINT_IGNORE_NAME, ESLINT_IGNORE_NAME)

TYPESCRIPT_GLOBS: Final[tuple[str, ...]] = ("*.ts", "*.tsx", "*.mts", "*.cts")
JAVASCRIPT_GLOBS: Final[tuple[str, ...]] = ("*.js", "*.jsx", "*.mjs", "*.cjs", "*.vue")


@dataclass(frozen=True, slots=True)
class FileTypeFilter:
    """Named glob groups selecting which file names are linted."""

    types: tuple[tuple[str, tuple[str, ...]], ...]

    @property
    def names(self) -> frozenset[str]:
        """Return the selected type names."""

        return frozenset(name for name, _ in self.types)

    def matches(self, file_name: str) -> bool:
        """Return whether ``file_name`` belongs to any selected type."""

        return any(fnmatchcase(file_name, glob) for _, globs in self.types for glob in globs)


DEFAULT_FILE_TYPES: Final[FileTypeFilter] = FileTypeFilter(
    types=(("typescript", TYPESCRIPT_GLOBS), ("javascript", JAVASCRIPT_GLOBS)),
)


@dataclass(frozen=True, slots=True)
class OverrideSet:
    """Exclude patterns layered on top of every ignore file.

    Patterns use gitignore syntax and are anchored at ``root``; paths outside
    ``root`` never match.
    """

    root: Path
    patterns: tuple[str, ...]
    spec: GitIgnoreSpec

    def excludes(self, path: Path, *, is_dir: bool) -> bool:
        """Return whether ``path`` is excluded by an override pattern.

        Args:
            path: Absolute path encountered during the walk.
            is_dir: Whether ``path`` is a directory.

        Returns:
            bool: ``True`` when the path must be skipped.
        """

        relative = relative_posix(path, self.root)
        if not relative or relative == ".":
            return False
        if is_dir:
            relative = f"{relative}/"
        return self.spec.check_file(relative).include is True


@dataclass(frozen=True, slots=True)
class IgnorePolicy:
    """Traversal policy built once per run and shared read-only.

    Attributes:
        working_dir: Directory the ignore file and overrides are rooted at.
        ignore_file: Ignore file applied from ``working_dir``, if any.
        ignore_filename: Well-known name also honoured in nested directories.
        file_types: File-name filter applied to walked files.
        follow_symlinks: Whether symlinked directories are descended into.
        overrides: Exclude patterns from configuration, if any.
        raw_ignore_rules: Config exclude entries re-applied as ignore-file
            rules rooted at ``working_dir``.
    """

    working_dir: Path
    ignore_file: Path | None
    ignore_filename: str | None
    file_types: FileTypeFilter = DEFAULT_FILE_TYPES
    follow_symlinks: bool = True
    overrides: OverrideSet | None = None
    raw_ignore_rules: tuple[str, ...] = ()


def _is_file(path: Path) -> bool:
    try:
        return path.is_file()
    except OSError:
        return False


def select_ignore_file(working_dir: Path, default_path: Path | None) -> tuple[Path | None, str | None]:
    """Pick the ignore file honoured for the run.

    ``.denolintignore`` wins over ``.eslintignore``; both are looked up in
    ``working_dir`` only. When neither exists the caller-supplied default is
    used if it is a regular file.

    Args:
        working_dir: Directory searched for the well-known ignore files.
        default_path: Fallback location supplied by the caller.

    Returns:
        tuple[Path | None, str | None]: The ignore file to apply and the
        well-known file name to honour in nested directories.
    """

    for name in IGNORE_FILE_NAMES:
        candidate = working_dir / name
        if _is_file(candidate):
            LOGGER.debug("using ignore file %s", candidate)
            return candidate, name
    if default_path is not None and _is_file(default_path):
        LOGGER.debug("using fallback ignore file %s", default_path)
        return default_path, None
    LOGGER.debug("no ignore file found in %s", working_dir)
    return None, None


def _override_line(entry: str, root: Path) -> str:
    """Translate a config exclude entry into a gitignore pattern anchored at ``root``."""

    stripped = entry.strip()
    candidate = Path(stripped)
    if candidate.is_absolute():
        relative = relative_posix(candidate, root)
        if relative is not None:
            stripped = f"/{relative}"
    if stripped.startswith("!"):
        stripped = f"\\{stripped}"
    return stripped


def build_override_set(root: Path, entries: Sequence[str], *, source: Path | None = None) -> OverrideSet:
    """Compile config exclude entries into an :class:`OverrideSet`.

    Args:
        root: Directory the patterns are anchored at.
        entries: Raw exclude entries from configuration.
        source: Configuration file the entries came from, for error messages.

    Returns:
        OverrideSet: Compiled override patterns.

    Raises:
        ConfigError: If any entry is not a valid pattern.
    """

    lines: list[str] = []
    for entry in entries:
        line = _override_line(entry, root)
        try:
            GitIgnoreSpec.from_lines([line])
        except ValueError as exc:
            origin = f" from {str(source)!r}" if source is not None else ""
            raise ConfigError(f"Adding excluded file {entry!r}{origin} failed: {exc}") from exc
        lines.append(line)
    return OverrideSet(root=root, patterns=tuple(lines), spec=GitIgnoreSpec.from_lines(lines))


def build_ignore_policy(run: RunConfig, loaded: LintConfig | None) -> IgnorePolicy:
    """Build the traversal policy for ``run``.

    Args:
        run: Run inputs fixed at invocation time.
        loaded: Loaded configuration when a config file exists.

    Returns:
        IgnorePolicy: Policy shared by every walker of the run.

    Raises:
        ConfigError: If an exclude entry is not a valid pattern.
    """

    ignore_file, ignore_filename = select_ignore_file(run.working_dir, run.default_ignore_path)
    overrides: OverrideSet | None = None
    excludes = loaded.files.exclude if loaded is not None else ()
    if excludes:
        overrides = build_override_set(run.working_dir, excludes, source=run.config_path)
    return IgnorePolicy(
        working_dir=run.working_dir,
        ignore_file=ignore_file,
        ignore_filename=ignore_filename,
        file_types=DEFAULT_FILE_TYPES,
        follow_symlinks=True,
        overrides=overrides,
        raw_ignore_rules=overrides.patterns if overrides is not None else (),
    )


__all__ = [
    "DEFAULT_FILE_TYPES",
    "DENOLINT_IGNORE_NAME",
    "ESLINT_IGNORE_NAME",
    "IGNORE_FILE_NAMES",
    "FileTypeFilter",
    "IgnorePolicy",
    "OverrideSet",
    "build_ignore_policy",
    "build_override_set",
    "select_ignore_file",
]
