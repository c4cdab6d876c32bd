# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Helpers for resolving and displaying filesystem paths."""

from __future__ import annotations

import os
from dataclasses import dataclass
from os import PathLike
from pathlib import Path
from typing import Final

from .errors import PathError

_Pathish = str | PathLike[str] | Path
EXTENDED_LENGTH_PREFIX: Final[str] = "\\\\?\\"


@dataclass(frozen=True, slots=True)
class ResolvedPath:
    """Outcome of resolving a raw path against a base directory.

    Attributes:
        path: Absolute path handed to downstream consumers.
        canonical: ``True`` when ``path`` was canonicalised on disk, ``False``
            when the input was already absolute or canonicalisation failed and
            the joined path was kept as-is.
    """

    path: Path
    canonical: bool


def strip_extended_prefix(path: Path) -> Path:
    """Drop a Windows extended-length prefix produced by canonicalisation.

    Args:
        path: Canonicalised path that may carry the ``\\\\?\\`` prefix.

    Returns:
        Path: ``path`` without the prefix so string comparisons stay stable.
    """

    text = str(path)
    if text.startswith(EXTENDED_LENGTH_PREFIX):
        return Path(text[len(EXTENDED_LENGTH_PREFIX) :])
    return path


def resolve_path(raw: _Pathish, base: _Pathish) -> ResolvedPath:
    """Resolve ``raw`` against ``base`` without failing on missing paths.

    Absolute inputs are returned unchanged. Relative inputs are joined to
    ``base`` and canonicalised; when the joined path does not exist the
    uncanonicalised join is returned instead so callers may reference files
    created later in the run.

    Args:
        raw: Possibly-relative path supplied by the user or configuration.
        base: Absolute directory used to anchor relative paths.

    Returns:
        ResolvedPath: Absolute path plus a flag describing which branch applied.
    """

    candidate = Path(raw)
    if candidate.is_absolute():
        return ResolvedPath(path=candidate, canonical=False)
    joined = Path(base) / candidate
    try:
        resolved = joined.resolve(strict=True)
    except (OSError, RuntimeError):
        return ResolvedPath(path=joined, canonical=False)
    return ResolvedPath(path=strip_extended_prefix(resolved), canonical=True)


def make_absolute(raw: _Pathish, base: _Pathish) -> Path:
    """Return the absolute path for ``raw`` as computed by :func:`resolve_path`."""

    return resolve_path(raw, base).path


def path_to_str(path: _Pathish) -> str:
    """Return ``path`` as text suitable for the lint engine and reports.

    Args:
        path: Filesystem path to convert.

    Returns:
        str: UTF-8 representable string form of ``path``.

    Raises:
        PathError: If ``path`` contains bytes that cannot be encoded as UTF-8.
    """

    text = os.fspath(path)
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise PathError(path) from exc
    return text


def relative_posix(path: Path, root: Path) -> str | None:
    """Return ``path`` relative to ``root`` in POSIX form, or ``None`` when outside."""

    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return None


def display_path(path: _Pathish, root: _Pathish) -> str:
    """Return a display-friendly representation of ``path`` relative to ``root``.

    Args:
        path: Path to present to the user.
        root: Base directory used for relativisation.

    Returns:
        str: Relative POSIX path when ``path`` lives under ``root``, otherwise
        the path string unchanged.
    """

    relative = relative_posix(Path(path), Path(root))
    if relative is not None and relative:
        return relative
    return os.fspath(path)


__all__ = (
    "EXTENDED_LENGTH_PREFIX",
    "ResolvedPath",
    "display_path",
    "make_absolute",
    "path_to_str",
    "relative_posix",
    "resolve_path",
    "strip_extended_prefix",
)
