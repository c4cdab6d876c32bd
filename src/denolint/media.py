# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Source dialect classification driven by file extensions."""

from __future__ import annotations

from enum import Enum
from pathlib import PurePath
from typing import Final


class Dialect(str, Enum):
    """Enumerate the source grammars understood by the lint engine."""

    TSX = "tsx"
    JSX = "jsx"
    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"

    @property
    def extension(self) -> str:
        """Return the canonical file extension (without dot) for the dialect."""

        return _CANONICAL_EXTENSIONS[self]


_CANONICAL_EXTENSIONS: Final[dict[Dialect, str]] = {
    Dialect.TSX: "tsx",
    Dialect.JSX: "jsx",
    Dialect.JAVASCRIPT: "js",
    Dialect.TYPESCRIPT: "ts",
}

_EXTENSION_DIALECTS: Final[dict[str, Dialect]] = {
    ".tsx": Dialect.TSX,
    ".jsx": Dialect.JSX,
    ".js": Dialect.JAVASCRIPT,
    ".mjs": Dialect.JAVASCRIPT,
    ".ts": Dialect.TYPESCRIPT,
}

# TSX is the broadest grammar, so unknown inputs still parse.
DEFAULT_DIALECT: Final[Dialect] = Dialect.TSX


def classify(path: str | PurePath) -> Dialect:
    """Return the dialect used to parse ``path``.

    Args:
        path: File name or path whose extension selects the dialect.

    Returns:
        Dialect: Matching dialect, or :data:`DEFAULT_DIALECT` for unknown or
        missing extensions.
    """

    suffix = PurePath(path).suffix
    return _EXTENSION_DIALECTS.get(suffix, DEFAULT_DIALECT)


__all__ = ["DEFAULT_DIALECT", "Dialect", "classify"]
