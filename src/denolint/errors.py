# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy shared by the lint orchestration layers."""

from __future__ import annotations

from pathlib import Path


class DenolintError(RuntimeError):
    """Base class for every failure raised by the orchestrator."""


class ConfigError(DenolintError):
    """Raised when configuration input or an exclude pattern is invalid."""


class PathError(DenolintError):
    """Raised when a filesystem path cannot be converted to text."""

    def __init__(self, path: Path | str) -> None:
        """Initialise the error for ``path``.

        Args:
            path: Path that could not be represented as UTF-8 text.
        """

        super().__init__(f"Convert path to string failed: {path!r}")
        self.path = path


class FileReadError(DenolintError):
    """Raised when a candidate file cannot be read from disk."""

    def __init__(self, path: Path | str, cause: OSError) -> None:
        """Initialise the error with the failing path and OS error.

        Args:
            path: File that could not be read.
            cause: Underlying operating system error.
        """

        super().__init__(f"Read file {str(path)!r} failed: {cause}")
        self.path = path
        self.cause = cause


class DecodeError(DenolintError):
    """Raised when source content is not valid UTF-8 text."""

    def __init__(self, path: Path | str, cause: UnicodeDecodeError) -> None:
        """Initialise the error with the offending file and codec failure.

        Args:
            path: File or buffer name whose content failed to decode.
            cause: Decoding failure reported by the UTF-8 codec.
        """

        super().__init__(f"Input source is not valid utf8 string {cause}, at: {path}")
        self.path = path
        self.cause = cause


class EngineError(DenolintError):
    """Raised when the lint engine fails for a single file."""

    def __init__(self, message: str, *, path: Path | str | None = None) -> None:
        """Initialise the error, optionally tagging the file being linted.

        Args:
            message: Description of the engine failure.
            path: File being linted when the failure occurred.
        """

        if path is not None:
            message = f"Lint failed: {message}, at: {path}"
        super().__init__(message)
        self.path = path


__all__ = [
    "ConfigError",
    "DecodeError",
    "DenolintError",
    "EngineError",
    "FileReadError",
    "PathError",
]
