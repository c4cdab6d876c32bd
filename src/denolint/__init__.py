# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core package metadata and the public lint entry points."""

from __future__ import annotations

from importlib import metadata

from .api import denolint, lint, run_scan
from .errors import ConfigError, DecodeError, DenolintError, EngineError, FileReadError, PathError

__all__ = [
    "ConfigError",
    "DecodeError",
    "DenolintError",
    "EngineError",
    "FileReadError",
    "PathError",
    "__version__",
    "denolint",
    "lint",
    "run_scan",
]

try:
    __version__ = metadata.version("denolint")
except metadata.PackageNotFoundError:  # pragma: no cover - local development fallback
    __version__ = "0.0.0"
