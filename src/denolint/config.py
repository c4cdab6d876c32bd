# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models and loader for ``.denolint.json`` files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigError

DEFAULT_CONFIG_NAME: Final[str] = ".denolint.json"
RECOMMENDED_TAG: Final[str] = "recommended"


class RulesConfig(BaseModel):
    """Rule selection declared by the ``rules`` section."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    tags: tuple[str, ...] = (RECOMMENDED_TAG,)
    include: tuple[str, ...] = Field(default_factory=tuple)
    exclude: tuple[str, ...] = Field(default_factory=tuple)


class FilesConfig(BaseModel):
    """Path include/exclude lists declared by the ``files`` section."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    include: tuple[str, ...] = Field(default_factory=tuple)
    exclude: tuple[str, ...] = Field(default_factory=tuple)

    @field_validator("include", "exclude")
    @classmethod
    def _reject_blank_entries(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        """Ensure every path entry carries text.

        Args:
            value: Entries parsed from the configuration file.

        Returns:
            tuple[str, ...]: The unchanged entries.

        Raises:
            ValueError: If an entry is empty or whitespace only.
        """

        for entry in value:
            if not entry.strip():
                raise ValueError("path entries must not be blank")
        return value


class LintConfig(BaseModel):
    """Top-level configuration loaded once per run and never mutated."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    rules: RulesConfig = Field(default_factory=RulesConfig)
    files: FilesConfig = Field(default_factory=FilesConfig)


def config_exists(path: Path) -> bool:
    """Return whether ``path`` points at a regular configuration file."""

    try:
        return path.is_file()
    except OSError:
        return False


def load_config(path: Path) -> LintConfig:
    """Load and validate the JSON configuration stored at ``path``.

    Args:
        path: Location of the configuration file.

    Returns:
        LintConfig: Validated configuration model.

    Raises:
        ConfigError: If the file cannot be read, is not valid JSON, or does not
            match the configuration schema.
    """

    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Read config file {str(path)!r} failed: {exc}") from exc
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Parse config file {str(path)!r} failed: {exc}") from exc
    if not isinstance(payload, dict):
        raise ConfigError(f"Config file {str(path)!r} must contain a JSON object")
    try:
        return LintConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config file {str(path)!r}: {exc}") from exc


def load_optional_config(path: Path) -> LintConfig | None:
    """Return the configuration at ``path`` when it exists, otherwise ``None``."""

    if not config_exists(path):
        return None
    return load_config(path)


__all__ = [
    "DEFAULT_CONFIG_NAME",
    "RECOMMENDED_TAG",
    "ConfigError",
    "FilesConfig",
    "LintConfig",
    "RulesConfig",
    "config_exists",
    "load_config",
    "load_optional_config",
]
