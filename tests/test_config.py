# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the JSON configuration loader."""

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from denolint.config import (
    RECOMMENDED_TAG,
    FilesConfig,
    LintConfig,
    config_exists,
    load_config,
    load_optional_config,
)
from denolint.errors import ConfigError


def _write_config(path: Path, payload: object) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_load_config_reads_rules_and_files(tmp_path: Path) -> None:
    config_path = _write_config(
        tmp_path / ".denolint.json",
        {
            "rules": {"tags": ["recommended"], "include": ["no-var"], "exclude": ["no-empty"]},
            "files": {"include": ["src"], "exclude": ["src/generated"]},
        },
    )

    config = load_config(config_path)

    assert config.rules.tags == ("recommended",)
    assert config.rules.include == ("no-var",)
    assert config.rules.exclude == ("no-empty",)
    assert config.files.include == ("src",)
    assert config.files.exclude == ("src/generated",)


def test_missing_sections_use_defaults(tmp_path: Path) -> None:
    config = load_config(_write_config(tmp_path / "cfg.json", {}))

    assert config == LintConfig()
    assert config.rules.tags == (RECOMMENDED_TAG,)
    assert config.files.include == ()


def test_unrelated_top_level_keys_are_ignored(tmp_path: Path) -> None:
    config = load_config(
        _write_config(
            tmp_path / "cfg.json",
            {
                "$schema": "https://deno.land/x/deno/cli/schemas/config-file.v1.json",
                "lint": {"report": "pretty"},
                "rules": {"include": ["no-var"]},
            },
        ),
    )

    assert config.rules.include == ("no-var",)
    assert config.files == FilesConfig()


def test_config_is_frozen() -> None:
    config = LintConfig()

    with pytest.raises(ValidationError):
        config.rules = config.rules  # type: ignore[misc]


@pytest.mark.parametrize(
    ("content", "fragment"),
    [
        ("{not json", "Parse config file"),
        ("[1, 2]", "must contain a JSON object"),
        ('{"rules": {"unknown": true}}', "Invalid config file"),
        ('{"files": {"exclude": ["  "]}}', "Invalid config file"),
    ],
)
def test_invalid_config_raises_config_error(tmp_path: Path, content: str, fragment: str) -> None:
    config_path = tmp_path / ".denolint.json"
    config_path.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError, match=fragment):
        load_config(config_path)


def test_unreadable_config_raises_config_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="Read config file"):
        load_config(tmp_path)


def test_optional_config_requires_regular_file(tmp_path: Path) -> None:
    assert load_optional_config(tmp_path / "absent.json") is None
    assert config_exists(tmp_path) is False

    (tmp_path / "dir.json").mkdir()
    assert load_optional_config(tmp_path / "dir.json") is None

    present = _write_config(tmp_path / "present.json", {"files": {"include": ["lib"]}})
    loaded = load_optional_config(present)
    assert loaded is not None
    assert loaded.files == FilesConfig(include=("lib",))
