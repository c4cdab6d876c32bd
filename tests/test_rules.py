# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for effective rule-set selection."""

from denolint.config import LintConfig, RulesConfig
from denolint.rules import filter_rules, rules_from_config, select_rules


def test_default_selection_is_recommended(engine) -> None:
    assert filter_rules(engine) == frozenset({"no-empty", "no-debugger"})
    assert select_rules(engine) == engine.recommended_rules()


def test_all_rules_starts_from_catalog(engine) -> None:
    assert filter_rules(engine, all_rules=True) == engine.all_rules()


def test_exclude_removes_recommended_rule(engine) -> None:
    rules = filter_rules(engine, exclude=["no-empty"])

    assert "no-empty" not in rules
    assert "no-debugger" in rules


def test_include_wins_over_exclude(engine) -> None:
    rules = filter_rules(engine, exclude=["no-empty"], include=["no-empty"])

    assert "no-empty" in rules


def test_unknown_include_names_are_dropped(engine) -> None:
    rules = filter_rules(engine, include=["no-var", "made-up-rule"])

    assert rules == frozenset({"no-empty", "no-debugger", "no-var"})


def test_config_rules_are_authoritative(engine) -> None:
    config = LintConfig(rules=RulesConfig(tags=(), include=("no-var",)))

    selected = select_rules(engine, all_rules=True, include=["no-empty"], config=config)

    assert selected == frozenset({"no-var"})


def test_config_rules_exclude_from_recommended(engine) -> None:
    config = LintConfig(rules=RulesConfig(include=("no-var",), exclude=("no-debugger",)))

    assert rules_from_config(engine, config) == frozenset({"no-empty", "no-var"})
