# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Effective rule-set selection."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .config import RECOMMENDED_TAG, LintConfig
from .engine.base import RuleCatalog

LOGGER = logging.getLogger(__name__)

RuleSet = frozenset[str]


def _known(catalog: RuleCatalog, names: Iterable[str]) -> set[str]:
    """Return the subset of ``names`` that the catalog implements."""

    available = catalog.all_rules()
    wanted = set(names)
    unknown = wanted - available
    if unknown:
        LOGGER.debug("ignoring unknown rule names: %s", ", ".join(sorted(unknown)))
    return wanted & available


def filter_rules(
    catalog: RuleCatalog,
    all_rules: bool = False,
    exclude: Iterable[str] | None = None,
    include: Iterable[str] | None = None,
) -> RuleSet:
    """Return the rule set requested by explicit flags.

    Exclusions are applied before inclusions, so a rule named in both lists
    stays enabled.

    Args:
        catalog: Engine rule catalog.
        all_rules: Start from every known rule instead of the recommended set.
        exclude: Rule codes removed from the starting set.
        include: Rule codes added after exclusion.

    Returns:
        RuleSet: Effective rule codes.
    """

    rules = set(catalog.all_rules() if all_rules else catalog.recommended_rules())
    if exclude is not None:
        rules.difference_update(exclude)
    if include is not None:
        rules.update(_known(catalog, include))
    return frozenset(rules)


def rules_from_config(catalog: RuleCatalog, config: LintConfig) -> RuleSet:
    """Return the rule set declared by a loaded configuration file.

    Args:
        catalog: Engine rule catalog.
        config: Loaded configuration whose ``rules`` section is authoritative.

    Returns:
        RuleSet: Rules from the tagged base set plus ``include`` minus ``exclude``.
    """

    section = config.rules
    rules = set(catalog.recommended_rules()) if RECOMMENDED_TAG in section.tags else set()
    rules.update(_known(catalog, section.include))
    rules.difference_update(section.exclude)
    return frozenset(rules)


def select_rules(
    catalog: RuleCatalog,
    *,
    all_rules: bool = False,
    exclude: Iterable[str] | None = None,
    include: Iterable[str] | None = None,
    config: LintConfig | None = None,
) -> RuleSet:
    """Resolve the effective rule set for a run.

    A loaded configuration wins outright; the explicit flags only apply when
    no configuration file exists.

    Args:
        catalog: Engine rule catalog.
        all_rules: Start from every known rule instead of the recommended set.
        exclude: Rule codes removed from the starting set.
        include: Rule codes added after exclusion.
        config: Loaded configuration, when a config file exists.

    Returns:
        RuleSet: Effective rule codes.
    """

    if config is not None:
        return rules_from_config(catalog, config)
    return filter_rules(catalog, all_rules, exclude, include)


__all__ = ["RuleSet", "filter_rules", "rules_from_config", "select_rules"]
