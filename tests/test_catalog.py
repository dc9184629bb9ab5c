# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the rule catalog and name suggestions."""

from __future__ import annotations

import pytest

from jsqa.rules.catalog import DEFAULT_GROUP, RuleCatalog, RuleSpec, closest_match


def test_suggest_matches_rule_names(catalog: RuleCatalog) -> None:
    assert catalog.suggest("no-debuger") == "no-debugger"
    assert catalog.suggest("zzzz") is None


def test_closest_match_accepts_any_candidates(catalog: RuleCatalog) -> None:
    assert closest_match("eror", catalog.groups()) == "errors"
    assert closest_match("warning", ("errors", "warnings", "allowed")) == "warnings"
    assert closest_match("x", ()) is None


def test_builtins_are_the_default_group(catalog: RuleCatalog) -> None:
    assert tuple(catalog.builtins()) == catalog.group_rules(DEFAULT_GROUP)
    assert "no-empty" in catalog.builtins()
    assert "simple-regex" not in catalog.builtins()


def test_duplicate_rules_are_rejected() -> None:
    rule = RuleSpec(name="no-empty", group="errors", description="")
    with pytest.raises(ValueError, match="registered twice"):
        RuleCatalog([rule, rule])
