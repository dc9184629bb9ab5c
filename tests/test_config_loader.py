# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for ``jsqarc.toml`` loading and validation."""

from __future__ import annotations

from pathlib import Path

import pytest

from jsqa.config.loader import CONFIG_NAME, load_config, parse_config
from jsqa.config.models import ConfigError, RulesConfig
from jsqa.core.severity import RuleLevel
from jsqa.rules.catalog import RuleCatalog


def test_missing_config_returns_none(tmp_path: Path, catalog: RuleCatalog) -> None:
    assert load_config(tmp_path, catalog) is None


def test_load_config_reads_rules_table(tmp_path: Path, catalog: RuleCatalog) -> None:
    (tmp_path / CONFIG_NAME).write_text(
        """
[rules]
groups = ["regex"]
errors = ["no-empty"]
warnings = ["no-debugger"]
allowed = ["simple-regex"]
""".strip(),
        encoding="utf-8",
    )

    config = load_config(tmp_path, catalog)

    assert config is not None
    assert config.rules is not None
    rule_set = config.rules.store(catalog)
    assert tuple(rule_set) == ("no-invalid-regexp", "no-empty", "no-debugger")
    assert "simple-regex" not in rule_set
    assert config.rules.rule_level_by_name("no-debugger") is RuleLevel.WARNING
    assert config.rules.rule_level_by_name("no-empty") is RuleLevel.ERROR
    assert config.rules.rule_level_by_name("simple-regex") is RuleLevel.OFF
    assert config.rules.rule_level_by_name("no-invalid-regexp") is None


def test_empty_config_has_no_rules_table(catalog: RuleCatalog) -> None:
    config = parse_config("", catalog)
    assert config.rules is None


def test_rules_table_defaults_to_errors_group(catalog: RuleCatalog) -> None:
    config = parse_config("[rules]\n", catalog)

    assert config.rules == RulesConfig()
    assert config.rules.store(catalog) == catalog.builtins()


def test_unknown_rule_suggests_closest_name(catalog: RuleCatalog) -> None:
    text = '[rules]\nerrors = ["no-empty"]\nwarnings = ["no-debuger"]\n'

    with pytest.raises(ConfigError) as excinfo:
        parse_config(text, catalog)

    error = excinfo.value
    assert error.suggestion == "no-debugger"
    assert error.line == 3
    assert str(error) == "unknown rule `no-debuger` in `rules.warnings`. did you mean 'no-debugger'? at line 3"


def test_unknown_field_suggests_closest_field(catalog: RuleCatalog) -> None:
    text = '[rules]\nwarning = ["no-debugger"]\n'

    with pytest.raises(ConfigError) as excinfo:
        parse_config(text, catalog)

    assert excinfo.value.suggestion == "warnings"
    assert excinfo.value.line == 2
    assert "unknown field `warning` in `rules`" in str(excinfo.value)


def test_unknown_group_is_rejected(catalog: RuleCatalog) -> None:
    with pytest.raises(ConfigError) as excinfo:
        parse_config('[rules]\ngroups = ["style", "eror"]\n', catalog)

    assert excinfo.value.suggestion == "errors"


def test_invalid_toml_reports_line(catalog: RuleCatalog) -> None:
    with pytest.raises(ConfigError) as excinfo:
        parse_config("[rules]\nerrors [\n", catalog)

    assert excinfo.value.line == 2
    assert excinfo.value.suggestion is None


def test_conflicting_levels_are_rejected(catalog: RuleCatalog) -> None:
    text = '[rules]\nerrors = ["no-empty"]\nallowed = ["no-empty"]\n'

    with pytest.raises(ConfigError, match="listed in both"):
        parse_config(text, catalog)


def test_wrong_value_type_is_rejected(catalog: RuleCatalog) -> None:
    with pytest.raises(ConfigError, match="rules.errors"):
        parse_config('[rules]\nerrors = "no-empty"\n', catalog)


def test_undecodable_config_is_a_config_error(tmp_path: Path, catalog: RuleCatalog) -> None:
    (tmp_path / CONFIG_NAME).write_bytes(b'[rules]\nerrors = ["\xff\xfe"]\n')

    with pytest.raises(ConfigError, match=f"failed to read {CONFIG_NAME}") as excinfo:
        load_config(tmp_path, catalog)

    assert isinstance(excinfo.value.__cause__, UnicodeDecodeError)
