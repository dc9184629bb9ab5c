# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models for jsqa."""

from __future__ import annotations

import math
import os
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, model_validator

from jsqa.core.severity import RuleLevel
from jsqa.rules.catalog import DEFAULT_GROUP, RuleCatalog, RuleSet


class ConfigError(Exception):
    """Raised when configuration input is invalid.

    Attributes:
        line: One-based line of the offending input, when known.
        suggestion: Closest valid value for a misspelt key or rule name.
    """

    def __init__(self, message: str, *, line: int | None = None, suggestion: str | None = None) -> None:
        super().__init__(message)
        self.line = line
        self.suggestion = suggestion


def default_parallel_jobs() -> int:
    """Return a CPU count scaled down for concurrent linting.

    Returns:
        int: Rounded-down count representing roughly 75% of available CPU
        cores while guaranteeing a minimum of one worker.

    """
    cores = os.cpu_count() or 1
    proposed = max(1, math.floor(cores * 0.75))
    return proposed


class RulesConfig(BaseModel):
    """The ``[rules]`` table selecting rules and their levels."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    groups: tuple[str, ...] = (DEFAULT_GROUP,)
    errors: tuple[str, ...] = Field(default_factory=tuple)
    warnings: tuple[str, ...] = Field(default_factory=tuple)
    allowed: tuple[str, ...] = Field(default_factory=tuple)

    @model_validator(mode="after")
    def _reject_conflicting_levels(self) -> RulesConfig:
        """Ensure a rule is assigned at most one level.

        Returns:
            RulesConfig: The validated model.

        Raises:
            ValueError: If a rule appears in more than one level list.
        """

        seen: dict[str, str] = {}
        for level_name in ("errors", "warnings", "allowed"):
            for rule in getattr(self, level_name):
                previous = seen.setdefault(rule, level_name)
                if previous != level_name:
                    raise ValueError(f"rule '{rule}' is listed in both '{previous}' and '{level_name}'")
        return self

    def store(self, catalog: RuleCatalog) -> RuleSet:
        """Return the active rule set described by this table.

        Rules listed in :attr:`allowed` are switched off and never reach the
        rule engine.

        Args:
            catalog: Catalog used to expand :attr:`groups`.

        Returns:
            RuleSet: Group rules followed by explicitly enabled rules.
        """

        names: dict[str, None] = {}
        for group in self.groups:
            names.update(dict.fromkeys(catalog.group_rules(group)))
        names.update(dict.fromkeys(self.errors))
        names.update(dict.fromkeys(self.warnings))
        disabled = set(self.allowed)
        return RuleSet(tuple(name for name in names if name not in disabled))

    def rule_level_by_name(self, name: str) -> RuleLevel | None:
        """Return the configured level for ``name``.

        Args:
            name: Rule name to look up.

        Returns:
            RuleLevel | None: Configured level, or ``None`` when the rule keeps
            its built-in severities.
        """

        if name in self.allowed:
            return RuleLevel.OFF
        if name in self.warnings:
            return RuleLevel.WARNING
        if name in self.errors:
            return RuleLevel.ERROR
        return None


class LintConfig(BaseModel):
    """Top level document of ``jsqarc.toml``."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    rules: RulesConfig | None = None


@dataclass(frozen=True, slots=True)
class LintSettings:
    """Runtime options for a lint run supplied by the CLI."""

    root: Path = field(default_factory=Path.cwd)
    jobs: int = field(default_factory=default_parallel_jobs)
    color: bool = True


__all__ = [
    "ConfigError",
    "LintConfig",
    "LintSettings",
    "RulesConfig",
    "default_parallel_jobs",
]
