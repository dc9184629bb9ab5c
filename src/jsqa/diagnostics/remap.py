# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Reclassify rule diagnostics according to the configured rule level."""

from __future__ import annotations

from collections.abc import MutableSequence

from jsqa.core.models import Diagnostic
from jsqa.core.severity import RuleLevel, Severity


def remap_diagnostics_to_level(diagnostics: MutableSequence[Diagnostic], level: RuleLevel) -> None:
    """Downgrade error diagnostics in place when a rule is configured as a warning.

    Warnings and notes are never touched: rules may emit secondary warnings
    next to a primary error, and those must not be escalated. Element order is
    left unchanged.

    Args:
        diagnostics: Diagnostics emitted by a single rule for a single file.
        level: Level configured for the rule.

    Raises:
        ValueError: If ``level`` is :attr:`RuleLevel.OFF`; disabled rules are
            removed from the rule set before linting.
    """

    if level is RuleLevel.OFF:
        raise ValueError("rules configured as 'off' must be excluded from the rule set")
    if level is not RuleLevel.WARNING:
        return
    for diagnostic in diagnostics:
        if diagnostic.severity.is_error:
            diagnostic.severity = Severity.WARNING


__all__ = ["remap_diagnostics_to_level"]
