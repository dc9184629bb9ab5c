# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Rule catalog and rule engine implementations."""

from __future__ import annotations

from .catalog import RuleCatalog, RuleSet, RuleSpec, default_catalog
from .engine import FatalLintError, RuleEngine, TokenRuleEngine

__all__ = [
    "FatalLintError",
    "RuleCatalog",
    "RuleEngine",
    "RuleSet",
    "RuleSpec",
    "TokenRuleEngine",
    "default_catalog",
]
