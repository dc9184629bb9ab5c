# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Registry of known lint rules and the rule sets selected for a run."""

from __future__ import annotations

import difflib
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Final

DEFAULT_GROUP: Final[str] = "errors"
SUGGESTION_CUTOFF: Final[float] = 0.6


@dataclass(frozen=True, slots=True)
class RuleSpec:
    """Metadata describing a single rule."""

    name: str
    group: str
    description: str


@dataclass(frozen=True, slots=True)
class RuleSet:
    """Ordered, immutable selection of active rule names."""

    names: tuple[str, ...]

    def __contains__(self, name: object) -> bool:
        return name in self.names

    def __iter__(self) -> Iterator[str]:
        return iter(self.names)

    def __len__(self) -> int:
        return len(self.names)


class RuleCatalog:
    """Resolve rule names to their metadata and build rule sets."""

    def __init__(self, rules: Iterable[RuleSpec]) -> None:
        """Index ``rules`` by name, rejecting duplicates.

        Args:
            rules: Rule metadata to register.

        Raises:
            ValueError: If two rules share the same name.
        """

        self._rules: dict[str, RuleSpec] = {}
        for rule in rules:
            if rule.name in self._rules:
                raise ValueError(f"rule '{rule.name}' registered twice")
            self._rules[rule.name] = rule

    def get_rule_by_name(self, name: str) -> RuleSpec | None:
        """Return the rule registered under ``name``, if any."""

        return self._rules.get(name)

    def names(self) -> tuple[str, ...]:
        """Return all registered rule names in registration order."""

        return tuple(self._rules)

    def groups(self) -> tuple[str, ...]:
        """Return the distinct rule groups in registration order."""

        return tuple(dict.fromkeys(rule.group for rule in self._rules.values()))

    def group_rules(self, group: str) -> tuple[str, ...]:
        """Return the names of every rule in ``group``."""

        return tuple(rule.name for rule in self._rules.values() if rule.group == group)

    def builtins(self) -> RuleSet:
        """Return the default rule set used when no rules are configured.

        Returns:
            RuleSet: Every rule in the :data:`DEFAULT_GROUP` group.
        """

        return RuleSet(self.group_rules(DEFAULT_GROUP))

    def suggest(self, name: str) -> str | None:
        """Return the registered rule name closest to ``name``, if any."""

        return closest_match(name, self.names())


def closest_match(value: str, candidates: Iterable[str]) -> str | None:
    """Return the candidate most similar to ``value`` or ``None``.

    Args:
        value: Misspelt rule, group or field name.
        candidates: Names to match against.

    Returns:
        str | None: Best match above the similarity cutoff.
    """

    matches = difflib.get_close_matches(value, list(candidates), n=1, cutoff=SUGGESTION_CUTOFF)
    return matches[0] if matches else None


_ERRORS: Final[tuple[tuple[str, str], ...]] = (
    ("constructor-super", "Verify calls of super() in constructors"),
    ("for-direction", "Disallow for loops which update their counter in the wrong direction"),
    ("getter-return", "Disallow getter properties which do not always return a value"),
    ("no-async-promise-executor", "Disallow async functions as promise executors"),
    ("no-await-in-loop", "Disallow await inside of loops"),
    ("no-compare-neg-zero", "Disallow comparison against -0 which yields unexpected behavior"),
    ("no-cond-assign", "Forbid the use of assignment expressions in conditions"),
    ("no-constant-condition", "Disallow constant conditions which always yield one result"),
    ("no-debugger", "Disallow the use of debugger statements"),
    ("no-dupe-keys", "Disallow duplicate keys in object literals"),
    ("no-duplicate-cases", "Disallow duplicate test cases in switch statements"),
    ("no-empty", "Disallow empty block statements"),
    ("no-extra-boolean-cast", "Disallow unnecessary boolean casts"),
    ("no-extra-semi", "Disallow unneeded semicolons"),
    ("no-inner-declarations", "Disallow variable and function declarations in nested blocks"),
    ("no-irregular-whitespace", "Disallow weird whitespace characters"),
    ("no-new-symbol", "Disallow constructing Symbol using new"),
    ("no-prototype-builtins", "Disallow direct use of Object.prototype builtins"),
    ("no-setter-return", "Disallow setters to return values"),
    ("no-sparse-arrays", "Disallow sparse arrays"),
    ("no-this-before-super", "Prevent the use of this or super before calling super()"),
    ("no-undef", "Disallow the use of undeclared variables"),
    ("no-unsafe-finally", "Forbid the use of unsafe control flow statements in finally blocks"),
    ("no-unsafe-negation", "Deny the use of ! on the left hand side of an instanceof or in expression"),
    ("valid-typeof", "Enforce the use of valid string literals in a typeof comparison"),
)

_STYLE: Final[tuple[tuple[str, str], ...]] = (
    ("block-spacing", "Enforce or disallow spaces inside of blocks after the opening and closing brackets"),
)

_REGEX: Final[tuple[tuple[str, str], ...]] = (
    ("no-invalid-regexp", "Disallow invalid regular expressions in RegExp constructors"),
    ("simple-regex", "Disallow multiple consecutive spaces in regular expressions"),
)


def default_catalog() -> RuleCatalog:
    """Return the catalog of rules known to jsqa.

    Returns:
        RuleCatalog: Catalog holding the ``errors``, ``style`` and ``regex`` groups.
    """

    specs: list[RuleSpec] = []
    for group, entries in (("errors", _ERRORS), ("style", _STYLE), ("regex", _REGEX)):
        specs.extend(RuleSpec(name=name, group=group, description=description) for name, description in entries)
    return RuleCatalog(specs)


__all__ = [
    "DEFAULT_GROUP",
    "RuleCatalog",
    "RuleSet",
    "RuleSpec",
    "SUGGESTION_CUTOFF",
    "closest_match",
    "default_catalog",
]
