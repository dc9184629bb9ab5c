# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity, rule level, and outcome types shared across jsqa."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from typing import Final


class Severity(str, Enum):
    """Severity levels attached to diagnostics emitted by the rule engine."""

    BUG = "bug"
    ERROR = "error"
    WARNING = "warning"
    NOTE = "note"

    @property
    def is_error(self) -> bool:
        """Return ``True`` for severities that fail a file.

        Returns:
            bool: ``True`` when the severity is :attr:`ERROR` or :attr:`BUG`.
        """

        return self in _FAILING_SEVERITIES


class RuleLevel(str, Enum):
    """Level configured for a rule in ``jsqarc.toml``."""

    ERROR = "error"
    WARNING = "warning"
    OFF = "off"


class Outcome(str, Enum):
    """Classification of a file, or a whole run, by its worst diagnostic."""

    SUCCESS = "success"
    WARNING = "warning"
    FAILURE = "failure"

    @property
    def rank(self) -> int:
        """Return the ordering weight used when merging outcomes.

        Returns:
            int: ``0`` for success, ``1`` for warning and ``2`` for failure.
        """

        return _OUTCOME_RANK[self]

    @classmethod
    def from_severities(cls, severities: Iterable[Severity]) -> Outcome:
        """Derive an outcome from the severities reported for a file.

        Args:
            severities: Severities of every diagnostic attached to the file.

        Returns:
            Outcome: :attr:`FAILURE` when any error or bug is present,
            :attr:`WARNING` when any warning is present, else :attr:`SUCCESS`.
        """

        outcome = cls.SUCCESS
        for severity in severities:
            if severity.is_error:
                return cls.FAILURE
            if severity is Severity.WARNING:
                outcome = cls.WARNING
        return outcome

    @classmethod
    def merge(cls, outcomes: Iterable[Outcome]) -> Outcome:
        """Merge outcomes by taking the most severe one.

        Args:
            outcomes: Outcomes to combine; may be empty.

        Returns:
            Outcome: Maximum outcome, :attr:`SUCCESS` for an empty iterable.
        """

        return max(outcomes, key=lambda outcome: outcome.rank, default=cls.SUCCESS)


_FAILING_SEVERITIES: Final[frozenset[Severity]] = frozenset({Severity.ERROR, Severity.BUG})
_OUTCOME_RANK: Final[dict[Outcome, int]] = {
    Outcome.SUCCESS: 0,
    Outcome.WARNING: 1,
    Outcome.FAILURE: 2,
}

__all__ = ["Outcome", "RuleLevel", "Severity"]
