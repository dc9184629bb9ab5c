# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for severity classification and outcome merging."""

from __future__ import annotations

import itertools

import pytest

from jsqa.core.severity import Outcome, Severity

ALL_OUTCOMES = tuple(Outcome)


def test_merge_of_nothing_is_success() -> None:
    assert Outcome.merge([]) is Outcome.SUCCESS


@pytest.mark.parametrize(("left", "right"), list(itertools.product(ALL_OUTCOMES, repeat=2)))
def test_merge_is_commutative(left: Outcome, right: Outcome) -> None:
    assert Outcome.merge([left, right]) is Outcome.merge([right, left])


def test_merge_is_associative() -> None:
    for a, b, c in itertools.product(ALL_OUTCOMES, repeat=3):
        grouped_left = Outcome.merge([Outcome.merge([a, b]), c])
        grouped_right = Outcome.merge([a, Outcome.merge([b, c])])
        assert grouped_left is grouped_right is Outcome.merge([a, b, c])


@pytest.mark.parametrize("other", ALL_OUTCOMES)
def test_failure_absorbs_everything(other: Outcome) -> None:
    assert Outcome.merge([Outcome.FAILURE, other]) is Outcome.FAILURE
    assert Outcome.merge([other, Outcome.SUCCESS]) is other


def test_outcome_from_severities() -> None:
    assert Outcome.from_severities([]) is Outcome.SUCCESS
    assert Outcome.from_severities([Severity.NOTE]) is Outcome.SUCCESS
    assert Outcome.from_severities([Severity.NOTE, Severity.WARNING]) is Outcome.WARNING
    assert Outcome.from_severities([Severity.WARNING, Severity.ERROR]) is Outcome.FAILURE
    assert Outcome.from_severities([Severity.BUG]) is Outcome.FAILURE


def test_error_severities() -> None:
    assert Severity.ERROR.is_error
    assert Severity.BUG.is_error
    assert not Severity.WARNING.is_error
    assert not Severity.NOTE.is_error
