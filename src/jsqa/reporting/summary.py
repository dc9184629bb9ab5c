# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Summary line printed at the end of a lint run."""

from __future__ import annotations

from typing import Final

from rich.console import Console
from rich.text import Text

from jsqa.core.severity import Outcome

EXPLAIN_HINT: Final[str] = (
    "\nhelp: for more information about the errors try the explain command: `jsqa explain <rules>`"
)


def build_outcome_summary(failures: int, warnings: int, successes: int) -> Text:
    """Return the ``Outcome: F fail, W warn, S success`` line.

    Args:
        failures: Number of files whose outcome is failure.
        warnings: Number of files whose outcome is warning.
        successes: Number of files whose outcome is success.

    Returns:
        Text: Styled summary preceded by a blank line.
    """

    text = Text("\nOutcome: ", style="white")
    text.append(str(failures), style="red")
    text.append(" fail, ")
    text.append(str(warnings), style="yellow")
    text.append(" warn, ")
    text.append(str(successes), style="green")
    text.append(" success")
    return text


def print_outcome_summary(
    console: Console,
    *,
    failures: int,
    warnings: int,
    successes: int,
    outcome: Outcome,
) -> None:
    """Print the run summary and, for failing runs, the explain hint."""

    console.print(build_outcome_summary(failures, warnings, successes))
    if outcome is Outcome.FAILURE:
        console.print(Text(EXPLAIN_HINT))


__all__ = ["EXPLAIN_HINT", "build_outcome_summary", "print_outcome_summary"]
