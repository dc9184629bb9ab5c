# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Implementation of the ``jsqa explain`` command."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Annotated

import typer
from rich.console import Console

from jsqa.explain.fetch import DocumentationFetcher, Transport
from jsqa.explain.runner import ExplainReport, ExplanationRunner
from jsqa.reporting.diagnostics import DiagnosticRenderer, RenderingSink
from jsqa.rules.catalog import default_catalog


def run_explain(
    rules: Sequence[str],
    *,
    transport: Transport | None = None,
    console: Console | None = None,
    renderer: DiagnosticRenderer | None = None,
) -> ExplainReport:
    """Print the documentation of ``rules``.

    Args:
        rules: Rule names in display order.
        transport: Optional HTTP transport used instead of :func:`fetch_once`.
        console: Optional console receiving the documentation.
        renderer: Optional renderer receiving fetch failures.

    Returns:
        ExplainReport: Rules that were explained and rules that failed.
    """

    fetcher = DocumentationFetcher(default_catalog(), transport)
    sink = RenderingSink(renderer or DiagnosticRenderer())
    return ExplanationRunner(fetcher, sink, console).explain(rules)


def explain_command(
    rules: Annotated[list[str], typer.Argument(help="Rules to explain, for example no-empty.")],
) -> None:
    """Print the documentation of one or more rules."""

    report = run_explain(rules)
    raise typer.Exit(code=report.exit_code)


__all__ = ["explain_command", "run_explain"]
