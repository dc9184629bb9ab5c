# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Print terminal-formatted documentation for a batch of rules."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Final

from rich.console import Console
from rich.text import Text

from jsqa.core.models import Diagnostic
from jsqa.reporting.diagnostics import DiagnosticSink
from jsqa.runtime.console.manager import get_console_manager

from .fetch import DocumentationError, DocumentationFetcher, ExplanationDocument
from .transforms import Highlighter, highlight_javascript, render_document

LOGGER = logging.getLogger(__name__)

SEPARATOR: Final[str] = "-" * 10


@dataclass(slots=True)
class ExplainReport:
    """Rules that were printed and rules whose documentation was unavailable."""

    explained: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)

    @property
    def exit_code(self) -> int:
        """Return ``1`` only when every requested rule failed."""

        return 1 if self.failed and not self.explained else 0


class ExplanationRunner:
    """Fetch, transform, and print rule documentation in request order."""

    def __init__(
        self,
        fetcher: DocumentationFetcher,
        sink: DiagnosticSink,
        console: Console | None = None,
        highlighter: Highlighter = highlight_javascript,
    ) -> None:
        self._fetcher = fetcher
        self._sink = sink
        self._console = console or get_console_manager().get(color=True, emoji=False)
        self._highlighter = highlighter

    def collect(self, rule_names: Iterable[str], report: ExplainReport) -> list[ExplanationDocument]:
        """Fetch and transform every rule, reporting failures through the sink.

        Args:
            rule_names: Rules to explain, in display order.
            report: Report updated with the name of every processed rule.

        Returns:
            list[ExplanationDocument]: Transformed documents in request order.
        """

        documents: list[ExplanationDocument] = []
        for name in rule_names:
            try:
                document = self._fetcher.fetch(name)
            except DocumentationError as exc:
                LOGGER.debug("documentation unavailable for %s: %s", name, exc.reason)
                self._sink.emit(Diagnostic.error(0, "", f"Failed to fetch rule docs for `{name}`: {exc.reason}"))
                report.failed.append(name)
                continue
            documents.append(render_document(document, self._highlighter))
            report.explained.append(name)
        return documents

    def explain(self, rule_names: Iterable[str]) -> ExplainReport:
        """Print the documentation of ``rule_names``.

        Args:
            rule_names: Rules to explain, in display order.

        Returns:
            ExplainReport: Names that were explained and names that failed.
        """

        report = ExplainReport()
        for document in self.collect(rule_names, report):
            self._console.print(SEPARATOR, markup=False, highlight=False)
            self._console.print(Text.from_ansi(document.text))
        return report


__all__ = ["SEPARATOR", "ExplainReport", "ExplanationRunner"]
