# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Terminal rendering of diagnostics against their source files."""

from __future__ import annotations

from threading import Lock
from typing import Final, Protocol, runtime_checkable

from rich.console import Console
from rich.text import Text

from jsqa.core.logging import fail
from jsqa.core.models import Diagnostic, SourceFile, Span
from jsqa.core.severity import Severity
from jsqa.discovery.filesystem import FileRegistry
from jsqa.runtime.console.manager import get_console_manager

GUTTER: Final[str] = "│"
LOCATION_MARKER: Final[str] = "┌─"
NOTE_MARKER: Final[str] = "="
PRIMARY_UNDERLINE: Final[str] = "^"
SECONDARY_UNDERLINE: Final[str] = "-"


def severity_color(sev: Severity) -> str:
    """Return the rich colour name associated with a severity level."""

    return {
        Severity.BUG: "bold red",
        Severity.ERROR: "red",
        Severity.WARNING: "yellow",
        Severity.NOTE: "cyan",
    }.get(sev, "yellow")


@runtime_checkable
class DiagnosticSink(Protocol):
    """Capability handed to components that need to report diagnostics."""

    def emit(self, diagnostic: Diagnostic) -> None:
        """Report ``diagnostic`` to the user."""
        ...


class DiagnosticRenderer:
    """Render diagnostics in a codespan-like layout to a shared console.

    A single lock serialises whole diagnostics so that renders issued from
    worker threads never interleave their lines.
    """

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or get_console_manager().get(color=True, emoji=False, stderr=True)
        self._lock = Lock()

    def render(self, diagnostic: Diagnostic, registry: FileRegistry) -> bool:
        """Write ``diagnostic`` to the console.

        Args:
            diagnostic: Diagnostic to render.
            registry: Files of the run, used to resolve span locations.

        Returns:
            bool: ``True`` on success, ``False`` when the terminal write failed.
        """

        lines = format_diagnostic(diagnostic, registry)
        with self._lock:
            try:
                for line in lines:
                    self._console.print(line)
            except OSError as exc:
                fail(f"Failed to emit linter diagnostic: {exc}", use_emoji=False, stderr=True)
                return False
        return True


class RenderingSink:
    """:class:`DiagnosticSink` writing through a :class:`DiagnosticRenderer`."""

    def __init__(self, renderer: DiagnosticRenderer, registry: FileRegistry | None = None) -> None:
        self._renderer = renderer
        self._registry = registry if registry is not None else FileRegistry.empty()

    def emit(self, diagnostic: Diagnostic) -> None:
        self._renderer.render(diagnostic, self._registry)


def _span_lines(span: Span, file: SourceFile, registry: FileRegistry, gutter_width: int) -> list[Text]:
    line, column = registry.line_column(file.file_id, span.start)
    end_line, end_column = registry.line_column(file.file_id, max(span.start, span.end))
    line_text = registry.line_text(file.file_id, line)
    if end_line != line:
        end_column = len(line_text) + 1
    width = max(1, end_column - column)
    marker = PRIMARY_UNDERLINE if span.primary else SECONDARY_UNDERLINE
    style = "bold red" if span.primary else "bold blue"

    number = Text(f"{line:>{gutter_width}} {GUTTER} ", style="bold blue")
    number.append(line_text)
    underline = Text(f"{'':>{gutter_width}} {GUTTER} ", style="bold blue")
    underline.append(" " * (column - 1) + marker * width, style=style)
    if span.label:
        underline.append(f" {span.label}", style=style)
    return [number, underline]


def format_diagnostic(diagnostic: Diagnostic, registry: FileRegistry) -> list[Text]:
    """Return the rendered lines of ``diagnostic``.

    Args:
        diagnostic: Diagnostic to format.
        registry: Files used to resolve spans; spans of unknown files are skipped.

    Returns:
        list[Text]: Styled lines ready for printing.
    """

    color = severity_color(diagnostic.severity)
    header = Text(f"{diagnostic.severity.value}", style=f"bold {color}")
    if diagnostic.rule:
        header.append(f"[{diagnostic.rule}]", style=f"bold {color}")
    header.append(f": {diagnostic.message}", style="bold")
    lines = [header]

    file = registry.get(diagnostic.file_id)
    spans = list(diagnostic.spans) if file is not None else []
    gutter_width = 1
    if file is not None and spans:
        last_line = max(registry.line_column(file.file_id, span.start)[0] for span in spans)
        gutter_width = len(str(last_line))
        primary = diagnostic.primary_span() or spans[0]
        line, column = registry.line_column(file.file_id, primary.start)
        location = Text(f"{'':>{gutter_width}} {LOCATION_MARKER} ", style="bold blue")
        location.append(f"{file.name}:{line}:{column}")
        lines.append(location)
        lines.append(Text(f"{'':>{gutter_width}} {GUTTER}", style="bold blue"))
        for span in sorted(spans, key=lambda item: item.start):
            lines.extend(_span_lines(span, file, registry, gutter_width))
    if diagnostic.notes:
        if file is not None and spans:
            lines.append(Text(f"{'':>{gutter_width}} {GUTTER}", style="bold blue"))
        for note in diagnostic.notes:
            note_line = Text(f"{'':>{gutter_width}} {NOTE_MARKER} ", style="bold blue")
            note_line.append(note)
            lines.append(note_line)
    lines.append(Text())
    return lines


__all__ = [
    "DiagnosticRenderer",
    "DiagnosticSink",
    "RenderingSink",
    "format_diagnostic",
    "severity_color",
]
