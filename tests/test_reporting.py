# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for diagnostic rendering and the run summary."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from io import StringIO

import pytest
from rich.console import Console

from jsqa.core.models import Diagnostic, SourceFile, Span
from jsqa.core.severity import Outcome, Severity
from jsqa.discovery.filesystem import FileRegistry
from jsqa.reporting.diagnostics import (
    DiagnosticRenderer,
    DiagnosticSink,
    RenderingSink,
    format_diagnostic,
    severity_color,
)
from jsqa.reporting.summary import EXPLAIN_HINT, build_outcome_summary, print_outcome_summary

SOURCE = "let a = 1;\nif (a) {}\n"


def _registry() -> FileRegistry:
    return FileRegistry([SourceFile(file_id=3, name="src/app.js", source=SOURCE)])


def _no_empty() -> Diagnostic:
    start = SOURCE.index("{}")
    return Diagnostic(
        severity=Severity.ERROR,
        rule="no-empty",
        file_id=3,
        message="empty block statements are not allowed",
        spans=(Span(start=start, end=start + 2, label="this block is empty"),),
        notes=("help: add a comment inside the block if this is intentional",),
    )


def test_format_diagnostic_codespan_layout() -> None:
    lines = [line.plain for line in format_diagnostic(_no_empty(), _registry())]

    assert lines == [
        "error[no-empty]: empty block statements are not allowed",
        "  ┌─ src/app.js:2:8",
        "  │",
        "2 │ if (a) {}",
        "  │        ^^ this block is empty",
        "  │",
        "  = help: add a comment inside the block if this is intentional",
        "",
    ]


def test_format_diagnostic_without_file_prints_header_and_notes() -> None:
    diagnostic = Diagnostic.error(0, "config", "unknown rule `x`").with_note("help: did you mean 'y'?")

    lines = [line.plain for line in format_diagnostic(diagnostic, FileRegistry.empty())]

    assert lines == ["error[config]: unknown rule `x`", "  = help: did you mean 'y'?", ""]


def test_format_diagnostic_omits_empty_rule() -> None:
    diagnostic = Diagnostic.error(0, "", "Failed to fetch rule docs for `x`: nope")
    lines = format_diagnostic(diagnostic, FileRegistry.empty())
    assert lines[0].plain == "error: Failed to fetch rule docs for `x`: nope"


def test_severity_colours() -> None:
    assert severity_color(Severity.ERROR) == "red"
    assert severity_color(Severity.WARNING) == "yellow"


def test_renderer_writes_whole_diagnostic() -> None:
    console = Console(file=StringIO(), force_terminal=False, color_system=None, width=120)
    renderer = DiagnosticRenderer(console)

    assert renderer.render(_no_empty(), _registry()) is True
    output = console.file.getvalue()
    assert "error[no-empty]" in output
    assert "^^ this block is empty" in output


def test_renderer_reports_write_failures(monkeypatch: pytest.MonkeyPatch) -> None:
    class _BrokenFile(StringIO):
        def write(self, text: str) -> int:
            raise OSError("broken pipe")

    failures: list[str] = []
    monkeypatch.setattr("jsqa.reporting.diagnostics.fail", lambda message, **_: failures.append(message))
    renderer = DiagnosticRenderer(Console(file=_BrokenFile(), force_terminal=False, color_system=None))

    assert renderer.render(_no_empty(), _registry()) is False
    assert failures and "broken pipe" in failures[0]


def test_concurrent_renders_do_not_interleave() -> None:
    console = Console(file=StringIO(), force_terminal=False, color_system=None, width=200)
    renderer = DiagnosticRenderer(console)
    registry = _registry()
    diagnostics = [
        _no_empty().model_copy(update={"message": f"finding {index}", "notes": (f"help: finding {index}",)})
        for index in range(40)
    ]

    with ThreadPoolExecutor(max_workers=8) as executor:
        assert all(executor.map(lambda diagnostic: renderer.render(diagnostic, registry), diagnostics))

    blocks = console.file.getvalue().rstrip("\n").split("\n\n")
    assert len(blocks) == len(diagnostics)
    for block in blocks:
        lines = block.split("\n")
        assert len(lines) == 7
        index = lines[0].removeprefix("error[no-empty]: finding ")
        assert lines[1] == "  ┌─ src/app.js:2:8"
        assert lines[-1] == f"  = help: finding {index}"


def test_rendering_sink_satisfies_protocol() -> None:
    console = Console(file=StringIO(), force_terminal=False, color_system=None, width=120)
    sink = RenderingSink(DiagnosticRenderer(console))

    assert isinstance(sink, DiagnosticSink)
    sink.emit(Diagnostic.error(0, "", "Failed to fetch rule docs for `x`: nope"))
    assert "error: Failed to fetch rule docs for `x`: nope" in console.file.getvalue()


def test_outcome_summary_text() -> None:
    assert build_outcome_summary(1, 2, 3).plain == "\nOutcome: 1 fail, 2 warn, 3 success"


def test_summary_prints_hint_only_on_failure(plain_console: Console) -> None:
    print_outcome_summary(plain_console, failures=0, warnings=1, successes=2, outcome=Outcome.WARNING)
    assert EXPLAIN_HINT.strip() not in plain_console.file.getvalue()

    print_outcome_summary(plain_console, failures=1, warnings=0, successes=0, outcome=Outcome.FAILURE)
    assert EXPLAIN_HINT.strip() in plain_console.file.getvalue()
