# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the jsqa package."""

from __future__ import annotations

from collections.abc import Iterator
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from jsqa.core.severity import Outcome, Severity


class FileKind(str, Enum):
    """Parse goal of a JavaScript source file."""

    SCRIPT = "script"
    MODULE = "module"


class SourceFile(BaseModel):
    """Immutable record describing one discovered file."""

    model_config = ConfigDict(frozen=True)

    file_id: int
    name: str
    source: str
    kind: FileKind = FileKind.SCRIPT

    @property
    def is_module(self) -> bool:
        """Return ``True`` when the file must be parsed as an ES module.

        Returns:
            bool: ``True`` for :attr:`FileKind.MODULE` files.
        """

        return self.kind is FileKind.MODULE


class Span(BaseModel):
    """Character range inside a source file with an optional label."""

    model_config = ConfigDict(frozen=True)

    start: int
    end: int
    label: str | None = None
    primary: bool = True


class Diagnostic(BaseModel):
    """Single finding produced by a rule against a file.

    Only :attr:`severity` may change after the rule engine emits the
    diagnostic, and only through
    :func:`jsqa.diagnostics.remap.remap_diagnostics_to_level`.
    """

    model_config = ConfigDict(validate_assignment=True)

    severity: Severity
    rule: str
    file_id: int
    message: str
    spans: tuple[Span, ...] = Field(default_factory=tuple)
    notes: tuple[str, ...] = Field(default_factory=tuple)

    @classmethod
    def error(cls, file_id: int, rule: str, message: str) -> Diagnostic:
        """Return an error diagnostic without source spans."""

        return cls(severity=Severity.ERROR, rule=rule, file_id=file_id, message=message)

    def with_note(self, note: str) -> Diagnostic:
        """Return a copy of the diagnostic with ``note`` appended.

        Args:
            note: Explanatory text rendered below the diagnostic.

        Returns:
            Diagnostic: New diagnostic carrying the additional note.
        """

        return self.model_copy(update={"notes": (*self.notes, note)})

    def primary_span(self) -> Span | None:
        """Return the first primary span, falling back to the first span.

        Returns:
            Span | None: Span used to locate the diagnostic, if any.
        """

        for span in self.spans:
            if span.primary:
                return span
        return self.spans[0] if self.spans else None


class LintResult(BaseModel):
    """Diagnostics produced for one file, grouped by rule name."""

    model_config = ConfigDict(validate_assignment=True)

    file_id: int
    rule_diagnostics: dict[str, list[Diagnostic]] = Field(default_factory=dict)

    @property
    def outcome(self) -> Outcome:
        """Return the outcome derived from the current diagnostic severities.

        Returns:
            Outcome: Classification recomputed on every access so that
            severity remapping is reflected.
        """

        return Outcome.from_severities(diagnostic.severity for diagnostic in self.diagnostics())

    def diagnostics(self) -> Iterator[Diagnostic]:
        """Yield every diagnostic, preserving the per-rule emission order.

        Yields:
            Diagnostic: Diagnostics grouped by rule in insertion order.
        """

        for diagnostics in self.rule_diagnostics.values():
            yield from diagnostics


__all__ = [
    "Diagnostic",
    "FileKind",
    "LintResult",
    "SourceFile",
    "Span",
]
