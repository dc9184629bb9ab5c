# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Terminal reporting for diagnostics and run summaries."""

from __future__ import annotations

from .diagnostics import DiagnosticRenderer, DiagnosticSink, RenderingSink, format_diagnostic
from .summary import build_outcome_summary, print_outcome_summary

__all__ = [
    "DiagnosticRenderer",
    "DiagnosticSink",
    "RenderingSink",
    "build_outcome_summary",
    "format_diagnostic",
    "print_outcome_summary",
]
