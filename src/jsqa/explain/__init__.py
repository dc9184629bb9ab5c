# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Rule documentation lookup and terminal formatting."""

from __future__ import annotations

from .fetch import (
    DocumentationError,
    DocumentationFetcher,
    DocumentationFetchError,
    ExplanationDocument,
    UnknownRuleError,
)
from .runner import ExplainReport, ExplanationRunner
from .transforms import render_document

__all__ = [
    "DocumentationError",
    "DocumentationFetchError",
    "DocumentationFetcher",
    "ExplainReport",
    "ExplanationDocument",
    "ExplanationRunner",
    "UnknownRuleError",
    "render_document",
]
