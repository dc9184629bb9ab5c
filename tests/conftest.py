# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from io import StringIO

import pytest
from rich.console import Console

from jsqa.core.models import Diagnostic
from jsqa.discovery.filesystem import FileRegistry
from jsqa.rules.catalog import RuleCatalog, default_catalog


class RecordingRenderer:
    """Renderer double capturing diagnostics instead of printing them."""

    def __init__(self) -> None:
        self.rendered: list[Diagnostic] = []

    def render(self, diagnostic: Diagnostic, registry: FileRegistry) -> bool:
        self.rendered.append(diagnostic)
        return True

    def emit(self, diagnostic: Diagnostic) -> None:
        self.rendered.append(diagnostic)


@pytest.fixture
def catalog() -> RuleCatalog:
    """Return the built-in rule catalog."""
    return default_catalog()


@pytest.fixture
def recording_renderer() -> RecordingRenderer:
    """Return a renderer that also satisfies the diagnostic sink protocol."""
    return RecordingRenderer()


@pytest.fixture
def plain_console() -> Console:
    """Return a colourless console writing to an in-memory buffer."""
    return Console(file=StringIO(), force_terminal=False, color_system=None, width=200, highlight=False)
