# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Lint orchestration entry points."""

from __future__ import annotations

from .orchestrator import (
    LintOrchestrator,
    OrchestratorDeps,
    RunReport,
    config_error_diagnostic,
)

__all__ = [
    "LintOrchestrator",
    "OrchestratorDeps",
    "RunReport",
    "config_error_diagnostic",
]
