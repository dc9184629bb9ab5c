# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Diagnostics package exposing severity reclassification helpers."""

from __future__ import annotations

from .remap import remap_diagnostics_to_level

__all__ = ("remap_diagnostics_to_level",)
