# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""File discovery helpers."""

from __future__ import annotations

from .filesystem import DiscoveryError, FileRegistry, FileWalker, collect_files, file_kind

__all__ = ["DiscoveryError", "FileRegistry", "FileWalker", "collect_files", "file_kind"]
