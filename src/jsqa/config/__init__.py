# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Configuration models and the ``jsqarc.toml`` loader."""

from __future__ import annotations

from .loader import CONFIG_NAME, load_config, parse_config
from .models import (
    ConfigError,
    LintConfig,
    LintSettings,
    RulesConfig,
    default_parallel_jobs,
)

__all__ = [
    "CONFIG_NAME",
    "ConfigError",
    "LintConfig",
    "LintSettings",
    "RulesConfig",
    "default_parallel_jobs",
    "load_config",
    "parse_config",
]
