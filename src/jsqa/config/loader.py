# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Load ``jsqarc.toml`` into validated configuration models."""

from __future__ import annotations

import re
import tomllib
from pathlib import Path
from typing import Final

from pydantic import BaseModel, ValidationError

from jsqa.rules.catalog import RuleCatalog, closest_match

from .models import ConfigError, LintConfig, RulesConfig

CONFIG_NAME: Final[str] = "jsqarc.toml"

_RULE_LIST_FIELDS: Final[tuple[str, ...]] = ("errors", "warnings", "allowed")
_TOML_LINE_RE: Final[re.Pattern[str]] = re.compile(r"at line (\d+)")


def load_config(root: Path, catalog: RuleCatalog) -> LintConfig | None:
    """Load the configuration file located in ``root``.

    Args:
        root: Project directory expected to contain :data:`CONFIG_NAME`.
        catalog: Catalog used to validate rule and group names.

    Returns:
        LintConfig | None: Parsed configuration, or ``None`` when no
        configuration file exists.

    Raises:
        ConfigError: If the file cannot be read or decoded, is not valid
            TOML, does not match the schema, or references unknown rules or
            groups.
    """

    path = root / CONFIG_NAME
    if not path.is_file():
        return None
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"failed to read {CONFIG_NAME}: {exc}") from exc
    return parse_config(text, catalog)


def parse_config(text: str, catalog: RuleCatalog) -> LintConfig:
    """Parse configuration ``text``.

    Args:
        text: TOML document.
        catalog: Catalog used to validate rule and group names.

    Returns:
        LintConfig: Validated configuration.

    Raises:
        ConfigError: If the document is invalid.
    """

    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        match = _TOML_LINE_RE.search(str(exc))
        raise ConfigError(str(exc), line=int(match.group(1)) if match else None) from exc
    try:
        config = LintConfig.model_validate(data)
    except ValidationError as exc:
        raise _schema_error(exc, text) from exc
    if config.rules is not None:
        _validate_rule_names(config.rules, catalog, text)
    return config


def _schema_error(exc: ValidationError, text: str) -> ConfigError:
    """Translate the first pydantic error into a :class:`ConfigError`."""

    error = exc.errors()[0]
    location = [str(part) for part in error["loc"]]
    key = location[-1] if location else ""
    table = ".".join(location[:-1])
    where = f" in `{table}`" if table else ""
    if error["type"] == "extra_forbidden":
        model = _model_for_table(table)
        suggestion = closest_match(key, model.model_fields) if model is not None else None
        message = f"unknown field `{key}`{where}"
    else:
        suggestion = None
        message = f"invalid value for `{'.'.join(location)}`: {error['msg']}"
    return _located_error(message, text, key, suggestion)


def _model_for_table(table: str) -> type[BaseModel] | None:
    return {"": LintConfig, "rules": RulesConfig}.get(table)


def _validate_rule_names(rules: RulesConfig, catalog: RuleCatalog, text: str) -> None:
    """Reject groups and rule names that the catalog does not know."""

    for group in rules.groups:
        if group not in catalog.groups():
            suggestion = closest_match(group, catalog.groups())
            raise _located_error(f"unknown rule group `{group}` in `rules.groups`", text, group, suggestion)
    for field_name in _RULE_LIST_FIELDS:
        for name in getattr(rules, field_name):
            if catalog.get_rule_by_name(name) is None:
                suggestion = catalog.suggest(name)
                raise _located_error(f"unknown rule `{name}` in `rules.{field_name}`", text, name, suggestion)


def _located_error(message: str, text: str, needle: str, suggestion: str | None) -> ConfigError:
    """Build a :class:`ConfigError` in the ``message. did you mean 'x'? at line N`` shape."""

    line = _find_line(text, needle)
    if suggestion is not None:
        message = f"{message}. did you mean '{suggestion}'?"
    if line is not None:
        message = f"{message} at line {line}"
    return ConfigError(message, line=line, suggestion=suggestion)


def _find_line(text: str, needle: str) -> int | None:
    """Return the first line mentioning ``needle`` as a key or string value."""

    if not needle:
        return None
    pattern = re.compile(rf"""(^|[\s"'\[,{{]){re.escape(needle)}($|[\s"'\],=}}])""")
    for number, line in enumerate(text.splitlines(), start=1):
        if pattern.search(line.split("#", 1)[0]):
            return number
    return None


__all__ = ["CONFIG_NAME", "load_config", "parse_config"]
