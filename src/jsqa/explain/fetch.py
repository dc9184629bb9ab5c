# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Fetch rule documentation from the hosted docs repository."""

from __future__ import annotations

import logging
import urllib.request
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Final
from urllib.error import HTTPError, URLError

from jsqa.rules.catalog import RuleCatalog, RuleSpec

LOGGER = logging.getLogger(__name__)

DOCS_LINK_BASE: Final[str] = "https://raw.githubusercontent.com/RDambrosio016/RSLint/master/docs/rules"
WEBSITE_DOCS_BASE: Final[str] = "https://rdambrosio016.github.io/RSLint/rules"
DEFAULT_TIMEOUT: Final[float] = 10.0
_HTTP_NOT_MODIFIED: Final[int] = 304


@dataclass(frozen=True, slots=True)
class FetchContent:
    """Response body of a successful request."""

    data: bytes
    headers: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class FetchRedirect:
    """Redirect response; redirects are never followed."""

    location: str | None
    status: int


@dataclass(frozen=True, slots=True)
class FetchNotModified:
    """``304 Not Modified`` response."""


@dataclass(frozen=True, slots=True)
class FetchFailure:
    """Transport level failure or an unsuccessful status code."""

    reason: str


FetchResult = FetchContent | FetchRedirect | FetchNotModified | FetchFailure
Transport = Callable[[str], FetchResult]


class _NoRedirectHandler(urllib.request.HTTPRedirectHandler):
    """Surface redirects as :class:`HTTPError` instead of following them."""

    def redirect_request(self, req, fp, code, msg, headers, newurl):  # noqa: ANN001, ANN201
        return None


def fetch_once(url: str, *, timeout: float = DEFAULT_TIMEOUT) -> FetchResult:
    """Issue a single ``GET`` for ``url`` without retries or caching.

    Args:
        url: Absolute URL to request.
        timeout: Socket timeout in seconds.

    Returns:
        FetchResult: Tagged outcome of the request.
    """

    opener = urllib.request.build_opener(_NoRedirectHandler)
    try:
        with opener.open(url, timeout=timeout) as response:
            return FetchContent(data=response.read(), headers=dict(response.headers.items()))
    except HTTPError as exc:
        exc.close()
        if exc.code == _HTTP_NOT_MODIFIED:
            return FetchNotModified()
        if 300 <= exc.code < 400:
            return FetchRedirect(location=exc.headers.get("Location"), status=exc.code)
        return FetchFailure(reason=f"HTTP {exc.code} {exc.reason}")
    except URLError as exc:
        return FetchFailure(reason=str(exc.reason))
    except (OSError, ValueError) as exc:
        return FetchFailure(reason=str(exc))


@dataclass(slots=True)
class ExplanationDocument:
    """Documentation text of one rule, transformed in place for display."""

    rule: str
    group: str
    text: str


class DocumentationError(Exception):
    """Raised when the documentation of a rule is unavailable."""

    def __init__(self, rule: str, reason: str) -> None:
        super().__init__(f"{rule}: {reason}")
        self.rule = rule
        self.reason = reason


class UnknownRuleError(DocumentationError):
    """Raised when a rule name does not resolve against the catalog."""

    def __init__(self, rule: str) -> None:
        super().__init__(rule, "no rule with this name exists")


class DocumentationFetchError(DocumentationError):
    """Raised when the remote documentation could not be retrieved."""


def docs_url(rule: RuleSpec, base: str = DOCS_LINK_BASE) -> str:
    """Return ``{base}/{group}/{name}.md`` for ``rule``."""

    return f"{base}/{rule.group}/{rule.name}.md"


class DocumentationFetcher:
    """Resolve rule names and download their markdown documentation."""

    def __init__(self, catalog: RuleCatalog, transport: Transport | None = None, *, base: str = DOCS_LINK_BASE) -> None:
        self._catalog = catalog
        self._transport: Transport = transport or fetch_once
        self._base = base

    def fetch(self, rule_name: str) -> ExplanationDocument:
        """Return the raw documentation for ``rule_name``.

        Args:
            rule_name: Name of the rule to explain.

        Returns:
            ExplanationDocument: Untransformed markdown documentation.

        Raises:
            UnknownRuleError: If the rule is not in the catalog.
            DocumentationFetchError: If the request did not yield UTF-8 content.
        """

        rule = self._catalog.get_rule_by_name(rule_name)
        if rule is None:
            raise UnknownRuleError(rule_name)
        url = docs_url(rule, self._base)
        LOGGER.debug("fetching docs for %s from %s", rule_name, url)
        match self._transport(url):
            case FetchContent(data=data):
                try:
                    text = data.decode("utf-8")
                except UnicodeDecodeError as exc:
                    raise DocumentationFetchError(rule_name, "documentation is not valid UTF-8") from exc
                return ExplanationDocument(rule=rule.name, group=rule.group, text=text)
            case FetchRedirect(location=location, status=status):
                raise DocumentationFetchError(rule_name, f"unexpected redirect ({status}) to {location}")
            case FetchNotModified():
                raise DocumentationFetchError(rule_name, "unexpected 304 (Not Modified) response")
            case FetchFailure(reason=reason):
                raise DocumentationFetchError(rule_name, reason)
        raise DocumentationFetchError(rule_name, "transport returned an unknown result")


__all__ = [
    "DEFAULT_TIMEOUT",
    "DOCS_LINK_BASE",
    "DocumentationError",
    "DocumentationFetchError",
    "DocumentationFetcher",
    "ExplanationDocument",
    "FetchContent",
    "FetchFailure",
    "FetchNotModified",
    "FetchRedirect",
    "FetchResult",
    "Transport",
    "UnknownRuleError",
    "WEBSITE_DOCS_BASE",
    "docs_url",
    "fetch_once",
]
