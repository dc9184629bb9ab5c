# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Markdown to ANSI rewrites applied to fetched rule documentation.

Each stage takes the whole document and returns the rewritten document; a
stage whose pattern does not occur returns its input unchanged. The stages
must run once each, in the order used by :func:`render_document`.
"""

from __future__ import annotations

import io
import re
from collections.abc import Callable
from typing import Final

from rich.color import Color, ColorSystem
from rich.console import Console
from rich.style import Style
from rich.syntax import Syntax

from .fetch import WEBSITE_DOCS_BASE, ExplanationDocument

Highlighter = Callable[[str], str]

TRAILING_SECTION_MARKERS: Final[tuple[str, ...]] = ("# Config", "<details>")
HEADING_STYLE: Final[Style] = Style(bold=True, color="bright_white")
INLINE_CODE_STYLE: Final[Style] = Style(color="white", bgcolor=Color.from_rgb(42, 42, 42))
DOCS_LABEL_STYLE: Final[Style] = Style(color="green")
SYNTAX_THEME: Final[str] = "monokai"

_PRELUDE_RE: Final[re.Pattern[str]] = re.compile(r"\A\s*<!--.*?-->[ \t]*(?:\r?\n)*", re.DOTALL)
_HEADING_RE: Final[re.Pattern[str]] = re.compile(r"^#+ (.*)$", re.MULTILINE)
_CODE_BLOCK_RE: Final[re.Pattern[str]] = re.compile(r"```(?:js|javascript)\n([\s\S]*?)\n```")
_INLINE_CODE_RE: Final[re.Pattern[str]] = re.compile(r"`(.+?)`")


def paint(text: str, style: Style) -> str:
    """Return ``text`` wrapped in the ANSI sequences for ``style``."""

    return style.render(text, color_system=ColorSystem.TRUECOLOR)


def highlight_javascript(code: str) -> str:
    """Return ``code`` syntax highlighted with ANSI escapes.

    Args:
        code: JavaScript source taken from a fenced code block.

    Returns:
        str: Highlighted source without a trailing newline.
    """

    console = Console(
        file=io.StringIO(),
        force_terminal=True,
        color_system="truecolor",
        soft_wrap=True,
        highlight=False,
    )
    text = Syntax(code, "javascript", theme=SYNTAX_THEME, background_color="default").highlight(code)
    text.rstrip()
    with console.capture() as capture:
        console.print(text, end="")
    return capture.get()


def strip_prelude(text: str) -> str:
    """Remove the leading generated-file HTML comment, if present."""

    return _PRELUDE_RE.sub("", text, count=1)


def strip_trailing_sections(text: str) -> str:
    """Cut the document before its config section or expandable examples.

    The character preceding the first marker is dropped along with
    everything after it.
    """

    positions = [index for index in (text.find(marker) for marker in TRAILING_SECTION_MARKERS) if index != -1]
    if not positions:
        return text
    return text[: max(0, min(positions) - 1)]


def highlight_headings(text: str) -> str:
    """Replace markdown heading lines with their bold bright text."""

    return _HEADING_RE.sub(lambda match: paint(match.group(1), HEADING_STYLE), text)


def highlight_code_blocks(text: str, highlighter: Highlighter = highlight_javascript) -> str:
    """Replace JavaScript fenced blocks with highlighted code between blank lines."""

    return _CODE_BLOCK_RE.sub(lambda match: f"\n{highlighter(match.group(1))}\n", text)


def highlight_inline_code(text: str) -> str:
    """Render backtick spans on a dark background."""

    return _INLINE_CODE_RE.sub(lambda match: paint(match.group(1), INLINE_CODE_STYLE), text)


def append_docs_link(text: str, rule: str, group: str, *, base: str = WEBSITE_DOCS_BASE) -> str:
    """Append a ``Docs: <url>`` line pointing at the hosted rule page."""

    separator = "" if not text or text.endswith("\n") else "\n"
    return f"{text}{separator}{paint('Docs', DOCS_LABEL_STYLE)}: {base}/{group}/{rule}.md\n"


def render_document(document: ExplanationDocument, highlighter: Highlighter = highlight_javascript) -> ExplanationDocument:
    """Run every stage over ``document`` in place.

    Args:
        document: Freshly fetched documentation.
        highlighter: Colouriser for fenced JavaScript code.

    Returns:
        ExplanationDocument: The same document holding terminal-ready text.
    """

    text = strip_prelude(document.text)
    text = strip_trailing_sections(text)
    text = highlight_headings(text)
    text = highlight_code_blocks(text, highlighter)
    text = highlight_inline_code(text)
    document.text = append_docs_link(text, document.rule, document.group)
    return document


__all__ = [
    "Highlighter",
    "append_docs_link",
    "highlight_code_blocks",
    "highlight_headings",
    "highlight_inline_code",
    "highlight_javascript",
    "paint",
    "render_document",
    "strip_prelude",
    "strip_trailing_sections",
]
