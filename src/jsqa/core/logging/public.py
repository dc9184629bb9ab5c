# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""User-facing status lines printed outside the diagnostic renderer."""

from __future__ import annotations

from rich.text import Text

from jsqa.runtime.console.manager import detect_tty, get_console_manager


def emoji(symbol: str, enable: bool) -> str:
    """Return ``symbol`` when emoji output is enabled, else an empty string."""

    return symbol if enable else ""


def fail(msg: str, *, use_emoji: bool, use_color: bool | None = None, stderr: bool = False) -> None:
    """Print an error status line.

    Used for failures that cannot be reported as a diagnostic, such as the
    diagnostic renderer itself being unable to write.

    Args:
        msg: Message text to display.
        use_emoji: Prefix the message with a cross mark.
        use_color: Explicit colour flag; ``None`` enables colour on terminals.
        stderr: Write to standard error instead of standard output.
    """

    color_enabled = detect_tty(stderr=stderr) if use_color is None else use_color
    console = get_console_manager().get(color=color_enabled, emoji=use_emoji, stderr=stderr)
    text = Text(f"{emoji('❌ ', use_emoji)}{msg}")
    if color_enabled:
        text.stylize("red")
    console.print(text)
