# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring commands."""

from __future__ import annotations

import typer

from .explain import explain_command
from .lint import lint_command

app = typer.Typer(help="JavaScript lint orchestrator.", add_completion=False, no_args_is_help=True)
app.command("lint")(lint_command)
app.command("explain")(explain_command)


def main() -> None:
    """Run the ``jsqa`` command line interface."""

    app()


__all__ = ["app", "main"]
