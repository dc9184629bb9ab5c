# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Implementation of the ``jsqa lint`` command."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Annotated, Final

import typer

from jsqa.config.loader import load_config
from jsqa.config.models import LintSettings, default_parallel_jobs
from jsqa.discovery.filesystem import FileWalker
from jsqa.orchestration.orchestrator import LintOrchestrator, OrchestratorDeps, RunReport
from jsqa.reporting.diagnostics import DiagnosticRenderer
from jsqa.rules.catalog import default_catalog
from jsqa.rules.engine import RuleEngine, TokenRuleEngine
from jsqa.runtime.console.manager import get_console_manager

from .shared import CLIError, report_cli_error

DEFAULT_PATHS: Final[tuple[str, ...]] = (".",)
UNSUPPORTED_INPUT_EXIT_CODE: Final[int] = 2


def build_orchestrator(settings: LintSettings, *, engine: RuleEngine | None = None) -> LintOrchestrator:
    """Wire the production collaborators of a lint run.

    Args:
        settings: Runtime options collected from the command line.
        engine: Optional rule engine replacing the token based engine.

    Returns:
        LintOrchestrator: Orchestrator ready to :meth:`~LintOrchestrator.run`.
    """

    catalog = default_catalog()
    root = settings.root
    manager = get_console_manager()
    deps = OrchestratorDeps(
        discovery=FileWalker(root=root),
        config_loader=lambda: load_config(root, catalog),
        engine=engine or TokenRuleEngine(),
        catalog=catalog,
        renderer=DiagnosticRenderer(manager.get(color=settings.color, emoji=False, stderr=True)),
        summary_console=manager.get(color=settings.color, emoji=False),
        jobs=settings.jobs,
    )
    return LintOrchestrator(deps)


def run_lint(paths: Sequence[str], settings: LintSettings) -> RunReport:
    """Lint ``paths`` with ``settings``.

    Raises:
        CLIError: If the requested input mode is not supported.
    """

    orchestrator = build_orchestrator(settings)
    try:
        return orchestrator.run(list(paths) or list(DEFAULT_PATHS))
    except NotImplementedError as exc:
        raise CLIError(str(exc), exit_code=UNSUPPORTED_INPUT_EXIT_CODE) from exc


def lint_command(
    paths: Annotated[
        list[str] | None,
        typer.Argument(help="Files or directories to lint. Defaults to the current directory."),
    ] = None,
    jobs: Annotated[
        int | None,
        typer.Option("--jobs", "-j", min=1, help="Number of files linted in parallel."),
    ] = None,
    root: Annotated[
        Path,
        typer.Option("--root", "-r", help="Project root holding jsqarc.toml."),
    ] = Path("."),
    no_color: Annotated[bool, typer.Option("--no-color", help="Disable ANSI colour output.")] = False,
) -> None:
    """Lint JavaScript files and report diagnostics."""

    settings = LintSettings(
        root=root.resolve(),
        jobs=jobs if jobs is not None else default_parallel_jobs(),
        color=not no_color,
    )
    try:
        report = run_lint(paths or DEFAULT_PATHS, settings)
    except CLIError as exc:
        raise typer.Exit(code=report_cli_error(exc)) from exc
    raise typer.Exit(code=report.exit_code)


__all__ = ["build_orchestrator", "lint_command", "run_lint"]
