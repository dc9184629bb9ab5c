# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""High level orchestration for linting a set of JavaScript files."""

from __future__ import annotations

import logging
import re
from collections import Counter
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Final, Protocol

from pydantic import BaseModel, ConfigDict, Field
from rich.console import Console

from jsqa.config.models import ConfigError, LintConfig, RulesConfig, default_parallel_jobs
from jsqa.core.models import Diagnostic, LintResult
from jsqa.core.severity import Outcome, RuleLevel
from jsqa.diagnostics.remap import remap_diagnostics_to_level
from jsqa.discovery.filesystem import DiscoveryError, FileRegistry
from jsqa.reporting.summary import print_outcome_summary
from jsqa.rules.catalog import RuleCatalog, RuleSet
from jsqa.rules.engine import FatalLintError, RuleEngine
from jsqa.runtime.console.manager import get_console_manager

LOGGER = logging.getLogger(__name__)

CONFIG_RULE: Final[str] = "config"
STDIN_ARGUMENT: Final[str] = "-"

_LOCATION_RE: Final[re.Pattern[str]] = re.compile(r"\s*\(?at line \d+")
_SUGGESTION_RE: Final[re.Pattern[str]] = re.compile(r"\. did you mean '(.*?)'\?")

Discovery = Callable[[Sequence[str]], FileRegistry]
ConfigLoader = Callable[[], LintConfig | None]


class SupportsRender(Protocol):
    """Renderer contract used by the orchestrator."""

    def render(self, diagnostic: Diagnostic, registry: FileRegistry) -> bool:
        """Render ``diagnostic``; return ``False`` when the write failed."""
        ...


class RunReport(BaseModel):
    """Aggregate result of a lint run, exposed to the CLI layer."""

    model_config = ConfigDict(validate_assignment=True)

    outcome: Outcome = Outcome.SUCCESS
    failures: int = 0
    warnings: int = 0
    successes: int = 0
    results: list[LintResult] = Field(default_factory=list)
    fatal: list[Diagnostic] = Field(default_factory=list)
    aborted: bool = False

    @property
    def exit_code(self) -> int:
        """Return the process exit status for the run.

        Returns:
            int: ``1`` when the run failed or aborted, ``0`` otherwise.
        """

        return 1 if self.aborted or self.outcome is Outcome.FAILURE else 0


@dataclass(frozen=True)
class OrchestratorDeps:
    """Collaborators required to construct a :class:`LintOrchestrator`."""

    discovery: Discovery
    config_loader: ConfigLoader
    engine: RuleEngine
    catalog: RuleCatalog
    renderer: SupportsRender
    summary_console: Console | None = None
    jobs: int = field(default_factory=default_parallel_jobs)


def config_error_diagnostic(error: ConfigError) -> Diagnostic:
    """Convert a configuration error into a user-facing diagnostic.

    The location suffix reported by the parser is dropped and a
    ``did you mean`` fragment is moved into a separate help note. The
    structured :attr:`ConfigError.suggestion` wins over the parsed fragment,
    and messages without a location marker are kept whole.

    Args:
        error: Error raised while loading the configuration.

    Returns:
        Diagnostic: Error diagnostic attributed to the ``config`` rule.
    """

    raw = str(error)
    location = _LOCATION_RE.search(raw)
    message = raw[: location.start()] if location else raw
    suggestion = error.suggestion
    found = _SUGGESTION_RE.search(message)
    if found is not None:
        suggestion = suggestion or found.group(1)
        message = message[: found.start()] + message[found.end() :]
    diagnostic = Diagnostic.error(0, CONFIG_RULE, message.strip())
    if suggestion:
        diagnostic = diagnostic.with_note(f"help: did you mean '{suggestion}'?")
    return diagnostic


class LintOrchestrator:
    """Coordinates discovery, configuration, parallel linting and reporting."""

    def __init__(self, deps: OrchestratorDeps) -> None:
        """Create an orchestrator with the supplied collaborators.

        Args:
            deps: Container bundling orchestrator dependencies.
        """

        self._deps = deps
        self._jobs = max(1, deps.jobs)
        self._summary_console = deps.summary_console or get_console_manager().get(color=True, emoji=False)

    def _emit(self, diagnostic: Diagnostic, registry: FileRegistry) -> None:
        self._deps.renderer.render(diagnostic, registry)

    def run(self, paths: Sequence[str]) -> RunReport:
        """Lint every file matched by ``paths``.

        Args:
            paths: File or directory arguments.

        Returns:
            RunReport: Counts, merged outcome, and surviving lint results.

        Raises:
            NotImplementedError: If ``paths`` requests standard-input linting.
        """

        if not paths or paths[0] == STDIN_ARGUMENT:
            raise NotImplementedError("linting from standard input is not supported yet")

        with ThreadPoolExecutor(max_workers=2) as executor:
            config_future = executor.submit(self._deps.config_loader)
            files_future = executor.submit(self._deps.discovery, paths)
            config_error = config_future.exception()
            discovery_error = files_future.exception()

        empty = FileRegistry.empty()
        if isinstance(config_error, ConfigError):
            self._emit(config_error_diagnostic(config_error), empty)
            return RunReport(aborted=True)
        config = config_future.result()
        if isinstance(discovery_error, DiscoveryError):
            self._emit(Diagnostic.error(0, CONFIG_RULE, str(discovery_error)), empty)
            return RunReport(aborted=True)
        registry = files_future.result()

        rules_config = config.rules if config is not None else None
        rule_set = rules_config.store(self._deps.catalog) if rules_config is not None else self._deps.catalog.builtins()

        if not registry:
            self._emit(Diagnostic.error(0, CONFIG_RULE, "No matching files found"), empty)
            return RunReport(aborted=True)

        results, fatal = self._lint_files(registry, rule_set)
        if rules_config is not None:
            self._remap(results, rules_config)

        counts = Counter(result.outcome for result in results)
        report = RunReport(
            outcome=Outcome.merge(counts),
            failures=counts[Outcome.FAILURE],
            warnings=counts[Outcome.WARNING],
            successes=counts[Outcome.SUCCESS],
            results=results,
            fatal=fatal,
        )

        for result in results:
            for diagnostic in result.diagnostics():
                self._emit(diagnostic, registry)

        print_outcome_summary(
            self._summary_console,
            failures=report.failures,
            warnings=report.warnings,
            successes=report.successes,
            outcome=report.outcome,
        )
        return report

    def _lint_files(self, registry: FileRegistry, rule_set: RuleSet) -> tuple[list[LintResult], list[Diagnostic]]:
        """Run the rule engine over every file in parallel.

        Fatal per-file errors are rendered as soon as they surface and the file
        is left out of the returned results.
        """

        LOGGER.debug(
            "linting %d file(s) with %d rule(s) on %d worker(s)",
            len(registry),
            len(rule_set),
            self._jobs,
        )
        engine = self._deps.engine
        results: list[LintResult] = []
        fatal: list[Diagnostic] = []
        with ThreadPoolExecutor(max_workers=self._jobs) as executor:
            future_map = {
                executor.submit(
                    engine.lint_file,
                    file.file_id,
                    file.source,
                    file.is_module,
                    rule_set,
                    False,
                ): file
                for file in registry.files
            }
            for future in as_completed(future_map):
                try:
                    results.append(future.result())
                except FatalLintError as exc:
                    LOGGER.debug("fatal lint error in %s", future_map[future].name)
                    fatal.append(exc.diagnostic)
                    self._emit(exc.diagnostic, registry)
        results.sort(key=lambda result: result.file_id)
        return results, fatal

    @staticmethod
    def _remap(results: Sequence[LintResult], rules_config: RulesConfig) -> None:
        for result in results:
            for rule_name, diagnostics in result.rule_diagnostics.items():
                level = rules_config.rule_level_by_name(rule_name)
                if level is None or level is RuleLevel.OFF:
                    continue
                remap_diagnostics_to_level(diagnostics, level)


__all__ = [
    "CONFIG_RULE",
    "ConfigLoader",
    "Discovery",
    "LintOrchestrator",
    "OrchestratorDeps",
    "RunReport",
    "SupportsRender",
    "config_error_diagnostic",
]
