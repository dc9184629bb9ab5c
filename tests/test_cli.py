# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI tests for the ``lint`` and ``explain`` commands."""

from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from jsqa.cli.app import app
from jsqa.explain.fetch import FetchContent, FetchFailure, FetchResult


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def _project(tmp_path: Path, source: str, config: str | None = None) -> Path:
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "app.js").write_text(source, encoding="utf-8")
    if config is not None:
        (tmp_path / "jsqarc.toml").write_text(config, encoding="utf-8")
    return tmp_path


def test_lint_clean_project_exits_zero(runner: CliRunner, tmp_path: Path) -> None:
    root = _project(tmp_path, "const a = [1, 2];\n")

    result = runner.invoke(app, ["lint", "--root", str(root), "--no-color", "--jobs", "2"])

    assert result.exit_code == 0, result.output
    assert "Outcome: 0 fail, 0 warn, 1 success" in result.output


def test_lint_reports_errors_and_fails(runner: CliRunner, tmp_path: Path) -> None:
    root = _project(tmp_path, "function f() {\n  debugger;\n}\n")

    result = runner.invoke(app, ["lint", "--root", str(root), "--no-color", "src"])

    assert result.exit_code == 1
    assert "error[no-debugger]" in result.output
    assert "src/app.js:2:3" in result.output
    assert "Outcome: 1 fail, 0 warn, 0 success" in result.output
    assert "jsqa explain <rules>" in result.output


def test_lint_honours_warning_level(runner: CliRunner, tmp_path: Path) -> None:
    root = _project(tmp_path, "debugger;\n", config='[rules]\nwarnings = ["no-debugger"]\n')

    result = runner.invoke(app, ["lint", "--root", str(root), "--no-color"])

    assert result.exit_code == 0, result.output
    assert "warning[no-debugger]" in result.output
    assert "Outcome: 0 fail, 1 warn, 0 success" in result.output


def test_lint_reports_config_errors(runner: CliRunner, tmp_path: Path) -> None:
    root = _project(tmp_path, "debugger;\n", config='[rules]\nwarnings = ["no-debuger"]\n')

    result = runner.invoke(app, ["lint", "--root", str(root), "--no-color"])

    assert result.exit_code == 1
    assert "error[config]: unknown rule `no-debuger` in `rules.warnings`" in result.output
    assert "help: did you mean 'no-debugger'?" in result.output
    assert "Outcome:" not in result.output


def test_lint_reports_undecodable_config(runner: CliRunner, tmp_path: Path) -> None:
    root = _project(tmp_path, "let a = 1;\n")
    (root / "jsqarc.toml").write_bytes(b'[rules]\nerrors = ["\xff\xfe"]\n')

    result = runner.invoke(app, ["lint", "--root", str(root), "--no-color", "src/app.js"])

    assert result.exit_code == 1
    assert not isinstance(result.exception, UnicodeDecodeError)
    assert "error[config]: failed to read jsqarc.toml" in result.output
    assert "Outcome:" not in result.output


def test_lint_missing_path(runner: CliRunner, tmp_path: Path) -> None:
    result = runner.invoke(app, ["lint", "--root", str(tmp_path), "--no-color", "missing"])

    assert result.exit_code == 1
    assert "path `missing` does not exist" in result.output


def test_lint_from_stdin_is_rejected(runner: CliRunner, tmp_path: Path) -> None:
    result = runner.invoke(app, ["lint", "--root", str(tmp_path), "-"])

    assert result.exit_code == 2
    assert "standard input" in result.output


def test_explain_prints_docs_and_reports_unknown_rules(
    runner: CliRunner,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    def transport(url: str) -> FetchResult:
        if url.endswith("/errors/no-empty.md"):
            return FetchContent(data=b"# no-empty\n\nDisallow empty block statements.\n")
        return FetchFailure(reason="unreachable")

    monkeypatch.setattr("jsqa.explain.fetch.fetch_once", transport)

    result = runner.invoke(app, ["explain", "no-empty", "totally-bogus-rule"])

    assert result.exit_code == 0, result.output
    assert "----------" in result.output
    assert "Disallow empty block statements." in result.output
    assert "Failed to fetch rule docs for `totally-bogus-rule`" in result.output


def test_explain_fails_when_nothing_was_explained(runner: CliRunner, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("jsqa.explain.fetch.fetch_once", lambda url: FetchFailure(reason="offline"))

    result = runner.invoke(app, ["explain", "no-empty"])

    assert result.exit_code == 1
    assert "Failed to fetch rule docs for `no-empty`: offline" in result.output
