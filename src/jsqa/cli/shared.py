# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared utilities for CLI commands."""

from __future__ import annotations

from jsqa.core.logging import fail


class CLIError(RuntimeError):
    """Error raised when a CLI command fails and should exit with a status code."""

    def __init__(self, message: str, *, exit_code: int = 1) -> None:
        """Initialise the error with a message and exit code.

        Args:
            message: Human-readable error message shown to the user.
            exit_code: Exit status associated with the failure.
        """

        super().__init__(message)
        self.exit_code = exit_code


def report_cli_error(error: CLIError) -> int:
    """Print ``error`` to standard error and return its exit status."""

    fail(str(error), use_emoji=False, stderr=True)
    return error.exit_code


__all__ = ["CLIError", "report_cli_error"]
