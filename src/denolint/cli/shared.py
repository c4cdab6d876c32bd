# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared utilities for CLI commands (logging, errors, exit codes)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

import typer
from rich.console import Console
from rich.text import Text

from ..console import get_console_manager
from ..logging import fail as core_fail

EXIT_CLEAN: Final[int] = 0
EXIT_PROBLEMS: Final[int] = 1
EXIT_FAILURE: Final[int] = 2


class CLIError(RuntimeError):
    """Error raised when a CLI command fails and should exit with a status code."""

    def __init__(self, message: str, *, exit_code: int = EXIT_FAILURE) -> None:
        """Initialise the error with a message and exit code.

        Args:
            message: Human-readable error message shown to the user.
            exit_code: Exit status associated with the failure.
        """

        super().__init__(message)
        self.exit_code = exit_code


@dataclass(slots=True)
class CLILogger:
    """Adapter around project logging helpers respecting CLI emoji settings."""

    console: Console
    use_emoji: bool
    debug_enabled: bool = False

    def fail(self, message: str) -> None:
        """Log a failure message honouring emoji preferences."""

        core_fail(message, use_emoji=self.use_emoji)

    def echo(self, message: str) -> None:
        """Write ``message`` to stdout using Typer's echo helper."""

        typer.echo(message)

    def debug(self, message: str) -> None:
        """Emit a dimmed debug line when debug output is enabled."""

        if self.debug_enabled:
            text = Text("[debug] ", style="bold cyan")
            text.append(message, style="dim")
            self.console.print(text)


def build_cli_logger(*, emoji: bool, debug: bool = False) -> CLILogger:
    """Return a ``CLILogger`` configured for the provided emoji preference.

    Args:
        emoji: Whether log output may include emoji glyphs.
        debug: Whether debug lines should be printed.

    Returns:
        CLILogger: Logger bound to the shared standard-error console.
    """

    console = get_console_manager().get(color=True, emoji=emoji, stderr=True)
    return CLILogger(console=console, use_emoji=emoji, debug_enabled=debug)


__all__ = [
    "EXIT_CLEAN",
    "EXIT_FAILURE",
    "EXIT_PROBLEMS",
    "CLIError",
    "CLILogger",
    "build_cli_logger",
]
