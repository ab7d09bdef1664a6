# SPDX-License-Identifier: GPL-2.0-only
# Copyright (C) 2025 ccgo-build contributors
"""Utilities for running external tools (git, gpg) and capturing their output."""

from __future__ import annotations

import logging
import shlex
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 60.0

# Exit codes reported when the process could not run to completion
EXIT_NOT_FOUND = 127
EXIT_TIMEOUT = 124


@dataclass
class CommandResult:
    """Represents the outcome of an executed command."""

    command: Sequence[str]
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class CommandError(RuntimeError):
    """Raised when a command fails and the caller asked for ``check``."""

    def __init__(self, result: CommandResult):
        message = (
            f"Command failed with exit code {result.returncode}: {format_command(result.command)}\n"
            f"stderr: {result.stderr}"
        )
        super().__init__(message)
        self.result = result


def format_command(command: Sequence[str]) -> str:
    return " ".join(shlex.quote(part) for part in command)


class CommandRunner:
    """Abstract command runner interface."""

    def run(
        self,
        command: Sequence[str],
        *,
        cwd: Path | None = None,
        check: bool = False,
    ) -> CommandResult:
        raise NotImplementedError


class SubprocessCommandRunner(CommandRunner):
    """
    Command runner that executes commands via :mod:`subprocess`.

    A missing executable or a timeout is reported as a failed result rather
    than an exception, so callers can fall back to defaults.
    """

    def __init__(self, timeout: float = DEFAULT_TIMEOUT) -> None:
        self.timeout = timeout

    def run(
        self,
        command: Sequence[str],
        *,
        cwd: Path | None = None,
        check: bool = False,
    ) -> CommandResult:
        try:
            process = subprocess.run(
                list(command),
                cwd=str(cwd) if cwd else None,
                capture_output=True,
                text=True,
                check=False,
                timeout=self.timeout,
            )
            result = CommandResult(
                command=command,
                returncode=process.returncode,
                stdout=process.stdout,
                stderr=process.stderr,
            )
        except FileNotFoundError as err:
            result = CommandResult(command=command, returncode=EXIT_NOT_FOUND, stdout="", stderr=str(err))
        except subprocess.TimeoutExpired:
            result = CommandResult(
                command=command,
                returncode=EXIT_TIMEOUT,
                stdout="",
                stderr=f"timed out after {self.timeout}s",
            )

        if not result.ok:
            logger.debug("Command exited with %d: %s", result.returncode, format_command(command))
        if check and not result.ok:
            raise CommandError(result)
        return result


@dataclass
class RecordingCommandRunner(CommandRunner):
    """
    Command runner that records commands and replays canned results.

    ``responses`` maps a formatted command line to its stdout (exit code 0)
    or to a full CommandResult. Unknown commands fail with exit code 1.
    """

    responses: dict[str, str | CommandResult] = field(default_factory=dict)
    commands: list[list[str]] = field(default_factory=list)

    def run(
        self,
        command: Sequence[str],
        *,
        cwd: Path | None = None,
        check: bool = False,
    ) -> CommandResult:
        self.commands.append(list(command))
        response = self.responses.get(format_command(command))

        if isinstance(response, CommandResult):
            result = response
        elif response is None:
            result = CommandResult(command=command, returncode=1, stdout="", stderr="no recorded response")
        else:
            result = CommandResult(command=command, returncode=0, stdout=response, stderr="")

        if check and not result.ok:
            raise CommandError(result)
        return result
