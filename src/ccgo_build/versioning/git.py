# SPDX-License-Identifier: GPL-2.0-only
# Copyright (C) 2025 ccgo-build contributors
"""
Best-effort git introspection for version derivation.

Every accessor degrades to a documented default when git is missing, the
directory is not a repository, or the command prints nothing.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from ccgo_build.versioning.command_runner import CommandRunner, SubprocessCommandRunner

logger = logging.getLogger(__name__)

UNKNOWN = "unknown"
DATE_FORMAT = "%Y-%m-%d"


class GitRepository:
    """
    Read-only queries against the git repository containing ``cwd``.

    Example:
        >>> git = GitRepository(cwd=Path("."))
        >>> git.revision()
        '3f2a9c1'
        >>> git.commit_count()
        '128'
    """

    def __init__(
        self,
        runner: CommandRunner | None = None,
        cwd: str | Path | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        """
        Initialize git queries.

        Args:
            runner: Command runner (defaults to SubprocessCommandRunner)
            cwd: Working directory for git commands
            clock: Returns the current time, used for date fallbacks
        """
        self.runner = runner or SubprocessCommandRunner()
        self.cwd = Path(cwd) if cwd is not None else None
        self.clock = clock

    def output(self, *args: str) -> str:
        """Run ``git <args>`` and return stripped stdout, or '' on failure."""
        result = self.runner.run(["git", *args], cwd=self.cwd)
        if not result.ok:
            return ""
        return result.stdout.strip()

    def branch(self) -> str:
        return self.output("rev-parse", "--abbrev-ref", "HEAD") or UNKNOWN

    def commit_count(self) -> str:
        """Number of commits reachable from HEAD, used as version code."""
        return self.output("rev-list", "HEAD", "--count") or "0"

    def revision(self) -> str:
        """Short hash of HEAD."""
        return self.output("rev-parse", "--short", "HEAD") or UNKNOWN

    def head_date(self) -> str:
        """Commit date of HEAD as YYYY-MM-DD (local time), else today."""
        timestamp = self.output("log", "-n1", "--format=%at")
        if timestamp:
            try:
                return datetime.fromtimestamp(int(timestamp)).strftime(DATE_FORMAT)
            except (ValueError, OverflowError, OSError):
                logger.debug("Unparseable HEAD timestamp: %r", timestamp)
        return self.clock().strftime(DATE_FORMAT)

    def latest_tag_commit(self) -> str:
        """Commit of the most recently created tag, or '' if there are no tags."""
        return self.output("rev-list", "--tags", "--no-walk", "--max-count=1")

    def commits_since(self, ref: str) -> str:
        return self.output("rev-list", f"{ref}..HEAD", "--count") or "0"

    def is_dirty(self) -> bool:
        """True if the work tree has uncommitted changes."""
        return bool(self.output("diff", "--stat"))

    def remote_url(self) -> str:
        return self.output("config", "--get", "remote.origin.url")

    def user_name(self) -> str:
        return self.output("config", "--get", "user.name")

    def user_email(self) -> str:
        return self.output("config", "--get", "user.email")
