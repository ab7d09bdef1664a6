# SPDX-License-Identifier: GPL-2.0-only
# Copyright (C) 2025 ccgo-build contributors
"""
ccgo-build - Build configuration, versioning and publishing for CCGO native libraries.

This package derives revision, version code, publish suffix and tag from git.
"""

from __future__ import annotations

from ccgo_build.versioning.command_runner import (
    CommandError,
    CommandResult,
    CommandRunner,
    RecordingCommandRunner,
    SubprocessCommandRunner,
)
from ccgo_build.versioning.git import GitRepository
from ccgo_build.versioning.version import (
    VersionDeriver,
    VersionInfo,
    current_tag,
    publish_suffix,
    resolve_release_flag,
)

__all__ = [
    "CommandError",
    "CommandResult",
    "CommandRunner",
    "RecordingCommandRunner",
    "SubprocessCommandRunner",
    "GitRepository",
    "VersionDeriver",
    "VersionInfo",
    "current_tag",
    "publish_suffix",
    "resolve_release_flag",
]
