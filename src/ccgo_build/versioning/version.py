# SPDX-License-Identifier: GPL-2.0-only
# Copyright (C) 2025 ccgo-build contributors
"""
ccgo-build - Build configuration, versioning and publishing for CCGO native libraries.

Version, publish suffix and tag derivation.

A build is either a release (tag ``v<version>``) or a beta whose suffix
counts the commits since the most recent tag:

    release             -> suffix ''              tag v1.2.3
    no tags yet         -> suffix 'beta.0'        tag v1.2.3-beta.0
    4 commits, dirty    -> suffix 'beta.4-dirty'  tag v1.2.3-beta.4-dirty
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import asdict, dataclass

from ccgo_build.config.resolver import is_truthy
from ccgo_build.versioning.git import GitRepository

logger = logging.getLogger(__name__)

RELEASE_ENV_VAR = "CCGO_CI_BUILD_IS_RELEASE"

NO_TAG_SUFFIX = "beta.0"
DIRTY_MARKER = "-dirty"


def resolve_release_flag(
    explicit: bool | None = None,
    environ: Mapping[str, str] | None = None,
) -> bool:
    """
    Decide whether this is a release build.

    Priority (high to low):
    1. Explicit flag (e.g., --release / --no-release on the command line)
    2. Environment variable CCGO_CI_BUILD_IS_RELEASE
    3. Default: False (beta/debug build)
    """
    if explicit is not None:
        logger.info("isRelease from explicit flag: %s", explicit)
        return explicit

    environ = os.environ if environ is None else environ
    value = environ.get(RELEASE_ENV_VAR)
    if value is not None:
        logger.info("isRelease from environment variable (%s): %s", RELEASE_ENV_VAR, value)
        return is_truthy(value)

    logger.info("isRelease defaults to false")
    return False


def publish_suffix(release: bool, git: GitRepository) -> str:
    """
    Compute the pre-release qualifier for this build.

    Args:
        release: Whether this is a release build
        git: Repository to inspect

    Returns:
        '' for releases, 'beta.0' when no tag exists, otherwise
        'beta.<commits since tag>' with '-dirty' for uncommitted changes
    """
    if release:
        return ""

    latest_tag = git.latest_tag_commit()
    if not latest_tag:
        # No git or no tags
        return NO_TAG_SUFFIX

    count = git.commits_since(latest_tag)
    dirty = DIRTY_MARKER if git.is_dirty() else ""
    return f"beta.{count}{dirty}"


def current_tag(release: bool, version_name: str, suffix: str) -> str:
    """Return 'v<version>' for releases, else 'v<version>-<suffix>'."""
    if release:
        return f"v{version_name}"
    return f"v{version_name}-{suffix}"


@dataclass(frozen=True)
class VersionInfo:
    """
    Version data for one build, derived from git at configuration time.

    Attributes:
        version_name: Declared version (e.g., '1.2.3')
        version_code: Commit count of HEAD
        revision: Short commit hash
        branch: Current branch name
        build_timestamp: HEAD commit date (YYYY-MM-DD)
        publish_suffix: Pre-release qualifier ('' for releases)
        tag: Tag name for this build
        is_release: Whether this is a release build
    """

    version_name: str
    version_code: str
    revision: str
    branch: str
    build_timestamp: str
    publish_suffix: str
    tag: str
    is_release: bool = False

    @property
    def target_subdir(self) -> str:
        """Output subdirectory: 'release' for release builds, else 'debug'."""
        return "release" if self.is_release else "debug"

    def as_dict(self) -> dict[str, str | bool]:
        data: dict[str, str | bool] = asdict(self)
        data["target_subdir"] = self.target_subdir
        return data


class VersionDeriver:
    """
    Derives VersionInfo from a git repository.

    Usage:
        deriver = VersionDeriver(GitRepository(cwd=root), "1.2.3", release=False)
        info = deriver.derive()
        info.tag  # 'v1.2.3-beta.4'
    """

    def __init__(self, git: GitRepository, version_name: str, release: bool = False) -> None:
        self.git = git
        self.version_name = version_name
        self.release = release
        self._info: VersionInfo | None = None

    def derive(self) -> VersionInfo:
        """Compute the version info on first call and return the same value afterwards."""
        if self._info is None:
            suffix = publish_suffix(self.release, self.git)
            self._info = VersionInfo(
                version_name=self.version_name,
                version_code=self.git.commit_count(),
                revision=self.git.revision(),
                branch=self.git.branch(),
                build_timestamp=self.git.head_date(),
                publish_suffix=suffix,
                tag=current_tag(self.release, self.version_name, suffix),
                is_release=self.release,
            )
            logger.info("Derived version %s (tag %s)", self.version_name, self._info.tag)
        return self._info
