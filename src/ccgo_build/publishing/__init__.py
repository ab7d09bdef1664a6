# SPDX-License-Identifier: GPL-2.0-only
# Copyright (C) 2025 ccgo-build contributors
"""
ccgo-build - Build configuration, versioning and publishing for CCGO native libraries.

This package works out Maven repositories, credentials and POM metadata.
"""

from __future__ import annotations

from ccgo_build.publishing.pom import Dependency, PomInfo, parse_dependencies
from ccgo_build.publishing.repositories import (
    DEFAULT_CENTRAL_DOMAIN,
    REPO_NAME_CENTRAL,
    REPO_NAME_CUSTOM,
    REPO_NAME_LOCAL,
    MavenRepository,
    PublishConfigurationError,
    central_credentials,
    configuration_hint,
    configure_repositories,
    custom_repositories,
    require_central_credentials,
    require_custom_repositories,
)

__all__ = [
    "DEFAULT_CENTRAL_DOMAIN",
    "REPO_NAME_CENTRAL",
    "REPO_NAME_CUSTOM",
    "REPO_NAME_LOCAL",
    "MavenRepository",
    "PublishConfigurationError",
    "central_credentials",
    "configuration_hint",
    "configure_repositories",
    "custom_repositories",
    "require_central_credentials",
    "require_custom_repositories",
    "Dependency",
    "PomInfo",
    "parse_dependencies",
]
