# SPDX-License-Identifier: GPL-2.0-only
# Copyright (C) 2025 ccgo-build contributors
"""
ccgo-build - Build configuration, versioning and publishing for CCGO native libraries.

Maven repository configuration.

Publish targets:
- MavenLocal    local directory (MAVEN_LOCAL_PATH, default ~/.m2/repository)
- MavenCentral  Central Portal (central.sonatype.com), needs credentials
- MavenCustom<N> one per configured custom URL
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from ccgo_build.config.keys import ConfigKey
from ccgo_build.config.resolver import ConfigError, ConfigResolver

logger = logging.getLogger(__name__)

DEFAULT_CENTRAL_DOMAIN = "central.sonatype.com"

REPO_NAME_LOCAL = "MavenLocal"
REPO_NAME_CENTRAL = "MavenCentral"
REPO_NAME_CUSTOM = "MavenCustom"


@dataclass(frozen=True)
class MavenRepository:
    """
    A publish target repository.

    Attributes:
        name: Repository name (MavenLocal, MavenCustom0, ...)
        url: Repository URL or local path
        username: Username ('' when no credentials are attached)
        password: Password ('' when no credentials are attached)
    """

    name: str
    url: str
    username: str = ""
    password: str = ""

    @property
    def has_credentials(self) -> bool:
        return bool(self.username and self.password)

    def __repr__(self) -> str:
        return f"MavenRepository(name={self.name}, url={self.url}, credentials={self.has_credentials})"


def default_local_repository(home: str | Path | None = None) -> str:
    home = Path.home() if home is None else Path(home)
    return str(home / ".m2" / "repository")


def configure_repositories(resolver: ConfigResolver, home: str | Path | None = None) -> list[MavenRepository]:
    """
    Build the list of Maven repositories to publish to.

    The local repository always comes first. Custom repositories follow in
    configured order; URLs on the Central Portal domain are skipped because
    Maven Central is published separately. Credentials are attached only
    when both username and password are set.

    Args:
        resolver: Configuration resolver
        home: User home directory (defaults to Path.home())

    Returns:
        List of MavenRepository
    """
    local_path = resolver.local_maven_path(home) or default_local_repository(home)
    repositories = [MavenRepository(name=REPO_NAME_LOCAL, url=local_path)]
    logger.info("Added Local Maven repository: %s", local_path)

    for repo in resolver.custom_repositories():
        if DEFAULT_CENTRAL_DOMAIN in repo.url:
            logger.info("Skipping Maven Central URL in custom repos: %s", repo.url)
            continue

        name = f"{REPO_NAME_CUSTOM}{repo.index}"
        if repo.username and repo.password:
            repositories.append(MavenRepository(name, repo.url, repo.username, repo.password))
        else:
            repositories.append(MavenRepository(name, repo.url))
        logger.info("Added Custom Maven repository: %s -> %s", name, repo.url)

    return repositories


def custom_repositories(repositories: list[MavenRepository]) -> list[MavenRepository]:
    """Select the MavenCustom<N> entries."""
    return [repo for repo in repositories if repo.name.startswith(REPO_NAME_CUSTOM)]


def central_credentials(resolver: ConfigResolver) -> tuple[str, str]:
    """Return the (username, password) pair for the Central Portal."""
    username = resolver.resolve(ConfigKey.MAVEN_CENTRAL_USERNAME)
    password = resolver.resolve(ConfigKey.MAVEN_CENTRAL_PASSWORD)
    if username and password:
        logger.info("Maven Central credentials configured")
    else:
        logger.warning("Maven Central credentials not found")
    return username, password


def require_central_credentials(resolver: ConfigResolver) -> tuple[str, str]:
    """
    Return Central Portal credentials or fail with setup instructions.

    Raises:
        PublishConfigurationError: If username or password is missing
    """
    username, password = central_credentials(resolver)
    if not (username and password):
        raise PublishConfigurationError(
            "Maven Central credentials not configured.\n\n" + central_credentials_hint()
        )
    return username, password


def require_custom_repositories(repositories: list[MavenRepository]) -> list[MavenRepository]:
    """
    Return the custom repositories or fail with setup instructions.

    Raises:
        PublishConfigurationError: If no custom repository is configured
    """
    customs = custom_repositories(repositories)
    if not customs:
        raise PublishConfigurationError("No custom Maven repositories configured.\n\n" + configuration_hint())
    return customs


def central_credentials_hint() -> str:
    return """\
To publish to Maven Central, configure credentials in one of:

1. Environment variables:
   MAVEN_CENTRAL_USERNAME=your-username
   MAVEN_CENTRAL_PASSWORD=your-password

2. CCGO.toml [publish.maven] section:
   central_username = "your-username"
   central_password = "your-password"

3. gradle.properties:
   mavenCentralUsername=your-username
   mavenCentralPassword=your-password

Get your Central Portal token at https://central.sonatype.com/
(Login -> View Account -> Generate User Token)."""


def configuration_hint() -> str:
    """Setup instructions for local and custom Maven repositories."""
    return """\
Configure via environment variables:
  # Local Maven repository
  export MAVEN_LOCAL_PATH=/path/to/local/repo

  # Custom Maven repositories (comma-separated for multiple)
  export MAVEN_CUSTOM_URLS=https://maven.example.com/releases,https://maven2.example.com
  export MAVEN_CUSTOM_USERNAMES=user1,user2
  export MAVEN_CUSTOM_PASSWORDS=pass1,pass2

Or configure via CCGO.toml:
  [publish.maven]
  local_path = "~/.m2/repository"
  custom_urls = ["https://maven.example.com/releases"]
  custom_usernames = ["user1"]
  custom_passwords = ["pass1"]

Or configure via ~/.gradle/gradle.properties:
  mavenLocalPath=/path/to/local/repo
  mavenCustomUrls=https://maven.example.com/releases
  mavenCustomUsernames=user1
  mavenCustomPasswords=pass1"""


# Custom exceptions


class PublishConfigurationError(ConfigError):
    """
    Exception raised when a publish target is requested but not configured.

    Raised when:
    - Maven Central credentials are missing
    - No custom Maven repository is configured
    """

    pass
