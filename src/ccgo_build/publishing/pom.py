# SPDX-License-Identifier: GPL-2.0-only
# Copyright (C) 2025 ccgo-build contributors
"""POM metadata for Maven publications."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from ccgo_build.config.project import ProjectDocument
from ccgo_build.versioning.git import GitRepository

logger = logging.getLogger(__name__)

LICENSE_NAME = "MIT License"
LICENSE_URL = "https://opensource.org/licenses/MIT"

UNKNOWN_DEVELOPER = "Unknown"


@dataclass(frozen=True)
class Dependency:
    """A 'group:artifact:version' POM dependency."""

    group_id: str
    artifact_id: str
    version: str

    @classmethod
    def parse(cls, coordinate: str) -> Dependency | None:
        """Parse a coordinate; returns None unless it has exactly three non-empty parts."""
        parts = [part.strip() for part in coordinate.split(":")]
        if len(parts) != 3 or not all(parts):
            return None
        return cls(*parts)


def parse_dependencies(coordinates: Iterable[str]) -> list[Dependency]:
    dependencies = []
    for coordinate in coordinates:
        dependency = Dependency.parse(coordinate)
        if dependency is None:
            logger.warning("Ignoring malformed dependency coordinate: %s", coordinate)
            continue
        dependencies.append(dependency)
    return dependencies


@dataclass(frozen=True)
class PomInfo:
    """
    Descriptive POM data.

    Attributes:
        name: Project name
        description: One-line description
        url: Project URL (git remote)
        developer_name: Developer id/name (git user.name)
        developer_email: Developer email (git user.email)
        dependencies: Runtime dependencies
    """

    name: str
    description: str
    url: str
    developer_name: str
    developer_email: str
    dependencies: list[Dependency] = field(default_factory=list)
    license_name: str = LICENSE_NAME
    license_url: str = LICENSE_URL

    @property
    def scm_connection(self) -> str:
        return f"scm:git:{self.url}"

    @classmethod
    def from_git(cls, git: GitRepository, document: ProjectDocument) -> PomInfo:
        """Fill in POM data from the git remote/user and CCGO.toml."""
        name = document.project_name
        return cls(
            name=name,
            description=f"The {name} SDK",
            url=git.remote_url(),
            developer_name=git.user_name() or UNKNOWN_DEVELOPER,
            developer_email=git.user_email(),
            dependencies=parse_dependencies(document.maven_dependencies),
        )

    def as_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "description": self.description,
            "url": self.url,
            "license": {"name": self.license_name, "url": self.license_url},
            "developer": {"id": self.developer_name, "name": self.developer_name, "email": self.developer_email},
            "scm": {
                "url": self.url,
                "connection": self.scm_connection,
                "developerConnection": self.scm_connection,
            },
            "dependencies": [
                f"{dependency.group_id}:{dependency.artifact_id}:{dependency.version}"
                for dependency in self.dependencies
            ],
        }
