# SPDX-License-Identifier: GPL-2.0-only
# Copyright (C) 2025 ccgo-build contributors
"""
ccgo-build - Build configuration, versioning and publishing for CCGO native libraries.

Per-build context.

Everything that is computed once per configuration pass (project document,
resolver, git queries, version info, names) is created here and handed to
consumers explicitly.

Example:
    >>> context = BuildContext.create(Path("android"), release=False)
    >>> context.version.tag
    'v1.2.3-beta.4'
    >>> context.namer.aar_name
    'CCGONOW_ANDROID_SDK-1.2.3-beta.4.aar'
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from ccgo_build.config.audit import ResolutionAuditLogger
from ccgo_build.config.project import ProjectDocument
from ccgo_build.config.properties import load_properties
from ccgo_build.config.resolver import ConfigResolver
from ccgo_build.naming import ArtifactNamer
from ccgo_build.publishing.pom import PomInfo
from ccgo_build.publishing.repositories import MavenRepository, configure_repositories
from ccgo_build.signing.plan import SigningPlan, plan_signing
from ccgo_build.versioning.command_runner import CommandRunner, SubprocessCommandRunner
from ccgo_build.versioning.git import GitRepository
from ccgo_build.versioning.version import VersionDeriver, VersionInfo, resolve_release_flag

LOCAL_PROPERTIES_NAME = "local.properties"


@dataclass
class BuildContext:
    """
    Configuration values for one build invocation.

    Attributes:
        project_root: Gradle root project directory
        home: User home directory
        document: CCGO.toml view
        resolver: Layered configuration resolver
        git: Git queries for the project
        version: Version info for this build
        namer: Archive and artifact names
        runner: Command runner shared by git and gpg
    """

    project_root: Path
    home: Path
    document: ProjectDocument
    resolver: ConfigResolver
    git: GitRepository
    version: VersionInfo
    namer: ArtifactNamer
    runner: CommandRunner
    _local_properties: dict[str, str] | None = field(default=None, repr=False)

    @classmethod
    def create(
        cls,
        project_root: str | Path,
        release: bool | None = None,
        environ: Mapping[str, str] | None = None,
        home: str | Path | None = None,
        runner: CommandRunner | None = None,
        audit_logger: ResolutionAuditLogger | None = None,
    ) -> BuildContext:
        """
        Build the context for a project.

        Args:
            project_root: Gradle root project directory
            release: Explicit release flag (None to consult the environment)
            environ: Environment mapping (defaults to os.environ)
            home: User home directory (defaults to Path.home())
            runner: Command runner for git/gpg (defaults to subprocess)
            audit_logger: Optional resolution audit logger

        Returns:
            BuildContext
        """
        project_root = Path(project_root)
        home = Path.home() if home is None else Path(home)
        runner = runner or SubprocessCommandRunner()
        audit_logger = audit_logger or ResolutionAuditLogger()

        document = ProjectDocument(project_root, audit_logger=audit_logger)
        resolver = ConfigResolver.for_project(
            project_root,
            home=home,
            environ=environ,
            audit_logger=audit_logger,
            document=document,
        )
        git = GitRepository(runner=runner, cwd=project_root)
        is_release = resolve_release_flag(release, environ)
        version = VersionDeriver(git, document.version, is_release).derive()

        project_name = document.project_name or project_root.absolute().name
        namer = ArtifactNamer(
            project_name=project_name,
            version=version,
            channel_desc=document.channel_desc,
            android_stl=document.android_stl,
        )

        return cls(
            project_root=project_root,
            home=home,
            document=document,
            resolver=resolver,
            git=git,
            version=version,
            namer=namer,
            runner=runner,
        )

    @property
    def local_properties(self) -> dict[str, str]:
        """Legacy <project_root>/local.properties contents."""
        if self._local_properties is None:
            self._local_properties = load_properties(self.project_root / LOCAL_PROPERTIES_NAME)
        return self._local_properties

    def repositories(self) -> list[MavenRepository]:
        return configure_repositories(self.resolver, self.home)

    def signing_plan(self, required: bool | None = None) -> SigningPlan:
        return plan_signing(
            self.resolver,
            required=required,
            local_properties=self.local_properties,
            runner=self.runner,
        )

    def pom(self) -> PomInfo:
        return PomInfo.from_git(self.git, self.document)

    def target_directory(self, platform: str = "android") -> Path:
        return self.namer.target_directory(self.project_root, platform)
