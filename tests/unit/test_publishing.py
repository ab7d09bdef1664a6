# SPDX-License-Identifier: GPL-2.0-only
# Copyright (C) 2025 ccgo-build contributors
"""
ccgo-build - Build configuration, versioning and publishing for CCGO native libraries.

Tests for ccgo_build.publishing package.

Tests Maven repository configuration, credentials and POM data.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from ccgo_build.config.audit import ResolutionAuditLogger
from ccgo_build.config.project import ProjectDocument
from ccgo_build.config.resolver import ConfigError, ConfigResolver
from ccgo_build.config.sources import EnvVarSource
from ccgo_build.publishing.pom import Dependency, PomInfo, parse_dependencies
from ccgo_build.publishing.repositories import (
    MavenRepository,
    PublishConfigurationError,
    central_credentials,
    configure_repositories,
    custom_repositories,
    require_central_credentials,
    require_custom_repositories,
)
from ccgo_build.versioning.command_runner import RecordingCommandRunner
from ccgo_build.versioning.git import GitRepository


def make_resolver(tmp_path: Path, environ: dict[str, str] | None = None) -> ConfigResolver:
    return ConfigResolver(
        [EnvVarSource(environ or {})],
        audit_logger=ResolutionAuditLogger(audit_file=tmp_path / "audit.log"),
    )


class TestConfigureRepositories:
    """Tests for configure_repositories()."""

    def test_default_local_repository(self, tmp_path: Path) -> None:
        """Test ~/.m2/repository is used when nothing is configured."""
        repositories = configure_repositories(make_resolver(tmp_path), home=tmp_path)

        assert repositories == [MavenRepository("MavenLocal", str(tmp_path / ".m2" / "repository"))]

    def test_local_path_expands_home(self, tmp_path: Path) -> None:
        """Test a '~' prefix in MAVEN_LOCAL_PATH is expanded."""
        resolver = make_resolver(tmp_path, {"MAVEN_LOCAL_PATH": "~/maven-repo"})

        repositories = configure_repositories(resolver, home=tmp_path)

        assert repositories[0].url == f"{tmp_path}/maven-repo"

    def test_custom_repositories(self, tmp_path: Path) -> None:
        """Test custom repositories keep their index and skip Maven Central."""
        resolver = make_resolver(
            tmp_path,
            {
                "MAVEN_CUSTOM_URLS": "https://a.example/maven, https://central.sonatype.com/api/v1, https://c.example/maven",
                "MAVEN_CUSTOM_USERNAMES": "ua,,uc",
                "MAVEN_CUSTOM_PASSWORDS": "pa,pb",
            },
        )

        repositories = configure_repositories(resolver, home=tmp_path)

        assert [repo.name for repo in repositories] == ["MavenLocal", "MavenCustom0", "MavenCustom2"]
        assert repositories[1] == MavenRepository("MavenCustom0", "https://a.example/maven", "ua", "pa")
        assert repositories[2] == MavenRepository("MavenCustom2", "https://c.example/maven")
        assert repositories[2].has_credentials is False

    def test_custom_repositories_from_document(self, tmp_path: Path) -> None:
        """Test [[publish.maven.custom]] tables are used when no URL list is set."""
        (tmp_path / "CCGO.toml").write_text(
            '[[publish.maven.custom]]\nurl = "https://nexus.example/releases"\nusername = "u"\npassword = "p"\n'
        )
        resolver = ConfigResolver.for_project(
            tmp_path,
            home=tmp_path / "home",
            environ={},
            audit_logger=ResolutionAuditLogger(audit_file=tmp_path / "audit.log"),
        )

        repositories = configure_repositories(resolver, home=tmp_path / "home")

        assert repositories[1] == MavenRepository("MavenCustom0", "https://nexus.example/releases", "u", "p")

    def test_custom_repositories_filter(self) -> None:
        """Test custom_repositories() selects MavenCustom entries."""
        repositories = [
            MavenRepository("MavenLocal", "/repo"),
            MavenRepository("MavenCustom0", "https://a.example"),
        ]

        assert custom_repositories(repositories) == [MavenRepository("MavenCustom0", "https://a.example")]

    def test_repr_hides_credentials(self) -> None:
        """Test repr() shows whether credentials exist but not their values."""
        text = repr(MavenRepository("MavenCustom0", "https://a.example", "user", "hunter2"))

        assert "hunter2" not in text
        assert "credentials=True" in text


class TestCredentials:
    """Tests for Maven Central credentials."""

    def test_central_credentials(self, tmp_path: Path) -> None:
        """Test both credentials are resolved."""
        resolver = make_resolver(tmp_path, {"MAVEN_CENTRAL_USERNAME": "alice", "MAVEN_CENTRAL_PASSWORD": "token"})

        assert central_credentials(resolver) == ("alice", "token")
        assert require_central_credentials(resolver) == ("alice", "token")

    def test_missing_credentials_warns(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        """Test missing credentials are logged, not raised."""
        resolver = make_resolver(tmp_path, {"MAVEN_CENTRAL_USERNAME": "alice"})

        with caplog.at_level(logging.WARNING, logger="ccgo_build.publishing.repositories"):
            assert central_credentials(resolver) == ("alice", "")

        assert "Maven Central credentials not found" in caplog.text

    def test_require_central_credentials(self, tmp_path: Path) -> None:
        """Test the error carries setup instructions."""
        with pytest.raises(PublishConfigurationError) as excinfo:
            require_central_credentials(make_resolver(tmp_path))

        message = str(excinfo.value)
        assert "Maven Central credentials not configured" in message
        assert "MAVEN_CENTRAL_USERNAME" in message
        assert "mavenCentralPassword" in message
        assert isinstance(excinfo.value, ConfigError)

    def test_require_custom_repositories(self) -> None:
        """Test requesting custom publishing without repositories fails."""
        with pytest.raises(PublishConfigurationError, match="No custom Maven repositories configured") as excinfo:
            require_custom_repositories([MavenRepository("MavenLocal", "/repo")])

        assert "MAVEN_CUSTOM_URLS" in str(excinfo.value)


class TestPom:
    """Tests for POM metadata."""

    @pytest.mark.parametrize(
        ("coordinate", "expected"),
        [
            ("com.example:base:1.0.0", Dependency("com.example", "base", "1.0.0")),
            (" com.example : base : 1.0.0 ", Dependency("com.example", "base", "1.0.0")),
            ("com.example:base", None),
            ("com.example::1.0.0", None),
            ("a:b:c:d", None),
        ],
    )
    def test_dependency_parse(self, coordinate: str, expected: Dependency | None) -> None:
        """Test coordinates need exactly three non-empty parts."""
        assert Dependency.parse(coordinate) == expected

    def test_parse_dependencies_skips_malformed(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test malformed coordinates are skipped with a warning."""
        with caplog.at_level(logging.WARNING, logger="ccgo_build.publishing.pom"):
            dependencies = parse_dependencies(["com.example:base:1.0.0", "broken:"])

        assert dependencies == [Dependency("com.example", "base", "1.0.0")]
        assert "broken:" in caplog.text

    def test_from_git(self, tmp_path: Path) -> None:
        """Test POM data from git and CCGO.toml."""
        (tmp_path / "CCGO.toml").write_text(
            '[project]\nname = "ccgonow"\n[publish.maven]\ndependencies = ["com.example:base:1.0.0"]\n'
        )
        runner = RecordingCommandRunner(
            {
                "git config --get remote.origin.url": "https://github.com/example/ccgonow.git\n",
                "git config --get user.name": "Dev Eloper\n",
                "git config --get user.email": "dev@example.com\n",
            }
        )

        pom = PomInfo.from_git(GitRepository(runner=runner), ProjectDocument(tmp_path))

        assert pom.name == "ccgonow"
        assert pom.description == "The ccgonow SDK"
        assert pom.url == "https://github.com/example/ccgonow.git"
        assert pom.developer_name == "Dev Eloper"
        assert pom.developer_email == "dev@example.com"
        assert pom.scm_connection == "scm:git:https://github.com/example/ccgonow.git"
        assert pom.as_dict()["dependencies"] == ["com.example:base:1.0.0"]

    def test_from_git_without_git(self, tmp_path: Path) -> None:
        """Test the developer falls back to 'Unknown'."""
        pom = PomInfo.from_git(GitRepository(runner=RecordingCommandRunner()), ProjectDocument(tmp_path))

        assert pom.developer_name == "Unknown"
        assert pom.url == ""
        assert pom.dependencies == []
