# SPDX-License-Identifier: GPL-2.0-only
# Copyright (C) 2025 ccgo-build contributors
"""
ccgo-build - Build configuration, versioning and publishing for CCGO native libraries.

Tests for ccgo_build.config.sources module.
"""

from __future__ import annotations

from pathlib import Path

from ccgo_build.config.keys import ConfigKey
from ccgo_build.config.project import ProjectDocument
from ccgo_build.config.sources import (
    ConfigValue,
    EnvVarSource,
    PropertiesFileSource,
    StructuredDocumentSource,
)


class TestConfigValue:
    """Tests for ConfigValue."""

    def test_equality(self) -> None:
        """Test values compare by value, source and key."""
        first = ConfigValue("a", "env:MAVEN_LOCAL_PATH", ConfigKey.MAVEN_LOCAL_PATH)
        second = ConfigValue("a", "env:MAVEN_LOCAL_PATH", ConfigKey.MAVEN_LOCAL_PATH)
        other = ConfigValue("a", "toml:publish.maven.local_path", ConfigKey.MAVEN_LOCAL_PATH)

        assert first == second
        assert first != other

    def test_repr_masks_sensitive_values(self) -> None:
        """Test credentials never appear in repr()."""
        value = ConfigValue("hunter2", "env:MAVEN_CENTRAL_PASSWORD", ConfigKey.MAVEN_CENTRAL_PASSWORD)

        assert "hunter2" not in repr(value)
        assert "****" in repr(value)

    def test_repr_shows_plain_values(self) -> None:
        """Test non-sensitive values are shown."""
        value = ConfigValue("alice", "env:MAVEN_CENTRAL_USERNAME", ConfigKey.MAVEN_CENTRAL_USERNAME)

        assert "'alice'" in repr(value)


class TestEnvVarSource:
    """Tests for EnvVarSource."""

    def test_lookup(self) -> None:
        """Test the env var is read verbatim."""
        source = EnvVarSource({"SIGNING_IN_MEMORY_KEY": "key-material"})

        result = source.lookup(ConfigKey.SIGNING_KEY)

        assert result == ConfigValue("key-material", "env:SIGNING_IN_MEMORY_KEY", ConfigKey.SIGNING_KEY)

    def test_blank_is_miss(self) -> None:
        """Test empty and whitespace-only values are misses."""
        source = EnvVarSource({"MAVEN_LOCAL_PATH": "", "SIGN_ENABLED": "   "})

        assert source.lookup(ConfigKey.MAVEN_LOCAL_PATH) is None
        assert source.lookup(ConfigKey.SIGN_ENABLED) is None

    def test_defaults_to_process_environment(self, monkeypatch) -> None:
        """Test os.environ is used when no mapping is given."""
        monkeypatch.setenv("MAVEN_LOCAL_PATH", "/srv/maven")

        result = EnvVarSource().lookup(ConfigKey.MAVEN_LOCAL_PATH)

        assert result is not None
        assert result.value == "/srv/maven"


class TestStructuredDocumentSource:
    """Tests for StructuredDocumentSource."""

    def test_lookup(self, tmp_path: Path) -> None:
        """Test values are read by dotted path and rendered as text."""
        (tmp_path / "CCGO.toml").write_text('[publish]\nsign_enabled = false\n')
        source = StructuredDocumentSource(ProjectDocument(tmp_path))

        result = source.lookup(ConfigKey.SIGN_ENABLED)

        assert result == ConfigValue("false", "toml:publish.sign_enabled", ConfigKey.SIGN_ENABLED)

    def test_missing_document(self, tmp_path: Path) -> None:
        """Test a missing document yields misses."""
        source = StructuredDocumentSource(ProjectDocument(tmp_path))

        assert source.lookup(ConfigKey.SIGN_ENABLED) is None

    def test_table_is_miss(self, tmp_path: Path) -> None:
        """Test a table at the key's path is a miss."""
        (tmp_path / "CCGO.toml").write_text("[publish.signing_key]\nvalue = 1\n")
        source = StructuredDocumentSource(ProjectDocument(tmp_path))

        assert source.lookup(ConfigKey.SIGNING_KEY) is None


class TestPropertiesFileSource:
    """Tests for PropertiesFileSource."""

    def test_lookup(self, tmp_path: Path) -> None:
        """Test the properties key is used and labelled."""
        path = tmp_path / "gradle.properties"
        path.write_text("mavenCentralUsername=bob\n")
        source = PropertiesFileSource(path, label="user-properties")

        result = source.lookup(ConfigKey.MAVEN_CENTRAL_USERNAME)

        assert result == ConfigValue(
            "bob", "user-properties:mavenCentralUsername", ConfigKey.MAVEN_CENTRAL_USERNAME
        )

    def test_file_read_once(self, tmp_path: Path) -> None:
        """Test the file is cached after the first lookup."""
        path = tmp_path / "gradle.properties"
        path.write_text("signEnabled=true\n")
        source = PropertiesFileSource(path)
        assert source.lookup(ConfigKey.SIGN_ENABLED) is not None

        path.write_text("")

        assert source.lookup(ConfigKey.SIGN_ENABLED) is not None

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test a missing file yields misses."""
        source = PropertiesFileSource(tmp_path / "gradle.properties")

        assert source.lookup(ConfigKey.SIGN_ENABLED) is None
        assert source.properties == {}
