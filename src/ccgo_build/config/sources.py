# SPDX-License-Identifier: GPL-2.0-only
# Copyright (C) 2025 ccgo-build contributors
"""
ccgo-build - Build configuration, versioning and publishing for CCGO native libraries.

Configuration sources - backends for looking up settings.

Supports multiple sources with fallback chain:
1. Environment variables (for CI/CD override)
2. CCGO.toml (project root or nearest ancestor)
3. Project-level gradle.properties
4. User-level ~/.gradle/gradle.properties
"""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from collections.abc import Mapping
from pathlib import Path

from ccgo_build.config.keys import ConfigKey
from ccgo_build.config.project import ProjectDocument
from ccgo_build.config.properties import load_properties


class ConfigValue:
    """
    A resolved configuration value together with where it came from.

    Sources only ever return non-blank values; a blank hit is a miss.
    """

    def __init__(
        self,
        value: str,
        source: str,
        key: ConfigKey,
    ) -> None:
        """
        Initialize config value.

        Args:
            value: The resolved string
            source: Where it came from (e.g., "env:SIGN_ENABLED", "toml:publish.sign_enabled")
            key: The key that was resolved
        """
        self.value = value
        self.source = source
        self.key = key

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConfigValue):
            return NotImplemented
        return (self.value, self.source, self.key) == (other.value, other.source, other.key)

    def __repr__(self) -> str:
        shown = "****" if self.key.sensitive else repr(self.value)
        return f"ConfigValue(key={self.key.name}, source={self.source}, value={shown})"


def _non_blank(value: str | None) -> bool:
    return value is not None and bool(value.strip())


class ConfigSource(ABC):
    """Abstract base for configuration sources."""

    #: Short label used in source descriptions
    label: str = "source"

    @abstractmethod
    def lookup(self, key: ConfigKey) -> ConfigValue | None:
        """Return the value for ``key`` or None if this source has no non-blank value."""
        pass


class EnvVarSource(ConfigSource):
    """
    Look up settings in environment variables.

    Uses ``key.env_var`` verbatim, e.g. SIGNING_IN_MEMORY_KEY.
    """

    label = "env"

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        """
        Initialize environment source.

        Args:
            environ: Mapping to read from (defaults to os.environ)
        """
        self.environ = os.environ if environ is None else environ

    def lookup(self, key: ConfigKey) -> ConfigValue | None:
        value = self.environ.get(key.env_var)
        if not _non_blank(value):
            return None
        return ConfigValue(value, f"{self.label}:{key.env_var}", key)


class StructuredDocumentSource(ConfigSource):
    """Look up settings in CCGO.toml using ``key.structured_path``."""

    label = "toml"

    def __init__(self, document: ProjectDocument) -> None:
        """
        Initialize document source.

        Args:
            document: Project document (parsed lazily, cached by the document)
        """
        self.document = document

    def lookup(self, key: ConfigKey) -> ConfigValue | None:
        value = self.document.get_string(key.structured_path)
        if not _non_blank(value):
            return None
        return ConfigValue(value, f"{self.label}:{key.structured_path}", key)


class PropertiesFileSource(ConfigSource):
    """
    Look up settings in a gradle.properties file using ``key.property_key``.

    The file is read on first lookup and cached for the lifetime of the source.
    """

    def __init__(self, path: Path, label: str = "properties") -> None:
        """
        Initialize properties source.

        Args:
            path: Path to the properties file (may not exist)
            label: Source label (e.g., "project-properties", "user-properties")
        """
        self.path = path
        self.label = label
        self._properties: dict[str, str] | None = None

    @property
    def properties(self) -> dict[str, str]:
        """Parsed file contents; empty if the file is missing or unreadable."""
        if self._properties is None:
            self._properties = load_properties(self.path)
        return self._properties

    def lookup(self, key: ConfigKey) -> ConfigValue | None:
        value = self.properties.get(key.property_key)
        if not _non_blank(value):
            return None
        return ConfigValue(value, f"{self.label}:{key.property_key}", key)
