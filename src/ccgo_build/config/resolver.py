# SPDX-License-Identifier: GPL-2.0-only
# Copyright (C) 2025 ccgo-build contributors
"""
ccgo-build - Build configuration, versioning and publishing for CCGO native libraries.

Layered configuration resolver.

This module provides:
- Priority-ordered lookup over a list of sources (first non-blank wins)
- List, boolean and required-value variants
- Custom Maven repository assembly
- Per-resolver caching (resolve once per build invocation)
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path

from ccgo_build.config.audit import ResolutionAuditLogger
from ccgo_build.config.keys import ConfigKey, CustomRepoEntry
from ccgo_build.config.project import ProjectDocument
from ccgo_build.config.sources import (
    ConfigSource,
    ConfigValue,
    EnvVarSource,
    PropertiesFileSource,
    StructuredDocumentSource,
)

logger = logging.getLogger(__name__)

TRUTHY_VALUES = ("true", "1", "yes", "on")

PROJECT_PROPERTIES_NAME = "gradle.properties"
USER_PROPERTIES_PATH = Path(".gradle") / "gradle.properties"


def is_truthy(value: str) -> bool:
    """Return True if ``value`` is one of the accepted truthy spellings."""
    return value.strip().lower() in TRUTHY_VALUES


def split_list(value: str) -> list[str]:
    """
    Split a comma-separated value, trimming items and dropping empties.

    Example:
        >>> split_list("a, b ,,c")
        ['a', 'b', 'c']
    """
    return [item.strip() for item in value.split(",") if item.strip()]


class ConfigResolver:
    """
    Resolves configuration keys through an ordered list of sources.

    Features:
    - First non-blank value wins, in source order
    - Audit log entry for every resolution (never the value itself)
    - Results cached per key; clear_cache() resets
    - Missing or malformed sources are misses, never errors

    Usage:
        resolver = ConfigResolver.for_project(Path("android"))

        username = resolver.resolve(ConfigKey.MAVEN_CENTRAL_USERNAME)
        sign = resolver.resolve_boolean(ConfigKey.SIGN_ENABLED)
        repos = resolver.custom_repositories()
    """

    def __init__(
        self,
        sources: Sequence[ConfigSource],
        audit_logger: ResolutionAuditLogger | None = None,
        document: ProjectDocument | None = None,
    ) -> None:
        """
        Initialize resolver.

        Args:
            sources: Sources in priority order (highest first)
            audit_logger: Optional audit logger (created if None)
            document: Project document used for array-form custom repositories
        """
        self.sources = list(sources)

        if audit_logger is None:
            audit_logger = ResolutionAuditLogger()
        self.audit = audit_logger

        if document is None:
            document = next(
                (source.document for source in self.sources if isinstance(source, StructuredDocumentSource)),
                None,
            )
        self.document = document

        # Cache for resolved keys (None records a miss)
        self._cache: dict[ConfigKey, ConfigValue | None] = {}

    @classmethod
    def for_project(
        cls,
        project_root: str | Path,
        home: str | Path | None = None,
        environ: Mapping[str, str] | None = None,
        audit_logger: ResolutionAuditLogger | None = None,
        document: ProjectDocument | None = None,
    ) -> ConfigResolver:
        """
        Create a resolver with the default source chain.

        Priority (from high to low):
        1. Environment variable
        2. CCGO.toml (project_root or up to 3 parents)
        3. <project_root>/gradle.properties
        4. <home>/.gradle/gradle.properties

        Args:
            project_root: Gradle root project directory
            home: User home directory (defaults to Path.home())
            environ: Environment mapping (defaults to os.environ)
            audit_logger: Optional audit logger
            document: Optional pre-built project document

        Returns:
            ConfigResolver
        """
        project_root = Path(project_root)
        home = Path.home() if home is None else Path(home)

        if audit_logger is None:
            audit_logger = ResolutionAuditLogger()
        if document is None:
            document = ProjectDocument(project_root, audit_logger=audit_logger)

        sources: list[ConfigSource] = [
            EnvVarSource(environ),
            StructuredDocumentSource(document),
            PropertiesFileSource(project_root / PROJECT_PROPERTIES_NAME, label="project-properties"),
            PropertiesFileSource(home / USER_PROPERTIES_PATH, label="user-properties"),
        ]
        return cls(sources, audit_logger=audit_logger, document=document)

    def lookup(self, key: ConfigKey) -> ConfigValue | None:
        """
        Find the highest-priority non-blank value for ``key``.

        Args:
            key: Configuration key

        Returns:
            ConfigValue with its source, or None if no source has a value
        """
        if key in self._cache:
            return self._cache[key]

        result: ConfigValue | None = None
        for source in self.sources:
            result = source.lookup(key)
            if result is not None:
                break

        if result is not None:
            logger.debug("%s from %s", key.name, result.source)
            self.audit.log_resolution(key.name, result.source)
        else:
            self.audit.log_resolution(key.name, "none", success=False)

        self._cache[key] = result
        return result

    def resolve(self, key: ConfigKey, default: str = "") -> str:
        """
        Resolve ``key`` to a string.

        Args:
            key: Configuration key
            default: Value returned when no source has the key

        Returns:
            The first non-blank value, or default
        """
        result = self.lookup(key)
        if result is not None:
            return result.value

        if default:
            logger.debug("%s using default", key.name)
        self.audit.log_default(key.name, bool(default))
        return default

    def require(self, key: ConfigKey) -> str:
        """
        Resolve ``key`` and fail if no source provides it.

        Raises:
            ConfigValueRequiredError: If the key cannot be resolved
        """
        result = self.lookup(key)
        if result is None:
            raise ConfigValueRequiredError(
                f"Missing required configuration {key.name}: set env {key.env_var}, "
                f"'{key.structured_path}' in CCGO.toml or '{key.property_key}' in gradle.properties"
            )
        return result.value

    def resolve_list(self, key: ConfigKey) -> list[str]:
        """Resolve ``key`` as a comma-separated list (trimmed, empties dropped)."""
        return split_list(self.resolve(key))

    def resolve_boolean(self, key: ConfigKey, default: bool = False) -> bool:
        """Resolve ``key`` as a boolean; true iff the value is in TRUTHY_VALUES."""
        result = self.lookup(key)
        if result is None:
            self.audit.log_default(key.name, default)
            return default
        return is_truthy(result.value)

    def custom_repositories(self) -> list[CustomRepoEntry]:
        """
        Assemble custom Maven repositories.

        URLs, usernames and passwords are comma-separated and matched by
        position; missing credentials become empty strings. If no URL is
        configured, falls back to [[publish.maven.custom]] in CCGO.toml.

        Returns:
            List of CustomRepoEntry, freshly built on every call
        """
        urls = self.resolve_list(ConfigKey.MAVEN_CUSTOM_URLS)
        if not urls:
            if self.document is None:
                return []
            return self.document.custom_repositories()

        # usernames/passwords keep empty slots so positions line up
        usernames = [item.strip() for item in self.resolve(ConfigKey.MAVEN_CUSTOM_USERNAMES).split(",")]
        passwords = [item.strip() for item in self.resolve(ConfigKey.MAVEN_CUSTOM_PASSWORDS).split(",")]

        return [
            CustomRepoEntry(
                index=index,
                url=url,
                username=usernames[index] if index < len(usernames) else "",
                password=passwords[index] if index < len(passwords) else "",
            )
            for index, url in enumerate(urls)
        ]

    def local_maven_path(self, home: str | Path | None = None) -> str | None:
        """
        Resolve the local Maven repository path.

        A leading '~' is expanded to ``home`` (defaults to Path.home()).

        Returns:
            Expanded path, or None if not configured
        """
        path = self.resolve(ConfigKey.MAVEN_LOCAL_PATH)
        if not path.strip():
            return None
        if path.startswith("~"):
            home = Path.home() if home is None else Path(home)
            return str(home) + path[1:]
        return path

    def clear_cache(self) -> None:
        """Forget all resolved values (for tests)."""
        self._cache.clear()

    @property
    def cached_keys(self) -> list[ConfigKey]:
        """Keys resolved so far, in resolution order."""
        return list(self._cache)

    def __repr__(self) -> str:
        """Return string representation of ConfigResolver."""
        labels = ", ".join(source.label for source in self.sources)
        return f"ConfigResolver(sources=[{labels}])"


# Custom exceptions


class ConfigError(Exception):
    """
    Base exception for configuration errors.

    Missing or unreadable configuration files are not errors; this family
    is for contract violations and for operations the caller marked as
    mandatory.
    """

    pass


class ConfigValueRequiredError(ConfigError):
    """
    Exception raised when a required configuration value is missing.

    Raised by ConfigResolver.require() when no source supplies the key.
    """

    pass
