# SPDX-License-Identifier: GPL-2.0-only
# Copyright (C) 2025 ccgo-build contributors
"""
ccgo-build - Build configuration, versioning and publishing for CCGO native libraries.

Configuration keys for publish settings.

Every key can be supplied through (from high to low priority):
1. Environment variable (for CI/CD override)
2. CCGO.toml (project root or nearest ancestor)
3. Project-level gradle.properties
4. User-level ~/.gradle/gradle.properties
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ConfigKey(Enum):
    """
    Enumerated publish setting with its lookup names.

    Each member's value is a tuple of
    (environment variable, properties key, dotted CCGO.toml path, sensitive).

    Example:
        >>> ConfigKey.SIGNING_KEY.env_var
        'SIGNING_IN_MEMORY_KEY'
        >>> ConfigKey.SIGNING_KEY.structured_path
        'publish.signing_key'
    """

    # Maven Central credentials
    MAVEN_CENTRAL_USERNAME = ("MAVEN_CENTRAL_USERNAME", "mavenCentralUsername", "publish.maven.central_username", False)
    MAVEN_CENTRAL_PASSWORD = ("MAVEN_CENTRAL_PASSWORD", "mavenCentralPassword", "publish.maven.central_password", True)

    # Signing credentials
    SIGNING_KEY = ("SIGNING_IN_MEMORY_KEY", "signingInMemoryKey", "publish.signing_key", True)
    SIGNING_KEY_PASSWORD = (
        "SIGNING_IN_MEMORY_KEY_PASSWORD",
        "signingInMemoryKeyPassword",
        "publish.signing_key_password",
        True,
    )

    # Local maven repository path
    MAVEN_LOCAL_PATH = ("MAVEN_LOCAL_PATH", "mavenLocalPath", "publish.maven.local_path", False)

    # Custom maven repositories (comma-separated, matched by position)
    MAVEN_CUSTOM_URLS = ("MAVEN_CUSTOM_URLS", "mavenCustomUrls", "publish.maven.custom_urls", False)
    MAVEN_CUSTOM_USERNAMES = ("MAVEN_CUSTOM_USERNAMES", "mavenCustomUsernames", "publish.maven.custom_usernames", False)
    MAVEN_CUSTOM_PASSWORDS = ("MAVEN_CUSTOM_PASSWORDS", "mavenCustomPasswords", "publish.maven.custom_passwords", True)

    # Sign enabled flag
    SIGN_ENABLED = ("SIGN_ENABLED", "signEnabled", "publish.sign_enabled", False)

    @property
    def env_var(self) -> str:
        """Environment variable name."""
        return self.value[0]

    @property
    def property_key(self) -> str:
        """Key in gradle.properties files."""
        return self.value[1]

    @property
    def structured_path(self) -> str:
        """Dotted path inside CCGO.toml."""
        return self.value[2]

    @property
    def sensitive(self) -> bool:
        """Whether the value is a credential that must not be displayed."""
        return self.value[3]

    @classmethod
    def from_name(cls, name: str) -> ConfigKey:
        """
        Look up a key by member name, env var or properties key.

        Args:
            name: Any of the key's names (case-insensitive for member names)

        Returns:
            Matching ConfigKey

        Raises:
            KeyError: If no key matches
        """
        for key in cls:
            if name in (key.env_var, key.property_key, key.structured_path) or name.upper() == key.name:
                return key
        raise KeyError(f"Unknown configuration key: {name}")


@dataclass(frozen=True)
class CustomRepoEntry:
    """
    A custom Maven repository assembled from positional lists.

    Attributes:
        index: Position in the configured URL list
        url: Repository URL
        username: Username (empty if not configured for this position)
        password: Password (empty if not configured for this position)
    """

    index: int
    url: str
    username: str = ""
    password: str = ""
