# SPDX-License-Identifier: GPL-2.0-only
# Copyright (C) 2025 ccgo-build contributors
"""
ccgo-build - Build configuration, versioning and publishing for CCGO native libraries.

This module reads the CCGO.toml project document with support for:
- Locating the file in the project root or one of its ancestors
- Nested values addressed with dot notation (e.g., 'publish.maven.group_id')
- Typed project settings with defaults
- Array-of-tables custom Maven repositories

CCGO.toml lives in the parent directory of the android/kmp project, e.g.:

    projectRoot/
      CCGO.toml
      android/
        build.gradle.kts

Example:
    >>> document = ProjectDocument(Path("android"))
    >>> document.get("project.version")
    '1.2.3'
    >>> document.android_stl
    'c++_shared'
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from ccgo_build.config.audit import ResolutionAuditLogger
from ccgo_build.config.keys import CustomRepoEntry

logger = logging.getLogger(__name__)

PROJECT_DOCUMENT_NAME = "CCGO.toml"

# Project root plus this many parent directories are searched
MAX_PARENT_LEVELS = 3

# Placeholder used by older templates for "no value"
EMPTY_MARKER = "EMPTY"

DEFAULT_ABI_FILTERS = ["armeabi-v7a", "arm64-v8a", "x86_64"]


def find_project_document(
    start_dir: str | Path,
    filename: str = PROJECT_DOCUMENT_NAME,
    max_levels: int = MAX_PARENT_LEVELS,
) -> Path | None:
    """
    Search ``start_dir`` and up to ``max_levels`` parents for ``filename``.

    Args:
        start_dir: Directory to start from (usually the Gradle root project)
        filename: Document file name
        max_levels: Number of parent directories to check after start_dir

    Returns:
        Path to the first regular file found, or None
    """
    search_dir = Path(start_dir).absolute()

    for _ in range(max_levels + 1):
        candidate = search_dir / filename
        if candidate.is_file():
            return candidate
        if search_dir.parent == search_dir:
            break
        search_dir = search_dir.parent

    return None


def _to_text(value: Any) -> str | None:
    """Render a scalar or list of scalars as the string form the resolver expects."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    if isinstance(value, list):
        items = [_to_text(item) for item in value]
        if any(item is None for item in items):
            return None
        return ",".join(item for item in items if item is not None)
    return None


class ProjectDocument:
    """
    Read-only view of CCGO.toml.

    The file is located and parsed on first access and cached afterwards.
    A missing file or a parse error is logged and the document behaves as
    empty; it never raises.

    Attributes:
        project_root: Directory where the search starts
        filename: Name of the document to search for

    Example:
        # CCGO.toml:
        # [project]
        # name = "ccgonow"
        # version = "1.2.3"
        #
        # [publish.maven]
        # group_id = "com.example.ccgonow"

        document = ProjectDocument("/work/ccgonow/android")
        document.version              # "1.2.3"
        document.get("publish.maven.group_id")  # "com.example.ccgonow"
        document.get("android.min_sdk", 19)     # 19 (default)
    """

    def __init__(
        self,
        project_root: str | Path,
        filename: str = PROJECT_DOCUMENT_NAME,
        audit_logger: ResolutionAuditLogger | None = None,
    ) -> None:
        """
        Initialize the project document.

        Args:
            project_root: Directory to start searching from
            filename: Name of the document to search for
            audit_logger: Optional audit logger for load events
        """
        self.project_root = Path(project_root)
        self.filename = filename
        self.audit = audit_logger
        self._path: Path | None = None
        self._data: dict[str, Any] | None = None
        self._loaded = False

    @property
    def path(self) -> Path | None:
        """Location of the document, if found."""
        self._ensure_loaded()
        return self._path

    @property
    def is_loaded(self) -> bool:
        """True if the document was found and parsed without errors."""
        self._ensure_loaded()
        return self._data is not None

    def reload(self) -> None:
        """Drop the cached document so the next access reads it again."""
        self._path = None
        self._data = None
        self._loaded = False

    def _ensure_loaded(self) -> None:
        if self._loaded:
            return
        self._loaded = True

        self._path = find_project_document(self.project_root, self.filename)
        if self._path is None:
            logger.warning("%s not found from %s. Using default values.", self.filename, self.project_root)
            self._audit(str(self.project_root / self.filename), "not-found")
            return

        try:
            with open(self._path, "rb") as file:
                self._data = tomllib.load(file)
        except tomllib.TOMLDecodeError as err:
            logger.warning("Failed to parse %s: %s", self._path, err)
            self._audit(str(self._path), "parse-error")
            return
        except OSError as err:
            # covers permission denied, IO errors, etc.
            logger.warning("Failed to open %s: %s", self._path, err)
            self._audit(str(self._path), "read-error")
            return

        logger.info("Found %s at: %s", self.filename, self._path)
        self._audit(str(self._path), "loaded")

    def _audit(self, path: str, status: str) -> None:
        if self.audit is not None:
            self.audit.log_document(path, status)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a document value by dotted key.

        Args:
            key: Key in dot notation (e.g., 'android.compile_sdk')
            default: Value returned when the key is absent

        Returns:
            The stored value or default

        Raises:
            ValueError: If key is empty
        """
        if not key:
            raise ValueError("Key cannot be empty")

        self._ensure_loaded()
        if self._data is None:
            return default

        value: Any = self._data
        for part in key.split("."):
            if isinstance(value, dict) and part in value:
                value = value[part]
            else:
                return default

        return value

    def get_string(self, key: str) -> str | None:
        """
        Get a value as a string.

        Booleans become 'true'/'false', numbers their decimal form and
        arrays of scalars a comma-separated list. Tables and missing keys
        return None.
        """
        value = self.get(key)
        if value is None:
            return None
        return _to_text(value)

    def _get_text(self, key: str, default: str) -> str:
        value = self.get(key)
        return value if isinstance(value, str) else default

    def _get_int(self, key: str, default: int) -> int:
        value = self.get(key)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        return default

    def _get_string_list(self, key: str) -> list[str] | None:
        value = self.get(key)
        if not isinstance(value, list):
            return None
        return [item.strip() for item in value if isinstance(item, str) and item.strip()]

    # Project metadata

    @property
    def project_name(self) -> str:
        """[project].name"""
        return self._get_text("project.name", "")

    @property
    def version(self) -> str:
        """[project].version"""
        return self._get_text("project.version", "1.0.0")

    # Android build parameters

    @property
    def android_stl(self) -> str:
        """[android].stl, either 'c++_shared' or 'c++_static'."""
        return self._get_text("android.stl", "c++_shared")

    @property
    def compile_sdk(self) -> int:
        return self._get_int("android.compile_sdk", 34)

    @property
    def build_tools(self) -> str:
        return self._get_text("android.build_tools", "34.0.0")

    @property
    def min_sdk(self) -> int:
        return self._get_int("android.min_sdk", 19)

    @property
    def app_min_sdk(self) -> int:
        return self._get_int("android.app_min_sdk", 21)

    @property
    def target_sdk(self) -> int:
        return self._get_int("android.target_sdk", 34)

    @property
    def ndk_version(self) -> str:
        return self._get_text("android.ndk_version", "25.2.9519653")

    @property
    def cmake_version(self) -> str:
        """[build].cmake_version"""
        return self._get_text("build.cmake_version", "3.22.1")

    @property
    def default_archs(self) -> list[str]:
        """[android].default_archs, used as CMake ABI filters."""
        archs = self._get_string_list("android.default_archs")
        if archs is None:
            return list(DEFAULT_ABI_FILTERS)
        return archs

    # Publish settings

    @property
    def group_id(self) -> str:
        """[publish.maven].group_id"""
        return self._get_text("publish.maven.group_id", "com.example")

    @property
    def artifact_id(self) -> str:
        """[publish.maven].artifact_id, falling back to the project name."""
        artifact_id = self._get_text("publish.maven.artifact_id", "")
        return artifact_id if artifact_id.strip() else self.project_name

    @property
    def channel_desc(self) -> str:
        """
        Publish channel description (e.g., 'beta').

        Read from [publish.maven].channel_desc, then [publish].channel_desc
        for older documents. The 'EMPTY' placeholder counts as unset.
        """
        for key in ("publish.maven.channel_desc", "publish.channel_desc"):
            value = self.get(key)
            if isinstance(value, str) and value != EMPTY_MARKER:
                return value
        return ""

    @property
    def maven_dependencies(self) -> list[str]:
        """[publish.maven].dependencies as 'group:artifact:version' strings."""
        dependencies = self._get_string_list("publish.maven.dependencies") or []
        return [dependency for dependency in dependencies if ":" in dependency]

    def custom_repositories(self) -> list[CustomRepoEntry]:
        """
        Read custom Maven repositories from [[publish.maven.custom]] tables.

        Entries without a string 'url' are skipped; the index is the
        position in the array.
        """
        entries = self.get("publish.maven.custom")
        if not isinstance(entries, list):
            return []

        repos: list[CustomRepoEntry] = []
        for index, entry in enumerate(entries):
            if not isinstance(entry, dict):
                continue
            url = entry.get("url")
            if not isinstance(url, str) or not url.strip():
                continue
            username = entry.get("username")
            password = entry.get("password")
            repos.append(
                CustomRepoEntry(
                    index=index,
                    url=url.strip(),
                    username=username if isinstance(username, str) else "",
                    password=password if isinstance(password, str) else "",
                )
            )
        return repos

    def summary(self) -> dict[str, Any]:
        """Return the effective project settings as a plain dict."""
        return {
            "document": str(self.path) if self.path else None,
            "loaded": self.is_loaded,
            "project_name": self.project_name,
            "version": self.version,
            "group_id": self.group_id,
            "artifact_id": self.artifact_id,
            "channel_desc": self.channel_desc,
            "android_stl": self.android_stl,
            "compile_sdk": self.compile_sdk,
            "min_sdk": self.min_sdk,
            "target_sdk": self.target_sdk,
            "ndk_version": self.ndk_version,
            "cmake_version": self.cmake_version,
            "default_archs": self.default_archs,
            "maven_dependencies": self.maven_dependencies,
        }

    def __repr__(self) -> str:
        """Return string representation of ProjectDocument."""
        status = "loaded" if self._data is not None else "not loaded"
        return f"ProjectDocument(project_root={self.project_root}, {status})"
