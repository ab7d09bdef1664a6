# SPDX-License-Identifier: GPL-2.0-only
# Copyright (C) 2025 ccgo-build contributors
"""
ccgo-build - Build configuration, versioning and publishing for CCGO native libraries.

Archive and artifact names.

All functions are pure string formatting; empty components are skipped, so
missing inputs only make names shorter.

Example:
    >>> archive_aar_name("ccgonow", "1.2.3", channel_desc="", publish_suffix="beta.4", android_stl="c++_static")
    'CCGONOW_ANDROID-STDEMBED_SDK-1.2.3-beta.4.aar'
    >>> artifact_id("ccgonow", channel_desc="beta", android_stl="c++_static")
    'ccgonow-beta-stdembed'
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from ccgo_build.versioning.version import VersionInfo

SEPARATOR = "-"
STATIC_STL_SUFFIX = "-stdembed"

# Archive qualifier of release builds; the tag itself carries no suffix
RELEASE_QUALIFIER = "release"


def join_components(parts: Iterable[str], separator: str = SEPARATOR) -> str:
    """
    Join the non-empty parts with ``separator``.

    A single leading separator on a part is dropped so pre-dashed suffixes
    do not double up.
    """
    cleaned = []
    for part in parts:
        if not part:
            continue
        if part.startswith(separator):
            part = part[len(separator):]
        if part:
            cleaned.append(part)
    return separator.join(cleaned)


def stl_suffix(android_stl: str) -> str:
    """Return '-stdembed' for a statically linked C++ STL, else ''."""
    return STATIC_STL_SUFFIX if android_stl.endswith("_static") else ""


def _with_prefix(text: str, separator: str = SEPARATOR) -> str:
    return f"{separator}{text}" if text else ""


def archive_aar_name(
    project_name: str,
    version: str,
    channel_desc: str = "",
    publish_suffix: str = "",
    android_stl: str = "",
) -> str:
    """
    Name of the Android AAR archive.

    Format: <PROJECT>_ANDROID<STL>_SDK-<version>[-<channel>-<suffix>].aar
    """
    combined = join_components([channel_desc.lower(), publish_suffix.lower()])
    return (
        f"{project_name.upper()}_ANDROID{stl_suffix(android_stl).upper()}_SDK-"
        f"{version}{_with_prefix(combined)}.aar"
    )


def archive_zip_name(aar_name: str) -> str:
    """Name of the zip archive that bundles an AAR: ARCHIVE_<aar stem>.zip"""
    stem = aar_name[: -len(".aar")] if aar_name.endswith(".aar") else aar_name
    return f"ARCHIVE_{stem}.zip"


def artifact_id(project_name: str, channel_desc: str = "", android_stl: str = "") -> str:
    """Maven artifact id: <project>[-<channel>][-stdembed], lower case."""
    combined = join_components([channel_desc.lower(), stl_suffix(android_stl).lower()])
    return f"{project_name.lower()}{_with_prefix(combined)}"


def archive_name(
    project_name: str,
    platform: str = "",
    version: str = "",
    channel_desc: str = "",
    build_type: str = "",
    extension: str = "zip",
) -> str:
    """
    Generic archive name: <project>-<platform>-<version>-<channel>-<build type>.<ext>

    Example:
        >>> archive_name("ccgonow", "ios", "1.2.3", build_type="release")
        'ccgonow-ios-1.2.3-release.zip'
    """
    stem = join_components([project_name, platform, version, channel_desc, build_type])
    return f"{stem}.{extension}" if extension else stem


def target_directory(project_root: str | Path, target_subdir: str, platform: str = "android") -> Path:
    """Output directory: <parent of project root>/target/<subdir>/<platform>"""
    return Path(project_root).absolute().parent / "target" / target_subdir / platform


@dataclass(frozen=True)
class ArtifactNamer:
    """
    Names for one build, bound to project settings and version info.

    Attributes:
        project_name: Root project name
        version: VersionInfo for this build
        channel_desc: Publish channel description ('' if unset)
        android_stl: Android C++ STL ('c++_shared' or 'c++_static')
    """

    project_name: str
    version: VersionInfo
    channel_desc: str = ""
    android_stl: str = "c++_shared"

    @property
    def archive_qualifier(self) -> str:
        """'release' for release builds, else the publish suffix (e.g. 'beta.4')."""
        return RELEASE_QUALIFIER if self.version.is_release else self.version.publish_suffix

    @property
    def aar_name(self) -> str:
        return archive_aar_name(
            self.project_name,
            self.version.version_name,
            self.channel_desc,
            self.archive_qualifier,
            self.android_stl,
        )

    @property
    def release_aar_name(self) -> str:
        """AAR name of the release publication, regardless of build type."""
        return archive_aar_name(
            self.project_name,
            self.version.version_name,
            self.channel_desc,
            RELEASE_QUALIFIER,
            self.android_stl,
        )

    @property
    def zip_name(self) -> str:
        return archive_zip_name(self.aar_name)

    @property
    def artifact_id(self) -> str:
        return artifact_id(self.project_name, self.channel_desc, self.android_stl)

    def target_directory(self, project_root: str | Path, platform: str = "android") -> Path:
        return target_directory(project_root, self.version.target_subdir, platform)

    def as_dict(self) -> dict[str, str]:
        return {
            "aar": self.aar_name,
            "release_aar": self.release_aar_name,
            "zip": self.zip_name,
            "artifact_id": self.artifact_id,
        }
