# SPDX-License-Identifier: GPL-2.0-only
# Copyright (C) 2025 ccgo-build contributors
"""
ccgo-build - Build configuration, versioning and publishing for CCGO native libraries.

Tests for ccgo_build.naming module.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from ccgo_build.naming import (
    ArtifactNamer,
    archive_aar_name,
    archive_name,
    archive_zip_name,
    artifact_id,
    join_components,
    stl_suffix,
    target_directory,
)
from ccgo_build.versioning.version import VersionInfo


def make_version(publish_suffix: str = "beta.4-dirty", is_release: bool = False) -> VersionInfo:
    return VersionInfo(
        version_name="1.2.3",
        version_code="128",
        revision="3f2a9c1",
        branch="main",
        build_timestamp="2026-01-02",
        publish_suffix=publish_suffix,
        tag="v1.2.3" if is_release else f"v1.2.3-{publish_suffix}",
        is_release=is_release,
    )


class TestJoinComponents:
    """Tests for join_components()."""

    @pytest.mark.parametrize(
        ("parts", "expected"),
        [
            (["a", "b", "c"], "a-b-c"),
            (["a", "", "c"], "a-c"),
            (["a", "-b"], "a-b"),
            (["", ""], ""),
            (["-"], ""),
        ],
    )
    def test_join(self, parts: list[str], expected: str) -> None:
        """Test empty parts are skipped and leading separators dropped."""
        assert join_components(parts) == expected

    def test_custom_separator(self) -> None:
        """Test a different separator."""
        assert join_components(["a", "_b", "c"], separator="_") == "a_b_c"


class TestNames:
    """Tests for the name formatting functions."""

    def test_stl_suffix(self) -> None:
        """Test only static STLs get a suffix."""
        assert stl_suffix("c++_static") == "-stdembed"
        assert stl_suffix("c++_shared") == ""
        assert stl_suffix("") == ""

    def test_aar_name_plain(self) -> None:
        """Test a release AAR name."""
        assert archive_aar_name("ccgonow", "1.2.3") == "CCGONOW_ANDROID_SDK-1.2.3.aar"

    def test_aar_name_with_suffix(self) -> None:
        """Test the publish suffix is appended."""
        assert (
            archive_aar_name("ccgonow", "1.2.3", publish_suffix="beta.4-dirty")
            == "CCGONOW_ANDROID_SDK-1.2.3-beta.4-dirty.aar"
        )

    def test_aar_name_full(self) -> None:
        """Test channel, suffix and static STL together."""
        name = archive_aar_name("ccgonow", "1.2.3", channel_desc="Beta", publish_suffix="beta.4", android_stl="c++_static")

        assert name == "CCGONOW_ANDROID-STDEMBED_SDK-1.2.3-beta-beta.4.aar"

    def test_zip_name(self) -> None:
        """Test the zip name wraps the AAR stem."""
        assert archive_zip_name("CCGONOW_ANDROID_SDK-1.2.3.aar") == "ARCHIVE_CCGONOW_ANDROID_SDK-1.2.3.zip"
        assert archive_zip_name("CCGONOW") == "ARCHIVE_CCGONOW.zip"

    @pytest.mark.parametrize(
        ("channel_desc", "android_stl", "expected"),
        [
            ("", "c++_shared", "ccgonow"),
            ("", "c++_static", "ccgonow-stdembed"),
            ("Beta", "c++_shared", "ccgonow-beta"),
            ("beta", "c++_static", "ccgonow-beta-stdembed"),
        ],
    )
    def test_artifact_id(self, channel_desc: str, android_stl: str, expected: str) -> None:
        """Test the Maven artifact id."""
        assert artifact_id("CCGONow", channel_desc, android_stl) == expected

    def test_archive_name(self) -> None:
        """Test generic archive names skip missing components."""
        assert archive_name("ccgonow", "ios", "1.2.3", build_type="release") == "ccgonow-ios-1.2.3-release.zip"
        assert archive_name("ccgonow", "android", "1.2.3", "beta", "debug", "tar.gz") == (
            "ccgonow-android-1.2.3-beta-debug.tar.gz"
        )
        assert archive_name("ccgonow") == "ccgonow.zip"
        assert archive_name("ccgonow", "linux", extension="") == "ccgonow-linux"

    def test_target_directory(self, tmp_path: Path) -> None:
        """Test the output directory sits next to the project root."""
        project_root = tmp_path / "ccgonow" / "android"

        assert target_directory(project_root, "release") == tmp_path / "ccgonow" / "target" / "release" / "android"
        assert target_directory(project_root, "debug", "ohos") == tmp_path / "ccgonow" / "target" / "debug" / "ohos"


class TestArtifactNamer:
    """Tests for ArtifactNamer."""

    def test_beta_names(self) -> None:
        """Test names for a beta build."""
        namer = ArtifactNamer("ccgonow", make_version())

        assert namer.aar_name == "CCGONOW_ANDROID_SDK-1.2.3-beta.4-dirty.aar"
        assert namer.zip_name == "ARCHIVE_CCGONOW_ANDROID_SDK-1.2.3-beta.4-dirty.zip"
        assert namer.release_aar_name == "CCGONOW_ANDROID_SDK-1.2.3-release.aar"
        assert namer.artifact_id == "ccgonow"

    def test_release_names(self) -> None:
        """Test names for a release build with a static STL."""
        namer = ArtifactNamer("ccgonow", make_version("", is_release=True), android_stl="c++_static")

        assert namer.archive_qualifier == "release"
        assert namer.aar_name == "CCGONOW_ANDROID-STDEMBED_SDK-1.2.3-release.aar"
        assert namer.zip_name == "ARCHIVE_CCGONOW_ANDROID-STDEMBED_SDK-1.2.3-release.zip"
        assert namer.artifact_id == "ccgonow-stdembed"

    def test_release_archive_matches_release_publication(self) -> None:
        """Test a release build produces the AAR the release publication points at."""
        namer = ArtifactNamer("ccgonow", make_version("", is_release=True), channel_desc="beta")

        assert namer.aar_name == namer.release_aar_name
        assert namer.zip_name == archive_zip_name(namer.release_aar_name)
        assert namer.version.tag == "v1.2.3"

    def test_target_directory(self, tmp_path: Path) -> None:
        """Test the target directory follows the build type."""
        project_root = tmp_path / "android"

        assert ArtifactNamer("ccgonow", make_version()).target_directory(project_root) == (
            tmp_path / "target" / "debug" / "android"
        )
        assert ArtifactNamer("ccgonow", make_version("", True)).target_directory(project_root) == (
            tmp_path / "target" / "release" / "android"
        )

    def test_as_dict(self) -> None:
        """Test as_dict() lists every name."""
        data = ArtifactNamer("ccgonow", make_version(), channel_desc="beta").as_dict()

        assert data == {
            "aar": "CCGONOW_ANDROID_SDK-1.2.3-beta-beta.4-dirty.aar",
            "release_aar": "CCGONOW_ANDROID_SDK-1.2.3-beta-release.aar",
            "zip": "ARCHIVE_CCGONOW_ANDROID_SDK-1.2.3-beta-beta.4-dirty.zip",
            "artifact_id": "ccgonow-beta",
        }
