# SPDX-License-Identifier: GPL-2.0-only
# Copyright (C) 2025 ccgo-build contributors
"""Helpers around the ``gpg`` command line tool."""

from __future__ import annotations

import logging

from ccgo_build.signing.signing_key import ESCAPED_NEWLINE
from ccgo_build.versioning.command_runner import CommandRunner, SubprocessCommandRunner

logger = logging.getLogger(__name__)


def _export_command(passphrase: str) -> list[str]:
    command = ["gpg", "--batch", "--pinentry-mode=loopback"]
    if passphrase:
        command += ["--passphrase", passphrase]
    return command


def _run_export(command: list[str], runner: CommandRunner | None) -> str:
    runner = runner or SubprocessCommandRunner()
    result = runner.run(command)
    if not result.ok:
        # the command line may contain the passphrase; log the exit code only
        logger.warning("gpg key export failed with exit code %d", result.returncode)
        return ""
    return result.stdout.strip()


def export_secret_key(key_id: str, passphrase: str = "", runner: CommandRunner | None = None) -> str:
    """
    Export the armored secret key for ``key_id`` from the default keyring.

    Returns:
        Armored key block, or '' if gpg is unavailable or the export fails
    """
    command = _export_command(passphrase) + ["--export-secret-keys", "--armor", key_id]
    return _run_export(command, runner)


def export_secret_keyring(keyring_file: str, passphrase: str = "", runner: CommandRunner | None = None) -> str:
    """Export all secret keys from a standalone keyring file."""
    command = _export_command(passphrase) + [
        "--no-default-keyring",
        "--secret-keyring",
        keyring_file,
        "--export-secret-keys",
        "--armor",
    ]
    return _run_export(command, runner)


def has_secret_keys(runner: CommandRunner | None = None) -> bool:
    """True if a local gpg agent lists at least one secret key."""
    runner = runner or SubprocessCommandRunner()
    result = runner.run(["gpg", "--list-secret-keys"])
    return result.ok and any(line.startswith("sec") for line in result.stdout.splitlines())


def to_single_line(key_text: str) -> str:
    """
    Encode a multi-line key for an environment variable or properties line.

    Line breaks become a literal backslash-n; the result round-trips through
    signing_key.normalize_key_text().
    """
    lines = key_text.strip().splitlines()
    return ESCAPED_NEWLINE.join(lines)
