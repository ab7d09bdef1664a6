# SPDX-License-Identifier: GPL-2.0-only
# Copyright (C) 2025 ccgo-build contributors
"""
ccgo-build - Build configuration, versioning and publishing for CCGO native libraries.

Signing setup for publications.

Chooses how publications are signed, in order:
1. In-memory PGP key (SIGNING_IN_MEMORY_KEY + SIGNING_IN_MEMORY_KEY_PASSWORD)
2. Local gpg command line tool with at least one secret key
3. No signing (signing tasks are skipped)
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from ccgo_build.config.audit import ResolutionAuditLogger
from ccgo_build.config.keys import ConfigKey
from ccgo_build.config.resolver import ConfigResolver
from ccgo_build.signing import gpg
from ccgo_build.signing.signing_key import PreparedSigningKey, SigningKeyError, prepare
from ccgo_build.versioning.command_runner import CommandRunner

logger = logging.getLogger(__name__)

# Legacy local.properties keys
LEGACY_KEY = "signing.key"
LEGACY_PASSWORD = "signing.password"
LEGACY_KEY_ID = "signing.keyId"
LEGACY_KEYRING_FILE = "signing.secretKeyRingFile"


class SigningMode(Enum):
    """How publications will be signed."""

    IN_MEMORY = "in-memory"
    GPG_COMMAND = "gpg-command"
    NONE = "none"


@dataclass(frozen=True)
class SigningPlan:
    """
    Outcome of the signing decision.

    Attributes:
        mode: Selected signing mode
        key: Prepared key when mode is IN_MEMORY
        password: Key password when mode is IN_MEMORY
        diagnostic: Why signing is not in-memory (empty if it is)
    """

    mode: SigningMode
    key: PreparedSigningKey | None = None
    password: str = ""
    diagnostic: str = ""

    @property
    def enabled(self) -> bool:
        """Whether signing tasks should run."""
        return self.mode is not SigningMode.NONE

    def __repr__(self) -> str:
        return f"SigningPlan(mode={self.mode.value}, diagnostic={self.diagnostic!r})"


def locate_signing_key(
    resolver: ConfigResolver,
    local_properties: Mapping[str, str] | None = None,
    runner: CommandRunner | None = None,
) -> str:
    """
    Find the raw signing key from configuration or legacy settings.

    Priority:
    1. ConfigResolver (env > CCGO.toml > gradle.properties)
    2. signing.key in local.properties
    3. gpg export of signing.keyId
    4. gpg export from signing.secretKeyRingFile

    Returns:
        Raw key text, or '' if none is configured
    """
    signing_key = resolver.resolve(ConfigKey.SIGNING_KEY)
    if signing_key:
        return signing_key

    local_properties = local_properties or {}

    legacy_key = local_properties.get(LEGACY_KEY, "").strip()
    if legacy_key:
        logger.warning("Using legacy %s from local.properties (consider migrating to gradle.properties)", LEGACY_KEY)
        return legacy_key

    password = resolver.resolve(ConfigKey.SIGNING_KEY_PASSWORD) or local_properties.get(LEGACY_PASSWORD, "")

    key_id = local_properties.get(LEGACY_KEY_ID, "").strip()
    if key_id:
        exported = gpg.export_secret_key(key_id, password, runner=runner)
        logger.info("Exported signing key for %s: %s", LEGACY_KEY_ID, "ok" if exported else "empty")
        if exported:
            return exported

    keyring_file = local_properties.get(LEGACY_KEYRING_FILE, "").strip()
    if keyring_file:
        exported = gpg.export_secret_keyring(keyring_file, password, runner=runner)
        logger.info("Exported signing key from %s: %s", LEGACY_KEYRING_FILE, "ok" if exported else "empty")
        return exported

    return ""


def plan_signing(
    resolver: ConfigResolver,
    required: bool | None = None,
    local_properties: Mapping[str, str] | None = None,
    runner: CommandRunner | None = None,
    audit_logger: ResolutionAuditLogger | None = None,
) -> SigningPlan:
    """
    Decide how publications are signed.

    Args:
        resolver: Configuration resolver
        required: Fail if signing is unavailable (defaults to SIGN_ENABLED)
        local_properties: Legacy local.properties contents
        runner: Command runner for gpg
        audit_logger: Audit logger (defaults to the resolver's)

    Returns:
        SigningPlan

    Raises:
        SigningKeyError: If signing is required but no usable key or agent exists
    """
    audit = audit_logger or resolver.audit
    if required is None:
        required = resolver.resolve_boolean(ConfigKey.SIGN_ENABLED)

    raw_key = locate_signing_key(resolver, local_properties, runner=runner)
    password = resolver.resolve(ConfigKey.SIGNING_KEY_PASSWORD)
    if not password and local_properties:
        password = local_properties.get(LEGACY_PASSWORD, "")

    plan: SigningPlan
    if raw_key and password:
        prepared = prepare(raw_key)
        if prepared.is_valid:
            audit.log_signing(SigningMode.IN_MEMORY.value, f"key with {prepared.line_count} lines")
            plan = SigningPlan(SigningMode.IN_MEMORY, key=prepared, password=password)
        else:
            audit.log_signing("invalid", prepared.problem or "")
            plan = SigningPlan(SigningMode.NONE, diagnostic=prepared.problem or "")
    elif gpg.has_secret_keys(runner):
        audit.log_signing(SigningMode.GPG_COMMAND.value, "using gpg command line tool")
        plan = SigningPlan(SigningMode.GPG_COMMAND, diagnostic="no in-memory key configured")
    else:
        missing = "signing key" if not raw_key else "signing key password"
        diagnostic = f"No signing credentials configured ({missing} missing, no gpg secret keys)"
        audit.log_signing(SigningMode.NONE.value, diagnostic)
        plan = SigningPlan(SigningMode.NONE, diagnostic=diagnostic)

    if required and not plan.enabled:
        raise SigningKeyError(f"Signing is required but unavailable: {plan.diagnostic}")

    if not plan.enabled:
        logger.warning("Signing disabled: %s", plan.diagnostic)
    return plan
