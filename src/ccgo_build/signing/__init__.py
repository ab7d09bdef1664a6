# SPDX-License-Identifier: GPL-2.0-only
# Copyright (C) 2025 ccgo-build contributors
"""
ccgo-build - Build configuration, versioning and publishing for CCGO native libraries.

This package prepares PGP signing keys and decides how publications are signed.
"""

from __future__ import annotations

from ccgo_build.signing.plan import SigningMode, SigningPlan, locate_signing_key, plan_signing
from ccgo_build.signing.signing_key import (
    BEGIN_MARKER,
    END_MARKER,
    MIN_LINES,
    PreparedSigningKey,
    SigningKeyError,
    normalize_key_text,
    prepare,
)

__all__ = [
    "BEGIN_MARKER",
    "END_MARKER",
    "MIN_LINES",
    "PreparedSigningKey",
    "SigningKeyError",
    "normalize_key_text",
    "prepare",
    "SigningMode",
    "SigningPlan",
    "locate_signing_key",
    "plan_signing",
]
