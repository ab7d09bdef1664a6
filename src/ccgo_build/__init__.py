# SPDX-License-Identifier: GPL-2.0-only
# Copyright (C) 2025 ccgo-build contributors
"""
ccgo-build - Build configuration, versioning and publishing for CCGO native libraries.

This module provides initialization logic for the package.
"""
try:
    from importlib.metadata import version

    __version__ = version("ccgo-build")
except Exception:  # pragma: no cover
    __version__ = "unknown"
