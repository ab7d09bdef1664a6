# SPDX-License-Identifier: GPL-2.0-only
# Copyright (C) 2025 ccgo-build contributors
"""
ccgo-build - Build configuration, versioning and publishing for CCGO native libraries.

This package provides layered configuration resolution from environment
variables, CCGO.toml and gradle.properties files, with audit logging.
"""

from __future__ import annotations

from ccgo_build.config.audit import ResolutionAuditLogger
from ccgo_build.config.keys import ConfigKey, CustomRepoEntry
from ccgo_build.config.project import ProjectDocument, find_project_document
from ccgo_build.config.properties import load_properties, parse_properties
from ccgo_build.config.resolver import (
    ConfigError,
    ConfigResolver,
    ConfigValueRequiredError,
    is_truthy,
    split_list,
)
from ccgo_build.config.sources import (
    ConfigSource,
    ConfigValue,
    EnvVarSource,
    PropertiesFileSource,
    StructuredDocumentSource,
)

__all__ = [
    # Keys
    "ConfigKey",
    "CustomRepoEntry",
    # Resolver
    "ConfigResolver",
    "ConfigError",
    "ConfigValueRequiredError",
    "is_truthy",
    "split_list",
    # Sources
    "ConfigSource",
    "ConfigValue",
    "EnvVarSource",
    "StructuredDocumentSource",
    "PropertiesFileSource",
    # Documents
    "ProjectDocument",
    "find_project_document",
    "load_properties",
    "parse_properties",
    # Audit
    "ResolutionAuditLogger",
]
