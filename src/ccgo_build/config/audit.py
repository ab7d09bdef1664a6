# SPDX-License-Identifier: GPL-2.0-only
# Copyright (C) 2025 ccgo-build contributors
"""
Audit logging for configuration resolution.

Records for every resolved setting:
- Which key was resolved
- Which source supplied it
- Whether a default was used

Never logs actual values; several keys carry credentials.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

AUDIT_LOGGER_NAME = "ccgo_build.config.audit"


class ResolutionAuditLogger:
    """
    Dedicated logger for configuration resolution auditing.

    Logs to a separate file when ``audit_file`` is given, otherwise messages
    propagate to the root logger so the normal log configuration applies.
    Format: timestamp | level | event details
    """

    def __init__(
        self,
        audit_file: Path | None = None,
        enable_console: bool = False,
    ) -> None:
        """
        Initialize audit logger.

        Args:
            audit_file: Optional path to an audit log file
            enable_console: Also log to console (for debugging)
        """
        self.audit_file = audit_file
        self._logger = self._setup_logger(enable_console)

    def _setup_logger(self, enable_console: bool) -> logging.Logger:
        """Set up dedicated logger for resolution audit."""
        logger = logging.getLogger(AUDIT_LOGGER_NAME)
        logger.setLevel(logging.INFO)

        # Simple format: timestamp | level | message
        formatter = logging.Formatter(
            "%(asctime)s | %(levelname)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

        target = os.path.abspath(self.audit_file) if self.audit_file is not None else None

        # The logger is process-wide; only the newest instance's handlers stay
        for handler in list(logger.handlers):
            if isinstance(handler, logging.FileHandler):
                if handler.baseFilename != target:
                    logger.removeHandler(handler)
                    handler.close()
            elif type(handler) is logging.StreamHandler:
                logger.removeHandler(handler)

        if self.audit_file is not None:
            logger.propagate = False  # Keep the audit trail out of the build log

            # Ensure audit directory exists
            self.audit_file.parent.mkdir(parents=True, exist_ok=True)

            if not any(isinstance(handler, logging.FileHandler) for handler in logger.handlers):
                file_handler = logging.FileHandler(self.audit_file)
                file_handler.setLevel(logging.INFO)
                file_handler.setFormatter(formatter)
                logger.addHandler(file_handler)
        else:
            logger.propagate = True

        # Optional console handler
        if enable_console:
            console_handler = logging.StreamHandler()
            console_handler.setFormatter(formatter)
            logger.addHandler(console_handler)

        return logger

    def log_resolution(
        self,
        key: str,
        source: str,
        success: bool = True,
    ) -> None:
        """
        Log a resolution attempt.

        Args:
            key: Name of the configuration key
            source: Where the value came from (env, toml, properties)
            success: Whether a value was found
        """
        status = "RESOLVED" if success else "MISSING"
        self._logger.info(f"{status} | key={key} | source={source}")

    def log_default(
        self,
        key: str,
        default_is_set: bool,
    ) -> None:
        """
        Log fallback to the caller's default.

        Args:
            key: Name of the configuration key
            default_is_set: Whether the default is non-empty
        """
        kind = "value" if default_is_set else "empty"
        self._logger.info(f"DEFAULT | key={key} | default={kind}")

    def log_document(
        self,
        path: str,
        status: str,
    ) -> None:
        """
        Log the outcome of loading the project document.

        Args:
            path: Document path (or the path searched for)
            status: loaded, not-found, parse-error or read-error
        """
        level = logging.INFO if status in ("loaded", "not-found") else logging.WARNING
        self._logger.log(level, f"DOCUMENT {status.upper()} | path={path}")

    def log_signing(
        self,
        status: str,
        detail: str,
    ) -> None:
        """
        Log a signing key decision.

        Args:
            status: Short outcome label (e.g., in-memory, invalid, none)
            detail: Diagnostic text (never key material)
        """
        level = logging.ERROR if status == "invalid" else logging.INFO
        self._logger.log(level, f"SIGNING {status.upper()} | {detail}")
