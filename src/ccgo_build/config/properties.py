# SPDX-License-Identifier: GPL-2.0-only
# Copyright (C) 2025 ccgo-build contributors
"""
Reader for Java-style ``.properties`` files (gradle.properties, local.properties).

Supports the subset of the format used by Gradle projects:
- ``#`` and ``!`` comment lines
- ``=``, ``:`` or whitespace as key/value separator
- Backslash line continuation
- ``\\t``, ``\\n``, ``\\r``, ``\\f`` and ``\\uXXXX`` escapes
"""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_SEPARATORS = "=:"


def _logical_lines(text: str) -> list[str]:
    """Join continued physical lines into logical lines."""
    lines: list[str] = []
    pending = ""
    continuing = False

    for raw_line in text.splitlines():
        line = raw_line.lstrip() if continuing else raw_line
        if not continuing:
            stripped = line.lstrip()
            if not stripped or stripped[0] in "#!":
                continue
            line = stripped

        # An odd number of trailing backslashes continues the line
        trailing = len(line) - len(line.rstrip("\\"))
        if trailing % 2 == 1:
            pending += line[:-1]
            continuing = True
            continue

        lines.append(pending + line)
        pending = ""
        continuing = False

    if pending:
        lines.append(pending)

    return lines


def _unescape(text: str) -> str:
    """Decode backslash escapes."""
    result: list[str] = []
    index = 0
    while index < len(text):
        char = text[index]
        if char != "\\" or index + 1 >= len(text):
            result.append(char)
            index += 1
            continue

        escaped = text[index + 1]
        if escaped == "u" and index + 6 <= len(text):
            try:
                result.append(chr(int(text[index + 2:index + 6], 16)))
                index += 6
                continue
            except ValueError:
                pass
        result.append(_ESCAPES.get(escaped, escaped))
        index += 2

    return "".join(result)


def _split_key_value(line: str) -> tuple[str, str]:
    """Split a logical line at the first unescaped separator."""
    index = 0
    while index < len(line):
        char = line[index]
        if char == "\\":
            index += 2
            continue
        if char in _SEPARATORS or char.isspace():
            break
        index += 1

    key = line[:index]
    rest = line[index:].lstrip()
    # whitespace may be followed by an explicit separator
    if rest and rest[0] in _SEPARATORS:
        rest = rest[1:].lstrip()

    return _unescape(key), _unescape(rest)


def parse_properties(text: str) -> dict[str, str]:
    """
    Parse properties text into a dictionary.

    Later duplicates override earlier ones.

    Example:
        >>> parse_properties("# comment\\nsignEnabled=true\\nmavenLocalPath : ~/repo\\n")
        {'signEnabled': 'true', 'mavenLocalPath': '~/repo'}
    """
    properties: dict[str, str] = {}
    for line in _logical_lines(text):
        key, value = _split_key_value(line)
        if key:
            properties[key] = value
    return properties


def load_properties(path: Path) -> dict[str, str]:
    """
    Load a properties file.

    A missing or unreadable file is treated as empty.

    Args:
        path: Path to the properties file

    Returns:
        Parsed key/value pairs
    """
    if not path.is_file():
        logger.debug("Properties file not found: %s", path)
        return {}

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as err:
        logger.warning("Failed to read properties file %s: %s", path, err)
        return {}

    logger.debug("Loaded properties file: %s", path)
    return parse_properties(text)
