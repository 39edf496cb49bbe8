"""
Name Validator - Metric Name and Source Rules.

A metric name or source is valid when it:
    - Is a non-empty string
    - Uses only ASCII letters, digits and ". : _ -"
    - Is at most 255 characters long

Design Notes:
    - ASCII-only patterns; "fübar" and "fu/bar" are rejected outright
    - fullmatch, so a trailing newline is not accepted
"""

from __future__ import annotations

import re
from typing import Any

MAX_NAME_LENGTH = 255
MAX_SOURCE_LENGTH = 255

_NAME_PATTERN = re.compile(r"[A-Za-z0-9.:_\-]{1,%d}" % MAX_NAME_LENGTH, re.ASCII)
_SOURCE_PATTERN = re.compile(r"[A-Za-z0-9.:_\-]{1,%d}" % MAX_SOURCE_LENGTH, re.ASCII)


def is_valid_name(name: Any) -> bool:
    """Check a metric name against the wire protocol rules."""
    if not isinstance(name, str):
        return False
    return _NAME_PATTERN.fullmatch(name) is not None


def is_valid_source(source: Any) -> bool:
    """Check a source against the wire protocol rules."""
    if not isinstance(source, str):
        return False
    return _SOURCE_PATTERN.fullmatch(source) is not None
