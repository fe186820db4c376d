"""Small parsing and naming helpers shared by the CLI and writers."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Literal

_FALSE_TOKENS = frozenset({"false", "0", "n", "no"})
_TRUE_TOKENS = frozenset({"true", "1", "y", "yes"})


@dataclass(frozen=True)
class ParsedValue:
    """Result of classifying a command-line token."""

    kind: Literal["boolean", "string", "none"]
    value: bool | str | None = None


def parse_boolean_or_string(raw: str | None) -> ParsedValue:
    """Classify a raw option value as a boolean, a string, or nothing.

    ``false/0/n/no`` and ``true/1/y/yes`` (any case, surrounding whitespace
    ignored) are booleans. Blank input is ``none``. Anything else is returned
    trimmed as a string.
    """
    if raw is None:
        return ParsedValue("none")
    token = raw.strip()
    if not token:
        return ParsedValue("none")
    lowered = token.lower()
    if lowered in _FALSE_TOKENS:
        return ParsedValue("boolean", False)
    if lowered in _TRUE_TOKENS:
        return ParsedValue("boolean", True)
    return ParsedValue("string", token)


def coerce_boolean_or_string(raw: str | None) -> bool | str | None:
    """Shorthand for ``parse_boolean_or_string(raw).value``."""
    return parse_boolean_or_string(raw).value


def to_file_safe_string(value: str) -> str:
    """Replace every character outside ``[A-Za-z0-9]`` with a dash."""
    return re.sub(r"[^A-Za-z0-9]", "-", value)


def file_safe_local_date(now: datetime | None = None) -> str:
    """Local timestamp with second resolution, e.g. ``2025-01-31_14-05-09``."""
    return (now or datetime.now()).strftime("%Y-%m-%d_%H-%M-%S")
