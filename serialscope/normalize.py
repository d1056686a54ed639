"""
Filtering of vendor placeholder strings.

Firmware vendors routinely ship SMBIOS tables with their template strings
left in place ("To Be Filled By O.E.M.", "Default string", ...). Every value
read from the platform goes through `normalize` before it reaches a snapshot,
so such strings are reported as absent instead of as a real identifier.
"""

import re

SENTINEL = "N/A"
"""Marks a value that is not available. Never an empty string."""

_FILLER_PATTERNS = (
    re.compile(r"to be filled"),
    # oem, o.e.m, oe.m, o. e. m. Spaces only count after a dot.
    re.compile(r"o(?:\.\s*)?e(?:\.\s*)?m"),
)

_PLACEHOLDER_LITERALS = frozenset(
    {
        "default string",
        "not specified",
        "none",
        "unknown",
        "n/a",
        "system serial number",
        "system product name",
        "system version",
        "base board serial number",
        "chassis serial number",
    }
)


def is_placeholder(raw: str | None) -> bool:
    """Return True if `raw` carries no real information."""
    lower = (raw or "").strip().lower()
    if not lower:
        return True
    if any(pattern.search(lower) for pattern in _FILLER_PATTERNS):
        return True
    return lower in _PLACEHOLDER_LITERALS


def normalize(raw: str | None) -> str:
    """Map a raw platform value onto its trimmed form or the sentinel."""
    if is_placeholder(raw):
        return SENTINEL
    return (raw or "").strip()


def is_available(value: str | None) -> bool:
    """True for a normalized value that is neither empty nor the sentinel."""
    return bool(value) and value != SENTINEL
