"""
String Helpers.

Shared JSON value type and the case-insensitive matching primitive used
by the filter engine.
"""

from __future__ import annotations

from typing import Optional, Union

__all__ = [
    "JsonValue",
    "contains_casefold",
    "is_blank",
]

# ---------------------------------------------------------------------------
# Recursive JSON value type (PEP 484, no use of ``Any``)
# ---------------------------------------------------------------------------

JsonValue = Union[
    str,
    int,
    float,
    bool,
    None,
    dict[str, "JsonValue"],
    list["JsonValue"],
]


def is_blank(value: Optional[str]) -> bool:
    """``True`` for ``None``, ``""`` and whitespace-only strings."""
    return value is None or value.strip() == ""


def contains_casefold(haystack: Optional[str], needle: str) -> bool:
    """Case-insensitive substring test.

    A missing *haystack* never matches a non-empty *needle*; an empty
    *needle* matches everything.
    """
    if not needle:
        return True
    if not haystack:
        return False
    return needle.lower() in haystack.lower()
