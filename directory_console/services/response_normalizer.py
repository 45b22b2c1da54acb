"""
Response Normalizer.

Turns whatever the store's list endpoint returned into an ordered
``list[User]``.  The response shape is not stable across deployments, so
three shapes are recognised without configuration:

    {"_embedded": {"users": [...]}}    HAL-style envelope
    [...]                              bare sequence
    {"content": [...], ...}            paginated envelope

Anything else normalises to ``[]``; nothing here raises.  Legacy field
spellings are resolved by the ``User`` model during coercion, so this is
the single ingestion boundary for user records.
"""

from __future__ import annotations

from typing import Optional

from pydantic import ValidationError

from directory_console.logger import StructuredLogger
from directory_console.models.user import User
from directory_console.utils.string_helpers import JsonValue

__all__ = [
    "extract_user_rows",
    "normalize_user_list",
    "normalize_user_record",
]


def extract_user_rows(raw: JsonValue) -> list[JsonValue]:
    """Return the raw row sequence inside a list response, or ``[]``."""
    if isinstance(raw, list):
        return raw
    if isinstance(raw, dict):
        embedded = raw.get("_embedded")
        if isinstance(embedded, dict) and isinstance(embedded.get("users"), list):
            return embedded["users"]
        if isinstance(raw.get("content"), list):
            return raw["content"]
    return []


def normalize_user_list(
    raw: JsonValue,
    logger: Optional[StructuredLogger] = None,
) -> list[User]:
    """Coerce a list response into canonical users, preserving order.

    Rows that are not objects or that fail model validation (no id, wrong
    types) are skipped; one bad row never blanks the whole list.
    """
    rows = extract_user_rows(raw)
    if not rows and logger is not None and not isinstance(raw, list):
        logger.debug("List response had no recognised user sequence.")

    users: list[User] = []
    for index, row in enumerate(rows):
        user = _coerce(row)
        if user is None:
            if logger is not None:
                logger.warning("Skipping unreadable user row at index %d", index)
            continue
        users.append(user)
    return users


def normalize_user_record(
    raw: JsonValue,
    logger: Optional[StructuredLogger] = None,
) -> Optional[User]:
    """Coerce a single-record response, unwrapping a ``content`` envelope."""
    candidate = raw
    if isinstance(raw, dict) and isinstance(raw.get("content"), dict):
        candidate = raw["content"]
    user = _coerce(candidate)
    if user is None and logger is not None:
        logger.warning("Single-record response could not be read as a user.")
    return user


def _coerce(row: JsonValue) -> Optional[User]:
    if not isinstance(row, dict):
        return None
    try:
        return User.model_validate(row)
    except ValidationError:
        return None
