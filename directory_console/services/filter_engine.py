"""
Filter Engine.

Pure predicates over canonical users.  ``visible`` never mutates its input
and depends only on (users, filter), so it can be re-derived at any time
without replaying earlier filter operations.
"""

from __future__ import annotations

from typing import Sequence

from directory_console.models.filter_models import FilterState
from directory_console.models.user import User
from directory_console.utils.string_helpers import contains_casefold

__all__ = [
    "matches_organisation",
    "matches_text",
    "visible",
]


def matches_text(user: User, term: str) -> bool:
    """Case-insensitive substring match on first name, last name, username or e-mail.

    Organisation names are not searched.
    """
    if not term:
        return True
    return (
        contains_casefold(user.first_name, term)
        or contains_casefold(user.last_name, term)
        or contains_casefold(user.username, term)
        or contains_casefold(user.email, term)
    )


def matches_organisation(user: User, organisation: str) -> bool:
    """``True`` when *organisation* is empty or any membership has exactly that name."""
    if not organisation:
        return True
    return any(m.org_name == organisation for m in user.organisations)


def visible(users: Sequence[User], filter_state: FilterState) -> list[User]:
    """The subset of *users* passing both predicates, in input order.

    With an empty filter the full input is returned (as a new list).
    """
    if filter_state.is_empty:
        return list(users)
    return [
        user
        for user in users
        if matches_text(user, filter_state.text)
        and matches_organisation(user, filter_state.organisation)
    ]
