"""
Organisation Index.

Distinct organisation names across the loaded users, used to populate the
organisation filter.
"""

from __future__ import annotations

from typing import Iterable

from directory_console.models.user import User

__all__ = ["build_organisation_index"]


def build_organisation_index(users: Iterable[User]) -> list[str]:
    """Sorted, duplicate-free, non-empty organisation names of *users*."""
    names: set[str] = {
        membership.org_name
        for user in users
        for membership in user.organisations
        if membership.org_name
    }
    return sorted(names)
