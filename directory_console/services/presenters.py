"""
Presentation Helpers.

Toolkit-independent view models for the user table, the detail view and
the form, so any UI layer can render the store without re-deriving these
rules.  A membership without roles is always rendered as such and never
merged into one that has roles.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel

from directory_console.models.user import OrganisationMembership, User

__all__ = [
    "MembershipView",
    "NO_ORGANISATION_LABEL",
    "NO_ROLES_LABEL",
    "PLACEHOLDER",
    "UserRowView",
    "describe_membership",
    "describe_memberships",
    "status_label",
    "user_row",
]

PLACEHOLDER: str = "-"
NO_ROLES_LABEL: str = "No roles assigned"
NO_ORGANISATION_LABEL: str = "No organisation"


class MembershipView(BaseModel):
    """One organisation block of the detail view."""

    organisation: str
    roles: list[str]
    has_roles: bool
    roles_label: str


class UserRowView(BaseModel):
    """One row of the user table."""

    user_uid: str
    username: str
    first_name: str
    last_name: str
    email: str
    phone: str
    organisation: str
    role: str
    has_role: bool


def describe_membership(membership: OrganisationMembership) -> MembershipView:
    roles = membership.role_names
    return MembershipView(
        organisation=membership.org_name or NO_ORGANISATION_LABEL,
        roles=roles,
        has_roles=bool(roles),
        roles_label=", ".join(roles) if roles else NO_ROLES_LABEL,
    )


def describe_memberships(user: User) -> list[MembershipView]:
    """Every membership of *user*, in order, one view each."""
    return [describe_membership(m) for m in user.organisations]


def user_row(user: User) -> UserRowView:
    """Table row: first membership's organisation and its first role."""
    membership = user.first_membership
    organisation = membership.org_name if membership and membership.org_name else PLACEHOLDER
    role = (
        membership.roles[0].role_name
        if membership is not None and membership.has_roles
        else PLACEHOLDER
    )
    return UserRowView(
        user_uid=user.user_uid,
        username=user.username,
        first_name=user.first_name,
        last_name=user.last_name,
        email=user.email,
        phone=user.phone or PLACEHOLDER,
        organisation=organisation,
        role=role,
        has_role=role != PLACEHOLDER,
    )


def status_label(user: User) -> Optional[str]:
    """``"Deleted"``/``"Active"``, or ``None`` when the store sent no flag."""
    if user.deleted is None:
        return None
    return "Deleted" if user.deleted else "Active"
