"""
Form Models.

Draft records for the create/edit form and the form's observable state.

Create-vs-update is decided by the draft *variant*, not by probing for an
optional id: a ``NewUserDraft`` never carries one, an
``ExistingUserDraft`` always does.
"""

from __future__ import annotations

from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from directory_console.models.enums import DraftKind, FormStatus
from directory_console.models.user import User
from directory_console.utils.string_helpers import JsonValue

__all__ = [
    "DRAFT_FIELDS",
    "ExistingUserDraft",
    "FormState",
    "NewUserDraft",
    "UserDraft",
    "draft_from_user",
]

# Editable form fields, in display order.
DRAFT_FIELDS: tuple[str, ...] = (
    "username",
    "first_name",
    "last_name",
    "email",
    "phone",
    "organisation",
    "role",
)


class _DraftFields(BaseModel):
    """Field set shared by both draft variants.

    Serialisation aliases are the names the remote store accepts on
    create/update.
    """

    model_config = ConfigDict(validate_assignment=True)

    username: str = Field(default="", serialization_alias="username")
    first_name: str = Field(default="", serialization_alias="firstname")
    last_name: str = Field(default="", serialization_alias="lastname")
    email: str = Field(default="", serialization_alias="mail")
    phone: str = Field(default="", serialization_alias="phone")
    organisation: str = Field(default="", serialization_alias="organisation")
    role: str = Field(default="", serialization_alias="role")

    def to_payload(self) -> dict[str, JsonValue]:
        """JSON body for the gateway's create/update call."""
        return self.model_dump(by_alias=True, exclude={"kind"})


class NewUserDraft(_DraftFields):
    """A user that does not exist yet; submitting it creates a record."""

    kind: Literal[DraftKind.NEW] = DraftKind.NEW


class ExistingUserDraft(_DraftFields):
    """An edit of a stored record; submitting it updates that record."""

    kind: Literal[DraftKind.EXISTING] = DraftKind.EXISTING
    user_uid: str = Field(serialization_alias="userUid")


UserDraft = Union[NewUserDraft, ExistingUserDraft]


def draft_from_user(user: User) -> ExistingUserDraft:
    """Build an edit draft from a stored record.

    The form edits a single organisation and a single role: the first
    membership's name and that membership's first role, even when the
    user holds more.
    """
    membership = user.first_membership
    organisation = membership.org_name if membership is not None else ""
    role = (
        membership.roles[0].role_name
        if membership is not None and membership.has_roles
        else ""
    )
    return ExistingUserDraft(
        user_uid=user.user_uid,
        username=user.username,
        first_name=user.first_name,
        last_name=user.last_name,
        email=user.email,
        phone=user.phone or "",
        organisation=organisation,
        role=role,
    )


class FormState(BaseModel):
    """Observable state of one create/edit form instance."""

    model_config = ConfigDict(validate_assignment=True)

    draft: UserDraft = Field(default_factory=NewUserDraft, discriminator="kind")
    errors: dict[str, str] = Field(default_factory=dict)
    status: FormStatus = FormStatus.IDLE
    general_error: Optional[str] = None
    success: bool = False
