"""
User Model.

Pydantic models for user records as returned by the remote user store.

The store has shipped two spellings for the same semantic fields over
time (``firstname``/``firstName``, ``lastname``/``lastName``,
``mail``/``email``).  Both are accepted here, at the ingestion boundary,
and merged into one canonical attribute; nothing downstream checks for
the alternative spelling.
"""

from __future__ import annotations

from typing import Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

# Preferred wire spelling first; the alternates only fill in when the
# preferred key is missing or empty.
_LEGACY_SPELLINGS: dict[str, tuple[str, ...]] = {
    "firstname": ("firstName",),
    "lastname": ("lastName",),
    "mail": ("email",),
}


class Role(BaseModel):
    """A named role held within an organisation."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    role_name: str = Field(default="", validation_alias=AliasChoices("roleName", "role_name"))


class OrganisationMembership(BaseModel):
    """An (organisation, roles) pairing attached to a user.

    ``org_name`` is a display key only; two memberships across the
    dataset may carry the same name.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    org_name: str = Field(default="", validation_alias=AliasChoices("orgName", "org_name"))
    roles: list[Role] = Field(default_factory=list)

    @field_validator("org_name", mode="before")
    @classmethod
    def _none_to_empty(cls, value: object) -> object:
        return "" if value is None else value

    @field_validator("roles", mode="before")
    @classmethod
    def _none_to_list(cls, value: object) -> object:
        return [] if value is None else value

    @property
    def has_roles(self) -> bool:
        return len(self.roles) > 0

    @property
    def role_names(self) -> list[str]:
        return [role.role_name for role in self.roles]


class User(BaseModel):
    """Represents a user record in canonical form.

    ``username`` is write-once: it is set at creation and never edited.
    ``deleted`` stays ``None`` when the store did not send the flag at
    all, which the presentation layer distinguishes from ``False``.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    user_uid: str = Field(validation_alias=AliasChoices("userUid", "user_uid", "id"))
    username: str = ""
    first_name: str = Field(
        default="", validation_alias=AliasChoices("firstname", "firstName", "first_name")
    )
    last_name: str = Field(
        default="", validation_alias=AliasChoices("lastname", "lastName", "last_name")
    )
    email: str = Field(default="", validation_alias=AliasChoices("mail", "email"))
    phone: Optional[str] = None
    organisations: list[OrganisationMembership] = Field(default_factory=list)
    deleted: Optional[bool] = None

    @model_validator(mode="before")
    @classmethod
    def _merge_legacy_spellings(cls, data: object) -> object:
        if not isinstance(data, dict):
            return data
        merged = dict(data)
        for preferred, alternates in _LEGACY_SPELLINGS.items():
            if merged.get(preferred):
                continue
            for alternate in alternates:
                if merged.get(alternate):
                    merged[preferred] = merged[alternate]
                    break
        return merged

    @field_validator("user_uid", mode="before")
    @classmethod
    def _coerce_uid(cls, value: object) -> object:
        # Some deployments send numeric ids.
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("phone", mode="before")
    @classmethod
    def _coerce_phone(cls, value: object) -> object:
        if isinstance(value, bool):
            return value
        if isinstance(value, int):
            return str(value)
        if isinstance(value, float):
            return str(int(value)) if value.is_integer() else str(value)
        return value

    @field_validator("username", "first_name", "last_name", "email", mode="before")
    @classmethod
    def _none_to_empty(cls, value: object) -> object:
        return "" if value is None else value

    @field_validator("organisations", mode="before")
    @classmethod
    def _none_to_list(cls, value: object) -> object:
        return [] if value is None else value

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def first_membership(self) -> Optional[OrganisationMembership]:
        return self.organisations[0] if self.organisations else None

    def organisation_names(self) -> list[str]:
        """Names of every membership, in the order the store sent them."""
        return [membership.org_name for membership in self.organisations]
