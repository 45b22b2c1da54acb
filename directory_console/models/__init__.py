from __future__ import annotations

"""
Data Models Package.

Re-exports all Pydantic models:
    from directory_console.models import User, OrganisationMembership, Role
    from directory_console.models import FilterState, FormState, NewUserDraft, ExistingUserDraft
    from directory_console.models import LoadStatus, FormStatus, ServiceResult
"""

from directory_console.models.enums import DraftKind, FormStatus, LoadStatus
from directory_console.models.user import OrganisationMembership, Role, User
from directory_console.models.filter_models import FilterState
from directory_console.models.form_models import (
    ExistingUserDraft,
    FormState,
    NewUserDraft,
    UserDraft,
)
from directory_console.models.service_models import ServiceResult

__all__ = [
    "DraftKind",
    "FormStatus",
    "LoadStatus",
    "OrganisationMembership",
    "Role",
    "User",
    "FilterState",
    "ExistingUserDraft",
    "FormState",
    "NewUserDraft",
    "UserDraft",
    "ServiceResult",
]
