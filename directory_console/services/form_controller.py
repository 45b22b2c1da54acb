"""
Form Controller.

Owns the create/edit form: the draft, per-field validation, and the
submission state machine

    IDLE -> VALIDATING -> SUBMITTING -> SUCCEEDED | FAILED

``FAILED`` keeps the fields editable with errors shown and drops back to
``IDLE`` on the next edit.  ``SUCCEEDED`` holds for the settle delay so the
success indicator can be seen, fires the success callback, then resets.

The draft variant alone decides create vs update: a ``NewUserDraft`` goes
to the gateway's create call, an ``ExistingUserDraft`` to update.
"""

from __future__ import annotations

import asyncio
import re
from typing import Awaitable, Callable, Optional

from directory_console.gateway.base import GatewayError, UserGateway
from directory_console.logger import StructuredLogger
from directory_console.models.enums import FormStatus
from directory_console.models.form_models import (
    DRAFT_FIELDS,
    ExistingUserDraft,
    FormState,
    NewUserDraft,
    UserDraft,
    draft_from_user,
)
from directory_console.models.service_models import ServiceResult
from directory_console.models.user import User
from directory_console.services.base_service import BaseService
from directory_console.services.response_normalizer import normalize_user_record
from directory_console.utils.string_helpers import is_blank

__all__ = [
    "EMAIL_PATTERN",
    "FormController",
    "GENERIC_SAVE_ERROR",
    "validate_draft",
]

EMAIL_PATTERN: re.Pattern[str] = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

GENERIC_SAVE_ERROR: str = "Could not save the user. Please try again."

_REQUIRED_MESSAGES: dict[str, str] = {
    "username": "Username is required",
    "first_name": "First name is required",
    "last_name": "Last name is required",
    "email": "E-mail is required",
}
_INVALID_EMAIL_MESSAGE: str = "Invalid e-mail address"

# Fields that may only be written while creating a record.
_WRITE_ONCE_FIELDS: frozenset[str] = frozenset({"username"})

SuccessCallback = Callable[[], Awaitable[None]]


def validate_draft(draft: UserDraft) -> dict[str, str]:
    """Per-field error messages for *draft*; an empty dict means valid.

    Phone, organisation and role are optional.
    """
    errors: dict[str, str] = {}
    for field, message in _REQUIRED_MESSAGES.items():
        if is_blank(getattr(draft, field)):
            errors[field] = message
    if "email" not in errors and not EMAIL_PATTERN.match(draft.email):
        errors["email"] = _INVALID_EMAIL_MESSAGE
    return errors


class FormController(BaseService):
    """Create/edit form state for a single form instance.

    Parameters
    ----------
    gateway:
        Remote gateway used for create/update.
    logger:
        Structured logger instance.
    settle_delay_s:
        Pause between a successful save and the success callback.
    on_success:
        Awaited once per successful save, after the settle delay.
    operator:
        Actor name written to audit lines.
    """

    def __init__(
        self,
        gateway: UserGateway,
        logger: StructuredLogger,
        settle_delay_s: float = 1.0,
        on_success: Optional[SuccessCallback] = None,
        operator: str = "console",
    ) -> None:
        super().__init__(logger, operator)
        self._gateway = gateway
        self._settle_delay_s = settle_delay_s
        self._on_success = on_success
        self._state = FormState()

    # ------------------------------------------------------------------
    # Observable state
    # ------------------------------------------------------------------

    @property
    def state(self) -> FormState:
        return self._state

    @property
    def draft(self) -> UserDraft:
        return self._state.draft

    @property
    def errors(self) -> dict[str, str]:
        return dict(self._state.errors)

    @property
    def status(self) -> FormStatus:
        return self._state.status

    @property
    def general_error(self) -> Optional[str]:
        return self._state.general_error

    @property
    def success(self) -> bool:
        return self._state.success

    @property
    def is_editing(self) -> bool:
        """``True`` while the draft is an edit of a stored record."""
        return isinstance(self._state.draft, ExistingUserDraft)

    @property
    def can_submit(self) -> bool:
        return self._state.status not in (FormStatus.SUBMITTING, FormStatus.SUCCEEDED)

    @property
    def title(self) -> str:
        return "Edit user" if self.is_editing else "New user"

    def is_read_only(self, field: str) -> bool:
        """Whether *field* must render non-editable for the current draft."""
        return self.is_editing and field in _WRITE_ONCE_FIELDS

    # ------------------------------------------------------------------
    # Draft editing
    # ------------------------------------------------------------------

    def load(self, user: Optional[User] = None) -> None:
        """Populate the draft from *user*, or reset to an empty new-user draft."""
        draft: UserDraft = draft_from_user(user) if user is not None else NewUserDraft()
        self._state = FormState(draft=draft)

    def set_field(self, name: str, value: Optional[str]) -> None:
        """Update one draft field and clear its error.

        Raises:
            ValueError: If *name* is not a form field, or is read-only
                for the current draft.
        """
        if name not in DRAFT_FIELDS:
            raise ValueError(f"Unknown form field: '{name}'")
        if self.is_read_only(name):
            raise ValueError(f"Field '{name}' cannot be changed on an existing user")

        setattr(self._state.draft, name, value or "")
        if name in self._state.errors:
            errors = dict(self._state.errors)
            del errors[name]
            self._state.errors = errors
        if self._state.status == FormStatus.FAILED:
            self._state.status = FormStatus.IDLE

    def validate(self) -> dict[str, str]:
        """Validate the draft, record the field errors, and return them."""
        errors = validate_draft(self._state.draft)
        self._state.errors = errors
        return dict(errors)

    def cancel(self) -> None:
        """Drop the draft and all transient state without touching the gateway."""
        self._state = FormState()

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    async def submit(self) -> ServiceResult[User]:
        """Validate, then create or update through the gateway.

        Returns a failed result without any remote call when the draft is
        invalid, a submission is already in flight, or a saved form is
        still waiting out its settle delay.
        """
        if not self.can_submit:
            return ServiceResult(
                success=False,
                error="A submission is already in progress.",
                status_code=409,
            )

        self._state.status = FormStatus.VALIDATING
        self._state.general_error = None
        errors = self.validate()
        if errors:
            self._state.status = FormStatus.FAILED
            return ServiceResult(
                success=False,
                error="Please correct the highlighted fields.",
                status_code=422,
            )

        self._state.status = FormStatus.SUBMITTING
        draft = self._state.draft
        payload = draft.to_payload()
        action = "UPDATE" if isinstance(draft, ExistingUserDraft) else "CREATE"

        try:
            if isinstance(draft, ExistingUserDraft):
                raw = await self._gateway.update_user(payload)
            else:
                raw = await self._gateway.create_user(payload)
        except GatewayError as exc:
            message = exc.server_message or GENERIC_SAVE_ERROR
            self._state.status = FormStatus.FAILED
            self._state.general_error = message
            return self._gateway_fault(exc, message, f"Saving user '{draft.username}'")

        saved = normalize_user_record(raw, self._logger)
        entity_id = (
            saved.user_uid if saved is not None
            else getattr(draft, "user_uid", draft.username)
        )
        self._audit(action, entity_id, {"username": draft.username})

        self._state.status = FormStatus.SUCCEEDED
        self._state.success = True

        await asyncio.sleep(self._settle_delay_s)
        if self._on_success is not None:
            await self._on_success()
        self._state = FormState()

        return ServiceResult(
            success=True,
            data=saved,
            status_code=200 if action == "UPDATE" else 201,
        )
