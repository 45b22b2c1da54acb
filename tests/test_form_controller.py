from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from directory_console.gateway.base import GatewayError
from directory_console.models.enums import FormStatus
from directory_console.models.form_models import ExistingUserDraft, NewUserDraft
from directory_console.models.user import Role
from directory_console.services.form_controller import (
    GENERIC_SAVE_ERROR,
    FormController,
)


def _form(gateway, logger, **kwargs) -> FormController:
    return FormController(gateway=gateway, logger=logger, settle_delay_s=0, **kwargs)


def _fill_valid(form: FormController) -> None:
    form.set_field("username", "dora")
    form.set_field("first_name", "Dora")
    form.set_field("last_name", "Klein")
    form.set_field("email", "dora@example.com")


# ---------------------------------------------------------------------------
# load / set_field / validate
# ---------------------------------------------------------------------------


def test_empty_draft_requires_the_four_mandatory_fields(logger) -> None:
    form = _form(AsyncMock(), logger)
    form.load(None)
    errors = form.validate()
    assert set(errors) == {"username", "first_name", "last_name", "email"}
    assert not {"phone", "organisation", "role"} & set(errors)


def test_whitespace_only_values_count_as_missing(logger) -> None:
    form = _form(AsyncMock(), logger)
    _fill_valid(form)
    form.set_field("first_name", "   ")
    assert set(form.validate()) == {"first_name"}


@pytest.mark.parametrize(
    "email, valid",
    [
        ("a@b", False),
        ("a@b.com", True),
        ("no-at-sign.com", False),
        ("with space@b.com", False),
        ("first.last@sub.example.org", True),
    ],
)
def test_email_pattern(logger, email, valid) -> None:
    form = _form(AsyncMock(), logger)
    _fill_valid(form)
    form.set_field("email", email)
    assert ("email" not in form.validate()) is valid


def test_load_existing_user_takes_first_membership_and_first_role(logger, acme_users) -> None:
    anna = acme_users[0]
    anna.organisations[0].roles.append(Role(role_name="USER"))
    form = _form(AsyncMock(), logger)
    form.load(anna)

    draft = form.draft
    assert isinstance(draft, ExistingUserDraft)
    assert draft.user_uid == "uid-a"
    assert (draft.organisation, draft.role) == ("Acme", "ADMIN")
    assert form.is_editing
    assert form.title == "Edit user"


def test_load_member_without_roles_has_empty_role(logger, acme_users) -> None:
    form = _form(AsyncMock(), logger)
    form.load(acme_users[1])
    assert (form.draft.organisation, form.draft.role) == ("Acme", "")


def test_load_none_resets_to_new_draft(logger, acme_users) -> None:
    form = _form(AsyncMock(), logger)
    form.load(acme_users[0])
    form.validate()
    form.load(None)
    assert isinstance(form.draft, NewUserDraft)
    assert form.errors == {}
    assert form.status == FormStatus.IDLE
    assert not form.success


def test_username_is_read_only_when_editing(logger, acme_users) -> None:
    form = _form(AsyncMock(), logger)
    form.load(acme_users[2])
    assert form.is_read_only("username")
    assert not form.is_read_only("first_name")
    with pytest.raises(ValueError, match="cannot be changed"):
        form.set_field("username", "renamed")
    assert form.draft.username == "carla"


def test_username_is_editable_when_creating(logger) -> None:
    form = _form(AsyncMock(), logger)
    form.load(None)
    assert not form.is_read_only("username")
    form.set_field("username", "neo")
    assert form.draft.username == "neo"


def test_set_field_clears_only_that_fields_error(logger) -> None:
    form = _form(AsyncMock(), logger)
    form.validate()
    form.set_field("username", "x")
    assert "username" not in form.errors
    assert "email" in form.errors


def test_unknown_field_is_rejected(logger) -> None:
    with pytest.raises(ValueError, match="Unknown form field"):
        _form(AsyncMock(), logger).set_field("password", "secret")


# ---------------------------------------------------------------------------
# submit
# ---------------------------------------------------------------------------


async def test_invalid_submit_fails_without_remote_call(logger) -> None:
    gateway = AsyncMock()
    form = _form(gateway, logger)
    result = await form.submit()

    assert not result.success
    assert form.status == FormStatus.FAILED
    assert "email" in form.errors
    gateway.create_user.assert_not_called()
    gateway.update_user.assert_not_called()


async def test_editing_after_failure_returns_to_idle(logger) -> None:
    form = _form(AsyncMock(), logger)
    await form.submit()
    form.set_field("username", "x")
    assert form.status == FormStatus.IDLE


async def test_new_draft_submits_through_create(logger) -> None:
    gateway = AsyncMock()
    gateway.create_user.return_value = {"userUid": "new-1", "username": "dora"}
    form = _form(gateway, logger)
    form.load(None)
    _fill_valid(form)

    result = await form.submit()

    assert result.success
    assert result.status_code == 201
    assert result.data.user_uid == "new-1"
    gateway.update_user.assert_not_called()
    payload = gateway.create_user.await_args.args[0]
    assert payload == {
        "username": "dora",
        "firstname": "Dora",
        "lastname": "Klein",
        "mail": "dora@example.com",
        "phone": "",
        "organisation": "",
        "role": "",
    }


async def test_existing_draft_submits_through_update(logger, acme_users) -> None:
    gateway = AsyncMock()
    gateway.update_user.return_value = {"userUid": "uid-a", "username": "anna"}
    form = _form(gateway, logger)
    form.load(acme_users[0])
    form.set_field("phone", "+49 222")

    result = await form.submit()

    assert result.success
    gateway.create_user.assert_not_called()
    payload = gateway.update_user.await_args.args[0]
    assert payload["userUid"] == "uid-a"
    assert payload["username"] == "anna"
    assert payload["phone"] == "+49 222"
    assert payload["organisation"] == "Acme"
    assert "kind" not in payload


async def test_success_signal_fires_after_settle_and_form_resets(logger) -> None:
    seen: list[tuple[FormStatus, bool]] = []
    form: FormController

    async def on_success() -> None:
        seen.append((form.status, form.success))

    gateway = AsyncMock()
    gateway.create_user.return_value = {"userUid": "n", "username": "dora"}
    form = _form(gateway, logger, on_success=on_success)
    _fill_valid(form)

    await form.submit()

    assert seen == [(FormStatus.SUCCEEDED, True)]
    assert form.status == FormStatus.IDLE
    assert not form.success


async def test_gateway_fault_prefers_server_message(logger) -> None:
    gateway = AsyncMock()
    gateway.create_user.side_effect = GatewayError(
        "HTTP 409", status_code=409, payload={"message": "Username already taken"}
    )
    on_success = AsyncMock()
    form = _form(gateway, logger, on_success=on_success)
    _fill_valid(form)

    result = await form.submit()

    assert not result.success
    assert result.status_code == 409
    assert form.status == FormStatus.FAILED
    assert form.general_error == "Username already taken"
    assert form.errors == {}
    on_success.assert_not_awaited()


async def test_gateway_fault_without_message_uses_generic_text(logger) -> None:
    gateway = AsyncMock()
    gateway.create_user.side_effect = GatewayError("connection refused")
    form = _form(gateway, logger)
    _fill_valid(form)

    result = await form.submit()

    assert form.general_error == GENERIC_SAVE_ERROR
    assert result.status_code == 500
    assert form.draft.username == "dora"


async def test_submit_is_rejected_while_in_flight(logger) -> None:
    gateway = AsyncMock()
    form = _form(gateway, logger)
    _fill_valid(form)
    form.state.status = FormStatus.SUBMITTING

    result = await form.submit()

    assert not result.success
    assert not form.can_submit
    gateway.create_user.assert_not_called()


async def test_resubmit_during_settle_delay_is_rejected(logger) -> None:
    retries = []
    form: FormController

    async def on_success() -> None:
        retries.append(await form.submit())

    gateway = AsyncMock()
    gateway.create_user.return_value = {"userUid": "n", "username": "dora"}
    form = _form(gateway, logger, on_success=on_success)
    _fill_valid(form)

    first = await form.submit()

    assert first.success
    assert [(r.success, r.status_code) for r in retries] == [(False, 409)]
    gateway.create_user.assert_awaited_once()


def test_cancel_resets_without_gateway(logger, acme_users) -> None:
    gateway = AsyncMock()
    form = _form(gateway, logger)
    form.load(acme_users[0])
    form.validate()
    form.cancel()

    assert isinstance(form.draft, NewUserDraft)
    assert form.errors == {}
    assert form.general_error is None
    assert gateway.mock_calls == []
