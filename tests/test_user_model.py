from __future__ import annotations

import pytest
from pydantic import ValidationError

from directory_console.models.user import User


def test_legacy_camel_case_names_map_to_canonical_fields() -> None:
    user = User.model_validate(
        {"userUid": "1", "username": "u", "firstName": "Max", "lastName": "Muster", "email": "m@x.de"}
    )
    assert (user.first_name, user.last_name, user.email) == ("Max", "Muster", "m@x.de")


def test_lowercase_spelling_wins_when_both_present() -> None:
    user = User.model_validate(
        {"userUid": "1", "firstname": "Max", "firstName": "Maximilian", "mail": "a@b.de", "email": "c@d.de"}
    )
    assert user.first_name == "Max"
    assert user.email == "a@b.de"


def test_empty_preferred_spelling_falls_back_to_alternate() -> None:
    user = User.model_validate({"userUid": "1", "firstname": "", "firstName": "Max"})
    assert user.first_name == "Max"


def test_numeric_id_is_accepted_as_string() -> None:
    assert User.model_validate({"id": 42}).user_uid == "42"


def test_missing_identity_is_rejected() -> None:
    with pytest.raises(ValidationError):
        User.model_validate({"username": "nobody"})


def test_null_fields_and_memberships_are_tolerated() -> None:
    user = User.model_validate(
        {"userUid": "1", "username": None, "organisations": [{"orgName": None, "roles": None}]}
    )
    assert user.username == ""
    assert user.organisations[0].org_name == ""
    assert user.organisations[0].roles == []


def test_deleted_flag_absent_stays_none() -> None:
    assert User.model_validate({"userUid": "1"}).deleted is None
    assert User.model_validate({"userUid": "1", "deleted": False}).deleted is False


def test_convenience_accessors(acme_users) -> None:
    anna, _, carla = acme_users
    assert anna.organisation_names() == ["Acme"]
    assert carla.organisation_names() == []
    assert User.model_validate({"userUid": "1", "firstName": "Max"}).full_name == "Max"


@pytest.mark.parametrize("raw, expected", [(491234, "491234"), (491234.0, "491234"), ("+49 1", "+49 1")])
def test_numeric_phone_is_read_as_text(raw, expected) -> None:
    user = User.model_validate({"userUid": "1", "phone": raw})
    assert user.phone == expected
