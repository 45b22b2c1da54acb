from __future__ import annotations

import pytest

from directory_console.models.filter_models import FilterState
from directory_console.models.user import User
from directory_console.services.filter_engine import (
    matches_organisation,
    matches_text,
    visible,
)
from directory_console.services.organisation_index import build_organisation_index


def _uids(users: list[User]) -> list[str]:
    return [u.user_uid for u in users]


def test_empty_filter_returns_full_collection(acme_users) -> None:
    result = visible(acme_users, FilterState())
    assert result == acme_users
    assert result is not acme_users


def test_organisation_filter_keeps_members_with_and_without_roles(acme_users) -> None:
    assert _uids(visible(acme_users, FilterState(organisation="Acme"))) == ["uid-a", "uid-b"]


def test_text_filter_does_not_search_organisation_names(acme_users) -> None:
    assert visible(acme_users, FilterState(text="acme")) == []


@pytest.mark.parametrize(
    "term, expected",
    [
        ("ANNA", ["uid-a"]),
        ("meyer", ["uid-b"]),
        ("carla", ["uid-c"]),
        ("example.com", ["uid-a", "uid-b"]),
        ("@", ["uid-a", "uid-b", "uid-c"]),
    ],
)
def test_text_matches_any_of_four_fields_case_insensitively(acme_users, term, expected) -> None:
    assert _uids(visible(acme_users, FilterState(text=term))) == expected


def test_predicates_are_anded(acme_users) -> None:
    assert _uids(visible(acme_users, FilterState(text="bernd", organisation="Acme"))) == ["uid-b"]
    assert visible(acme_users, FilterState(text="carla", organisation="Acme")) == []


def test_organisation_match_is_exact(acme_users) -> None:
    assert visible(acme_users, FilterState(organisation="acme")) == []
    assert not matches_organisation(acme_users[0], "Acm")
    assert matches_organisation(acme_users[2], "")


def test_empty_term_matches_everyone(acme_users) -> None:
    assert all(matches_text(u, "") for u in acme_users)


@pytest.mark.parametrize(
    "filter_state",
    [
        FilterState(),
        FilterState(text="a"),
        FilterState(organisation="Acme"),
        FilterState(text="example", organisation="Acme"),
        FilterState(text="zzz"),
    ],
)
def test_visible_is_idempotent(acme_users, filter_state) -> None:
    once = visible(acme_users, filter_state)
    assert visible(once, filter_state) == once


def test_visible_does_not_mutate_input(acme_users) -> None:
    before = list(acme_users)
    visible(acme_users, FilterState(text="anna"))
    assert acme_users == before


def test_superseded_filters_do_not_compound(acme_users) -> None:
    visible(acme_users, FilterState(organisation="Acme"))
    assert _uids(visible(acme_users, FilterState(text="carla"))) == ["uid-c"]


def test_organisation_index_for_acme_scenario(acme_users) -> None:
    assert build_organisation_index(acme_users) == ["Acme"]


def test_organisation_index_is_sorted_unique_and_non_empty() -> None:
    users = [
        User.model_validate(
            {
                "userUid": "1",
                "organisations": [{"orgName": "Zeta"}, {"orgName": ""}, {"orgName": "Alpha"}],
            }
        ),
        User.model_validate(
            {"userUid": "2", "organisations": [{"orgName": "Alpha"}, {"orgName": "Mid"}]}
        ),
        User.model_validate({"userUid": "3"}),
    ]
    assert build_organisation_index(users) == ["Alpha", "Mid", "Zeta"]


def test_organisation_index_of_nothing_is_empty() -> None:
    assert build_organisation_index([]) == []
