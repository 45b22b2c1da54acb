from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from directory_console.logger import StructuredLogger
from directory_console.models.user import User


@pytest.fixture(scope="session")
def logger(tmp_path_factory: pytest.TempPathFactory) -> StructuredLogger:
    log_file = tmp_path_factory.mktemp("logs") / "tests.log"
    return StructuredLogger(name="tests.directory_console", log_file=str(log_file))


@pytest.fixture
def acme_records() -> list[dict[str, object]]:
    """A: Acme/ADMIN, B: Acme without roles, C: no organisations."""
    return [
        {
            "userUid": "uid-a",
            "username": "anna",
            "firstname": "Anna",
            "lastname": "Schmidt",
            "mail": "anna@example.com",
            "organisations": [{"orgName": "Acme", "roles": [{"roleName": "ADMIN"}]}],
        },
        {
            "userUid": "uid-b",
            "username": "bernd",
            "firstName": "Bernd",
            "lastName": "Meyer",
            "email": "bernd@example.com",
            "organisations": [{"orgName": "Acme", "roles": []}],
        },
        {
            "userUid": "uid-c",
            "username": "carla",
            "firstname": "Carla",
            "lastname": "Vogel",
            "mail": "carla@example.org",
            "phone": "+49 111",
            "organisations": [],
        },
    ]


@pytest.fixture
def acme_users(acme_records: list[dict[str, object]]) -> list[User]:
    return [User.model_validate(r) for r in acme_records]


@pytest.fixture
def gateway(acme_records: list[dict[str, object]]) -> AsyncMock:
    """Gateway double answering list calls with the Acme records."""
    mock = AsyncMock()
    mock.list_users.return_value = {"_embedded": {"users": acme_records}}
    return mock
