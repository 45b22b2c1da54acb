"""
In-Memory User Gateway.

A self-contained :class:`UserGateway` that keeps records in a dict, for
offline demos and tests.  Records are stored in the store's wire format
so everything read back goes through the same normalisation as real
responses.
"""

from __future__ import annotations

import copy
import uuid
from typing import Iterable, Literal, Optional

from directory_console.gateway.base import GatewayError
from directory_console.utils.string_helpers import JsonValue

ListShape = Literal["embedded", "bare", "content"]


class InMemoryUserGateway:
    """Dict-backed user store.

    Parameters
    ----------
    records:
        Initial wire-format records; each must carry ``userUid``.
    list_shape:
        Response shape produced by :meth:`list_users`.
    """

    def __init__(
        self,
        records: Optional[Iterable[dict[str, JsonValue]]] = None,
        list_shape: ListShape = "embedded",
    ) -> None:
        self._records: dict[str, dict[str, JsonValue]] = {}
        for record in records or ():
            self._records[str(record["userUid"])] = copy.deepcopy(record)
        self._list_shape: ListShape = list_shape
        self.closed = False

    async def list_users(
        self, params: Optional[dict[str, str]] = None
    ) -> JsonValue:
        users: list[JsonValue] = [copy.deepcopy(r) for r in self._records.values()]
        if self._list_shape == "bare":
            return users
        if self._list_shape == "content":
            return {"content": users, "totalElements": len(users)}
        return {"_embedded": {"users": users}}

    async def get_user(self, user_uid: str) -> JsonValue:
        return copy.deepcopy(self._require(user_uid))

    async def create_user(self, payload: dict[str, JsonValue]) -> JsonValue:
        username = str(payload.get("username") or "")
        if any(r.get("username") == username for r in self._records.values()):
            raise GatewayError(
                "Username already exists",
                status_code=409,
                payload={"message": f"Username '{username}' already exists"},
            )
        user_uid = str(uuid.uuid4())
        record = _record_from_payload(payload, user_uid)
        self._records[user_uid] = record
        return copy.deepcopy(record)

    async def update_user(self, payload: dict[str, JsonValue]) -> JsonValue:
        user_uid = str(payload.get("userUid") or "")
        existing = self._require(user_uid)
        record = _record_from_payload(payload, user_uid)
        # Username is write-once on the server side too.
        record["username"] = existing.get("username")
        self._records[user_uid] = record
        return copy.deepcopy(record)

    async def delete_user(self, user_uid: str) -> JsonValue:
        self._require(user_uid)
        del self._records[user_uid]
        return {"deleted": user_uid}

    async def aclose(self) -> None:
        self.closed = True

    def _require(self, user_uid: str) -> dict[str, JsonValue]:
        record = self._records.get(user_uid)
        if record is None:
            raise GatewayError(
                f"User {user_uid} not found",
                status_code=404,
                payload={"message": "User not found"},
            )
        return record


def _record_from_payload(
    payload: dict[str, JsonValue], user_uid: str
) -> dict[str, JsonValue]:
    """Turn a flat form payload into a stored record.

    The single ``organisation``/``role`` pair becomes one membership; an
    organisation without a role is stored with an empty role list.
    """
    organisations: list[JsonValue] = []
    organisation = payload.get("organisation")
    if organisation:
        role = payload.get("role")
        roles: list[JsonValue] = [{"roleName": role}] if role else []
        organisations.append({"orgName": organisation, "roles": roles})
    return {
        "userUid": user_uid,
        "username": payload.get("username"),
        "firstname": payload.get("firstname"),
        "lastname": payload.get("lastname"),
        "mail": payload.get("mail"),
        "phone": payload.get("phone") or None,
        "organisations": organisations,
        "deleted": False,
    }
