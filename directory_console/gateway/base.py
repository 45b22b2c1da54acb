"""
Remote Gateway Contract.

The five remote operations the console needs from the user store, and the
single fault type every implementation raises.  The core treats a gateway
as an opaque asynchronous boundary: it awaits a parsed JSON result or
catches ``GatewayError``.
"""

from __future__ import annotations

from typing import Optional, Protocol

from directory_console.utils.string_helpers import JsonValue

__all__ = ["GatewayError", "UserGateway"]


class GatewayError(Exception):
    """Any failure of a remote call (network, not-found, server validation).

    Attributes
    ----------
    status_code:
        HTTP-style status of the failed response, or ``None`` when the
        request never produced one (connection refused, DNS, ...).
    payload:
        Parsed response body of the failed call, if it had one.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        payload: JsonValue = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload

    @property
    def server_message(self) -> Optional[str]:
        """The ``message`` the server embedded in the fault body, if any."""
        if isinstance(self.payload, dict):
            message = self.payload.get("message")
            if isinstance(message, str) and message.strip():
                return message
        return None

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


class UserGateway(Protocol):
    """Common contract for user-store backends.

    Results are returned exactly as the store sent them (after JSON
    decoding); shape normalisation is the caller's job.
    """

    async def list_users(
        self, params: Optional[dict[str, str]] = None
    ) -> JsonValue:
        ...

    async def get_user(self, user_uid: str) -> JsonValue:
        ...

    async def create_user(self, payload: dict[str, JsonValue]) -> JsonValue:
        ...

    async def update_user(self, payload: dict[str, JsonValue]) -> JsonValue:
        ...

    async def delete_user(self, user_uid: str) -> JsonValue:
        ...

    async def aclose(self) -> None:
        ...
