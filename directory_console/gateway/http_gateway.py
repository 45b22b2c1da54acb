"""
HTTP User Gateway.

``httpx``-backed implementation of :class:`UserGateway` talking to the
user store's REST API:

    GET    /users            list (optional query parameters)
    GET    /users/{uid}      single record (possibly enveloped)
    POST   /users            create
    PUT    /users            update (body carries ``userUid``)
    DELETE /users/{uid}      delete

One ``AsyncClient`` is shared by every call so cookies set by the store
persist for the whole session.  JSON is the only payload encoding.  No
timeout and no retry wrap the calls: a failed attempt surfaces
immediately as a ``GatewayError``.
"""

from __future__ import annotations

from typing import Optional

import httpx

from directory_console.gateway.base import GatewayError
from directory_console.logger import StructuredLogger
from directory_console.utils.string_helpers import JsonValue

_JSON_HEADERS: dict[str, str] = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


class HttpUserGateway:
    """REST gateway to the remote user store.

    Parameters
    ----------
    base_url:
        Shared base address of every call, e.g. ``http://localhost:8080/api``.
    logger:
        Structured logger instance.
    transport:
        Optional ``httpx`` transport; tests pass an ``httpx.MockTransport``.
    """

    def __init__(
        self,
        base_url: str,
        logger: StructuredLogger,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._logger = logger
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers=_JSON_HEADERS,
            timeout=None,
            transport=transport,
        )

    # ------------------------------------------------------------------
    # UserGateway operations
    # ------------------------------------------------------------------

    async def list_users(
        self, params: Optional[dict[str, str]] = None
    ) -> JsonValue:
        return await self._request("GET", "/users", params=params or None)

    async def get_user(self, user_uid: str) -> JsonValue:
        return await self._request("GET", f"/users/{user_uid}")

    async def create_user(self, payload: dict[str, JsonValue]) -> JsonValue:
        return await self._request("POST", "/users", json=payload)

    async def update_user(self, payload: dict[str, JsonValue]) -> JsonValue:
        return await self._request("PUT", "/users", json=payload)

    async def delete_user(self, user_uid: str) -> JsonValue:
        return await self._request("DELETE", f"/users/{user_uid}")

    async def aclose(self) -> None:
        await self._client.aclose()

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[dict[str, str]] = None,
        json: Optional[dict[str, JsonValue]] = None,
    ) -> JsonValue:
        """Send one request and return its decoded JSON body.

        Raises:
            GatewayError: On transport failure or a non-2xx status.
        """
        self._logger.debug("%s %s params=%s", method, path, params)
        try:
            response = await self._client.request(method, path, params=params, json=json)
        except httpx.HTTPError as exc:
            self._logger.error("%s %s failed: %s", method, path, exc)
            raise GatewayError(f"Request to {path} failed: {exc}") from exc

        if response.is_error:
            payload = _decode_body(response)
            self._logger.error(
                "%s %s returned %d: %s", method, path, response.status_code, payload,
            )
            raise GatewayError(
                f"{method} {path} returned HTTP {response.status_code}",
                status_code=response.status_code,
                payload=payload,
            )

        return _decode_body(response)


def _decode_body(response: httpx.Response) -> JsonValue:
    """Decode a JSON body; empty or non-JSON bodies become ``None``."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None
