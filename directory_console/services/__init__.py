"""
Console Services Package.

The ``create_console()`` factory wires the gateway into a
:class:`DirectoryStore`, returning the owned store the UI layer consumes.
There is no module-level store: every caller gets its own instance and is
responsible for ``aclose()``.
"""

from __future__ import annotations

from typing import Optional

from directory_console.config import AppConfig
from directory_console.gateway.base import UserGateway
from directory_console.gateway.http_gateway import HttpUserGateway
from directory_console.logger import StructuredLogger, get_logger
from directory_console.services.directory_store import DirectoryStore
from directory_console.services.form_controller import FormController

__all__ = [
    "DirectoryStore",
    "FormController",
    "create_console",
]


def create_console(
    config: AppConfig,
    gateway: Optional[UserGateway] = None,
    logger: Optional[StructuredLogger] = None,
) -> DirectoryStore:
    """
    Wire the gateway and store together.

    Args:
        config: Application configuration.
        gateway: Gateway to use; defaults to an ``HttpUserGateway`` on
            ``config.API_BASE_URL``.
        logger: Logger for the store and its forms.

    Returns:
        An unmounted ``DirectoryStore``.  Call ``mount()`` (or use it as an
        async context manager) before reading state.
    """
    store_logger = logger or get_logger("directory")
    if gateway is None:
        gateway = HttpUserGateway(
            base_url=config.API_BASE_URL,
            logger=get_logger("gateway"),
        )

    return DirectoryStore(
        gateway=gateway,
        logger=store_logger,
        settle_delay_s=config.FORM_SETTLE_DELAY_S,
        filter_from_snapshot=config.FILTER_FROM_SNAPSHOT,
        operator=config.CONSOLE_OPERATOR,
    )
