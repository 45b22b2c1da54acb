"""
Base Service Class.

Shared plumbing for the stateful console components: the injected logger,
the operator name stamped on audit lines, and the translation of a
``GatewayError`` into a failed ``ServiceResult``.
"""

from __future__ import annotations

from typing import Optional

from directory_console.gateway.base import GatewayError
from directory_console.logger import StructuredLogger
from directory_console.models.service_models import ServiceResult
from directory_console.utils.audit import DetailValue, log_audit_event


class BaseService:
    """Base class for the store and form components."""

    def __init__(self, logger: StructuredLogger, operator: str = "console") -> None:
        self._logger: StructuredLogger = logger
        self._operator: str = operator

    def _gateway_fault(
        self, exc: GatewayError, message: str, context: str
    ) -> ServiceResult:
        """Log *exc* and wrap *message* in a failed result.

        Transport failures carry no status code and are reported as 500.
        """
        self._logger.error("%s failed: %s", context, exc)
        return ServiceResult(
            success=False,
            error=message,
            status_code=exc.status_code or 500,
        )

    def _audit(
        self,
        action: str,
        user_uid: str,
        details: Optional[dict[str, DetailValue]] = None,
    ) -> None:
        log_audit_event(
            logger=self._logger,
            action=action,
            entity_type="User",
            entity_id=user_uid,
            actor=self._operator,
            details=details,
        )
