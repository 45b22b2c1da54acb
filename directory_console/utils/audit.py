"""
Structured Audit Logging Utility.

Every remote mutation (create, update, delete) issued from the console is
logged as a structured JSON object.  Provides a Pydantic-validated model
and a single function for consistent audit trail entries.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional, Union

from pydantic import BaseModel, Field

from directory_console.logger import StructuredLogger

__all__ = ["AuditEvent", "log_audit_event"]

# Flat scalars only; nested structures do not belong in the audit log.
DetailValue = Union[str, int, float, bool, None]


class AuditEvent(BaseModel):
    """Schema-validated representation of a single audit trail entry."""

    timestamp: str
    action: str
    entity_type: str
    entity_id: str
    actor: str
    details: dict[str, DetailValue] = Field(default_factory=dict)


def log_audit_event(
    logger: StructuredLogger,
    action: str,
    entity_type: str,
    entity_id: str,
    actor: str,
    details: Optional[dict[str, DetailValue]] = None,
) -> AuditEvent:
    """Log a structured JSON audit event and return it.

    Args:
        logger: The logger instance to write to.
        action: What happened (``"CREATE"``, ``"UPDATE"``, ``"DELETE"``).
        entity_type: Type of entity affected (``"User"``).
        entity_id: Id of the affected record, or the username when the
            store did not echo an id back.
        actor: Operator name the console runs as.
        details: Optional additional context.
    """
    event = AuditEvent(
        timestamp=datetime.now(timezone.utc).isoformat(),
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        actor=actor,
        details=details or {},
    )
    logger.info(
        "AUDIT %s %s %s by %s", action, entity_type, entity_id, actor,
        extra={"audit": event.model_dump()},
    )
    return event
