"""Shared utility functions and models for the User Directory Console.

Convenience re-exports so consumers can import directly from
``directory_console.utils``.
"""

from directory_console.utils.audit import AuditEvent, log_audit_event
from directory_console.utils.string_helpers import (
    JsonValue,
    contains_casefold,
    is_blank,
)

__all__ = [
    "AuditEvent",
    "JsonValue",
    "contains_casefold",
    "is_blank",
    "log_audit_event",
]
