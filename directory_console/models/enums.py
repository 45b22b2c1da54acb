"""
Shared Enumerations for Directory Console Models.

All string enumerations for type-safe state fields.
StrEnum values compare equal to their string equivalents.
"""

from __future__ import annotations
from enum import StrEnum


class LoadStatus(StrEnum):
    """Directory Store collection states.

    ``LOADING`` is re-entered on every explicit refresh.  ``ERROR`` keeps
    the previously loaded collection visible.
    """

    EMPTY = "EMPTY"
    LOADING = "LOADING"
    LOADED = "LOADED"
    ERROR = "ERROR"


class FormStatus(StrEnum):
    """Create/edit form submission lifecycle.

    ``FAILED`` leaves the fields editable with errors shown.
    ``SUCCEEDED`` returns to ``IDLE`` after the settle delay.
    """

    IDLE = "IDLE"
    VALIDATING = "VALIDATING"
    SUBMITTING = "SUBMITTING"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"


class DraftKind(StrEnum):
    """Discriminator for form drafts."""

    NEW = "new"
    EXISTING = "existing"
