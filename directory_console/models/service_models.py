"""
Service Layer Data Transfer Objects.

Pydantic envelope returned by store and form operations.
"""

from __future__ import annotations

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")

__all__ = ["ServiceResult"]


class ServiceResult(BaseModel, Generic[T]):
    """
    Standard service return envelope.

    Every store/form operation returns this in addition to updating its
    own observable state, so callers can branch on ``success`` without
    reading state back.  ``status_code`` mirrors the remote status when a
    gateway fault carried one.
    """

    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    status_code: int = 200
