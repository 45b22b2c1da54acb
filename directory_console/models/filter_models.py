"""
Filter State Model.

The combined search/organisation filter shown above the user table.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator


class FilterState(BaseModel):
    """Free-text term plus a single organisation selection.

    An empty ``organisation`` means "all organisations".
    """

    model_config = ConfigDict(frozen=True)

    text: str = ""
    organisation: str = ""

    @field_validator("text", "organisation", mode="before")
    @classmethod
    def _none_to_empty(cls, value: object) -> object:
        return "" if value is None else value

    @property
    def is_empty(self) -> bool:
        return not self.text and not self.organisation

