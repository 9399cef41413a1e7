"""Pydantic schemas for rows coming back from the readings aggregates."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class AggregateRow(BaseModel):
    """MIN/MAX/SUM/rounded AVG over active readings.

    Every field is ``None`` when no active readings exist.
    """

    lowest: int | None = None
    highest: int | None = None
    total: int | None = None
    mean: int | None = Field(None, description="Database-rounded arithmetic mean")

    model_config = ConfigDict(from_attributes=True, frozen=True)

    @property
    def is_empty(self) -> bool:
        return self.total is None


class GroupedCount(BaseModel):
    """Occurrence count of one distinct stored value."""

    value: int
    count: int = Field(..., ge=1)

    model_config = ConfigDict(from_attributes=True, frozen=True)
