from __future__ import annotations

import math
from typing import TYPE_CHECKING, Self

from pydantic import BaseModel, Field, field_serializer, model_validator

from hourly_leave.models.enums import RecordField, SortDirection

if TYPE_CHECKING:
    from hourly_leave.models.record import MonthlyRecord


class RecordInput(BaseModel):
    """One row of the hours table as submitted by a client."""

    year: int = Field(ge=1, le=9999)
    month: int = Field(ge=1, le=12)
    hours: float | None = None


class RecordResponse(BaseModel):
    """One row of the hours table at its display position."""

    index: int
    year: int
    month: int
    hours: float | None
    valid: bool

    @field_serializer("hours")
    def _finite_hours(self, hours: float | None) -> float | None:
        # Non-finite values cannot be represented in JSON; they are reported
        # through ``valid`` instead.
        if hours is None or not math.isfinite(hours):
            return None
        return hours

    @classmethod
    def from_record(cls, index: int, record: MonthlyRecord) -> RecordResponse:
        return cls(index=index, year=record.year, month=record.month, hours=record.hours, valid=record.is_valid)


class RecordUpdateRequest(BaseModel):
    """Set one field of the record at a display position.

    ``hours`` accepts a number, numeric text, or blank/null to clear the cell.
    Booleans are kept as booleans so the store can reject them.
    """

    index: int = Field(ge=0)
    field: RecordField
    value: bool | float | str | None = None


class UpdateRecordsRequest(BaseModel):
    """Batch of edits applied all-or-nothing."""

    updates: list[RecordUpdateRequest] = Field(min_length=1)


class FillRecordsRequest(BaseModel):
    """Explicit start month for a bulk fill; defaults to the hire date."""

    start_year: int | None = Field(default=None, ge=1, le=9999)
    start_month: int | None = Field(default=None, ge=1, le=12)

    @model_validator(mode="after")
    def _validate_start(self) -> Self:
        if (self.start_year is None) != (self.start_month is None):
            msg = "start_year and start_month must be given together"
            raise ValueError(msg)
        return self


class RecordListResponse(BaseModel):
    """Records in display order."""

    items: list[RecordResponse]
    total: int
    sort_direction: SortDirection


class FillRecordsResponse(RecordListResponse):
    """Records after a bulk fill, plus how many were created."""

    created: int
