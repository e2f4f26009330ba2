# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import date

from pydantic import BaseModel, Field

from hourly_leave.models.enums import SortDirection
from hourly_leave.schemas.record import RecordResponse


class CreateWorksheetRequest(BaseModel):
    """Request body for creating a worksheet."""

    identifier: str = Field(default="", max_length=100)
    unit: str = Field(default="", max_length=255)
    wage: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    hire_date: date | None = None


class UpdateWorksheetRequest(BaseModel):
    """Partial profile update; omitted fields are left unchanged."""

    identifier: str | None = Field(default=None, max_length=100)
    unit: str | None = Field(default=None, max_length=255)
    wage: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    hire_date: date | None = None


class WorksheetResponse(BaseModel):
    """Response schema for a worksheet."""

    id: uuid.UUID
    identifier: str
    unit: str
    wage: float | None
    hire_date: date | None
    sort_direction: SortDirection
    records: list[RecordResponse]
    total: int
