"""Day options for the hire-date picker."""

from __future__ import annotations

from calendar import monthrange

from fastapi import APIRouter, Query
from pydantic import BaseModel

calendar_router = APIRouter(
    prefix="/calendar",
    tags=["calendar"],
)


class DaysInMonthResponse(BaseModel):
    """Selectable days for a year and month."""

    year: int
    month: int
    days: list[int]


@calendar_router.get("/days", response_model=DaysInMonthResponse)
async def days_in_month(
    year: int = Query(ge=1, le=9999),
    month: int = Query(ge=1, le=12),
) -> DaysInMonthResponse:
    """List the valid days of a month, leap years included."""
    _, last_day = monthrange(year, month)
    return DaysInMonthResponse(year=year, month=month, days=list(range(1, last_day + 1)))
