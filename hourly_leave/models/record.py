from __future__ import annotations

import math

from pydantic import BaseModel, Field

MIN_MONTHLY_HOURS = 0.0
MAX_MONTHLY_HOURS = 160.0


class MonthlyRecord(BaseModel):
    """Hours worked in one calendar month.

    ``hours`` is ``None`` until the cell is filled in. It may also hold a
    number outside the accepted range; validation reports those instead of
    rejecting them at assignment time, so the table can be edited freely.
    """

    year: int = Field(ge=1, le=9999)
    month: int = Field(ge=1, le=12)
    hours: float | None = None

    @property
    def key(self) -> tuple[int, int]:
        return (self.year, self.month)

    @property
    def month_index(self) -> int:
        """Months since year 0, used for calendar arithmetic."""
        return self.year * 12 + (self.month - 1)

    @property
    def sort_key(self) -> int:
        return self.year * 100 + self.month

    @property
    def is_valid(self) -> bool:
        """True when the record contributes to the accrual computation."""
        if self.hours is None or not math.isfinite(self.hours):
            return False
        return MIN_MONTHLY_HOURS <= self.hours <= MAX_MONTHLY_HOURS


def format_year_month(year: int, month: int) -> str:
    return f"{year}-{month:02d}"


def from_month_index(index: int) -> tuple[int, int]:
    """Inverse of ``MonthlyRecord.month_index``."""
    return index // 12, index % 12 + 1
