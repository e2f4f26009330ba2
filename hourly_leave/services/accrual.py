"""Accrual engine: prorated statutory annual leave from monthly hours worked."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from hourly_leave.exceptions import LeaveError
from hourly_leave.models.enums import ErrorCode
from hourly_leave.models.record import format_year_month
from hourly_leave.models.segment import HOURS_PER_DAY, MIN_ENTITLED_MONTHS, SEGMENT_DEFINITIONS

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from hourly_leave.models.record import MonthlyRecord
    from hourly_leave.models.segment import LeaveSegmentDefinition

NO_DATA_MESSAGE = "請至少輸入一筆工時"

# Absorbs float noise on exact half-hour multiples before rounding up.
_HALF_HOUR_EPSILON = 1e-9

# ---------------------------------------------------------------------------
# Result dataclasses
# ---------------------------------------------------------------------------


@dataclass
class SegmentResult:
    """Entitlement earned for one tenure milestone."""

    label: str
    range_label: str
    hours: float
    raw: float
    rounded: float


@dataclass
class LeaveSummary:
    """Projection of a record table onto the statutory milestones."""

    period_text: str
    valid_months: int
    total_hours: float
    seniority_years: int
    seniority_months: int
    segments: list[SegmentResult] = field(default_factory=list)
    total_raw: float = 0.0
    total_rounded: float = 0.0

    @property
    def seniority_text(self) -> str:
        return f"{self.seniority_years} 年 {self.seniority_months} 個月"

    @property
    def entitled(self) -> bool:
        return self.valid_months >= MIN_ENTITLED_MONTHS


@dataclass
class BonusAmount:
    """Unused-leave pay for a number of leave hours at an hourly wage."""

    raw: float
    rounded: float


@dataclass
class BonusBreakdown:
    """Bonus amounts per segment (same order as the summary) and in total."""

    wage: float
    segments: list[BonusAmount]
    total: BonusAmount


# ---------------------------------------------------------------------------
# Pure computation helpers
# ---------------------------------------------------------------------------


def ceil_to_half_hour(value: float) -> float:
    """Round up to the next multiple of 0.5 hours.

    Non-finite and non-positive values yield 0.
    """
    if not math.isfinite(value) or value <= 0:
        return 0.0
    return math.ceil(value * 2 - _HALF_HOUR_EPSILON) / 2


def valid_sorted_records(records: Iterable[MonthlyRecord]) -> list[MonthlyRecord]:
    """Return the records that count toward accrual, oldest first."""
    return sorted((r for r in records if r.is_valid), key=lambda r: (r.year, r.month))


def _range_label(first: MonthlyRecord, last: MonthlyRecord) -> str:
    return f"{format_year_month(first.year, first.month)} ~ {format_year_month(last.year, last.month)}"


def _compute_segment(
    definition: LeaveSegmentDefinition,
    valid: Sequence[MonthlyRecord],
) -> SegmentResult | None:
    """Evaluate one milestone against its own slice of the valid records.

    Returns None when there is not enough history to cover the window.
    """
    if len(valid) < definition.required_months:
        return None

    window = valid[definition.start_index : definition.start_index + definition.length]
    seg_hours = sum(r.hours or 0.0 for r in window)
    raw = seg_hours / definition.base_hours * HOURS_PER_DAY * definition.entitlement_days
    return SegmentResult(
        label=definition.label,
        range_label=_range_label(window[0], window[-1]),
        hours=seg_hours,
        raw=raw,
        rounded=ceil_to_half_hour(raw),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def compute_leave_summary(
    records: Iterable[MonthlyRecord],
    definitions: Sequence[LeaveSegmentDefinition] = SEGMENT_DEFINITIONS,
) -> LeaveSummary:
    """Compute the leave summary for a record table.

    Invalid records are skipped; the rest are taken in chronological order
    regardless of how the caller displays them. Each milestone is computed
    independently, so totals are plain sums with no cross-segment rounding.

    Raises LeaveError(NO_DATA) when no record is valid.
    """
    valid = valid_sorted_records(records)
    if not valid:
        raise LeaveError(ErrorCode.NO_DATA, NO_DATA_MESSAGE)

    count = len(valid)
    summary = LeaveSummary(
        period_text=_range_label(valid[0], valid[-1]),
        valid_months=count,
        total_hours=sum(r.hours or 0.0 for r in valid),
        seniority_years=count // 12,
        seniority_months=count % 12,
    )

    for definition in definitions:
        segment = _compute_segment(definition, valid)
        if segment is None:
            continue
        summary.segments.append(segment)
        summary.total_raw += segment.raw
        summary.total_rounded += segment.rounded

    return summary


def compute_bonus(summary: LeaveSummary, wage: float | None) -> BonusBreakdown | None:
    """Price the entitlement at an hourly wage.

    Returns None when no positive wage is given.
    """
    if wage is None or not math.isfinite(wage) or wage <= 0:
        return None
    return BonusBreakdown(
        wage=wage,
        segments=[BonusAmount(raw=s.raw * wage, rounded=s.rounded * wage) for s in summary.segments],
        total=BonusAmount(raw=summary.total_raw * wage, rounded=summary.total_rounded * wage),
    )
