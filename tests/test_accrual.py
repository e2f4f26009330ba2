"""Tests for the accrual engine: half-hour rounding, milestone windows, totals and bonus."""

from __future__ import annotations

import math

import pytest

from hourly_leave.exceptions import LeaveError
from hourly_leave.models.enums import ErrorCode
from hourly_leave.models.record import MonthlyRecord
from hourly_leave.models.segment import (
    HALF_YEAR_BASE_HOURS,
    SEGMENT_DEFINITIONS,
    YEAR_BASE_HOURS,
    LeaveSegmentDefinition,
)
from hourly_leave.services.accrual import (
    ceil_to_half_hour,
    compute_bonus,
    compute_leave_summary,
    valid_sorted_records,
)


def _months(count: int, hours: float = 87.0, start_year: int = 2020, start_month: int = 1) -> list[MonthlyRecord]:
    """``count`` consecutive months with the same hours."""
    out = []
    index = start_year * 12 + start_month - 1
    for offset in range(count):
        year, month = divmod(index + offset, 12)
        out.append(MonthlyRecord(year=year, month=month + 1, hours=hours))
    return out


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------


def test_base_hours() -> None:
    assert YEAR_BASE_HOURS == 2088
    assert HALF_YEAR_BASE_HOURS == 1044


def test_segment_table_windows() -> None:
    windows = [(d.start_index, d.start_index + d.length) for d in SEGMENT_DEFINITIONS]
    assert windows == [(0, 6), (0, 12), (12, 24), (24, 36), (36, 48), (48, 60), (60, 72)]
    assert [d.entitlement_days for d in SEGMENT_DEFINITIONS] == [3, 7, 10, 14, 14, 15, 15]


# ---------------------------------------------------------------------------
# ceil_to_half_hour
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (0.0, 0.0),
        (0.1, 0.5),
        (0.5, 0.5),
        (0.51, 1.0),
        (12.0, 12.0),
        (12.01, 12.5),
        (12.5, 12.5),
        (55.2, 55.5),
    ],
)
def test_ceil_to_half_hour(value: float, expected: float) -> None:
    assert ceil_to_half_hour(value) == expected


def test_ceil_to_half_hour_tolerates_float_noise() -> None:
    """A value a few ulps above an exact half-hour is not pushed up a step."""
    assert ceil_to_half_hour(12.000000000000002) == 12.0
    assert ceil_to_half_hour(0.1 * 3 * 10) == 3.0


@pytest.mark.parametrize("value", [-1.0, -0.25, math.nan, math.inf, -math.inf])
def test_ceil_to_half_hour_degenerate_values(value: float) -> None:
    assert ceil_to_half_hour(value) == 0.0


# ---------------------------------------------------------------------------
# compute_leave_summary
# ---------------------------------------------------------------------------


def test_no_records_raises_no_data() -> None:
    with pytest.raises(LeaveError) as exc_info:
        compute_leave_summary([])
    assert exc_info.value.code == ErrorCode.NO_DATA
    assert exc_info.value.status_code == 400


def test_only_invalid_records_raises_no_data() -> None:
    records = [
        MonthlyRecord(year=2024, month=1, hours=None),
        MonthlyRecord(year=2024, month=2, hours=200.0),
    ]
    with pytest.raises(LeaveError, match="請至少輸入一筆工時"):
        compute_leave_summary(records)


def test_full_year_at_monthly_cap() -> None:
    """12 months at the 160 h cap: 1920 h against the 2088 h yearly baseline."""
    summary = compute_leave_summary(_months(12, hours=160.0))

    assert summary.valid_months == 12
    assert summary.total_hours == pytest.approx(1920.0)
    assert summary.seniority_text == "1 年 0 個月"
    assert summary.period_text == "2020-01 ~ 2020-12"

    labels = [s.label for s in summary.segments]
    assert labels == ["滿 6 個月", "滿 1 年"]

    half, one_year = summary.segments
    assert half.hours == pytest.approx(960.0)
    assert half.raw == pytest.approx(960 / 1044 * 8 * 3)
    assert half.rounded == 22.5
    assert one_year.hours == pytest.approx(1920.0)
    assert one_year.raw == pytest.approx(51.494, abs=1e-3)
    assert one_year.rounded == 51.5
    assert one_year.range_label == "2020-01 ~ 2020-12"
    assert summary.total_rounded == pytest.approx(74.0)


def test_full_baseline_window_earns_full_entitlement() -> None:
    """A window holding exactly 2088 h earns all seven days: 56 h.

    Twelve in-range months cannot reach 2088 h, so an 18-month window of
    116 h months stands in for the full-time year.
    """
    full_year = LeaveSegmentDefinition("滿 1 年", 0, 18, YEAR_BASE_HOURS, 7)
    summary = compute_leave_summary(_months(18, hours=116.0), definitions=(full_year,))
    (segment,) = summary.segments
    assert segment.hours == pytest.approx(2088.0)
    assert segment.raw == pytest.approx(56.0)
    assert segment.rounded == 56.0


def test_half_time_year_earns_half_entitlement() -> None:
    summary = compute_leave_summary(_months(12))
    half, one_year = summary.segments
    assert half.rounded == 12.0
    assert one_year.hours == pytest.approx(1044.0)
    assert one_year.raw == pytest.approx(28.0)
    assert one_year.rounded == 28.0

def test_five_months_reports_no_segment() -> None:
    summary = compute_leave_summary(_months(5))
    assert summary.valid_months == 5
    assert summary.segments == []
    assert summary.entitled is False
    assert summary.total_raw == 0
    assert summary.total_rounded == 0
    assert summary.seniority_text == "0 年 5 個月"


def test_half_year_at_half_time() -> None:
    """522 h over six months is half the 1044 h baseline: 12 h of leave."""
    summary = compute_leave_summary(_months(6, hours=87.0))
    assert summary.entitled is True
    assert len(summary.segments) == 1
    half = summary.segments[0]
    assert half.label == "滿 6 個月"
    assert half.hours == pytest.approx(522.0)
    assert half.raw == pytest.approx(12.0)
    assert half.rounded == 12.0


def test_overlapping_windows_reported_independently() -> None:
    """The 6-month and 1-year milestones both use the first records."""
    summary = compute_leave_summary(_months(12, hours=100.0))
    half, year = summary.segments
    assert half.hours == pytest.approx(600.0)
    assert year.hours == pytest.approx(1200.0)
    assert half.raw == pytest.approx(600 / 1044 * 8 * 3)
    assert year.raw == pytest.approx(1200 / 2088 * 8 * 7)


def test_second_year_uses_records_13_to_24() -> None:
    records = _months(12, hours=100.0) + _months(12, hours=87.0, start_year=2021)
    summary = compute_leave_summary(records)
    labels = [s.label for s in summary.segments]
    assert labels == ["滿 6 個月", "滿 1 年", "滿 2 年"]
    two_years = summary.segments[2]
    assert two_years.range_label == "2021-01 ~ 2021-12"
    assert two_years.hours == pytest.approx(1044.0)
    assert two_years.raw == pytest.approx(40.0)
    assert two_years.rounded == 40.0


def test_all_seven_milestones_at_72_months() -> None:
    summary = compute_leave_summary(_months(72, hours=145.0))
    assert [s.label for s in summary.segments] == [
        "滿 6 個月",
        "滿 1 年",
        "滿 2 年",
        "滿 3 年",
        "滿 4 年",
        "滿 5 年",
        "滿 6 年",
    ]
    assert summary.seniority_text == "6 年 0 個月"
    # 1740 h a year is 5/6 of the baseline.
    assert [s.raw for s in summary.segments] == pytest.approx([20.0, 140 / 3, 200 / 3, 280 / 3, 280 / 3, 100.0, 100.0])
    assert [s.rounded for s in summary.segments] == [20.0, 47.0, 67.0, 93.5, 93.5, 100.0, 100.0]
    assert summary.total_rounded == pytest.approx(521.0)
    assert [s.range_label for s in summary.segments[2:]] == [
        "2021-01 ~ 2021-12",
        "2022-01 ~ 2022-12",
        "2023-01 ~ 2023-12",
        "2024-01 ~ 2024-12",
        "2025-01 ~ 2025-12",
    ]


def test_months_above_cap_do_not_count() -> None:
    """Only 11 of these 12 months are valid, so the 1-year milestone is not reached."""
    records = _months(12)
    records[5] = MonthlyRecord(year=records[5].year, month=records[5].month, hours=174.0)
    summary = compute_leave_summary(records)
    assert summary.valid_months == 11
    assert [s.label for s in summary.segments] == ["滿 6 個月"]

def test_history_beyond_six_years_adds_no_milestone() -> None:
    summary = compute_leave_summary(_months(90))
    assert len(summary.segments) == 7
    assert summary.valid_months == 90
    assert summary.seniority_text == "7 年 6 個月"


def test_totals_are_sums_of_segments() -> None:
    records = _months(30, hours=123.4)
    summary = compute_leave_summary(records)
    assert summary.total_rounded == pytest.approx(sum(s.rounded for s in summary.segments))
    assert summary.total_raw == pytest.approx(sum(s.raw for s in summary.segments))


def test_display_order_does_not_matter() -> None:
    records = _months(14, hours=150.0)
    records[3] = MonthlyRecord(year=records[3].year, month=records[3].month, hours=20.0)
    forward = compute_leave_summary(records)
    backward = compute_leave_summary(list(reversed(records)))
    assert forward == backward


def test_engine_is_idempotent() -> None:
    records = _months(25, hours=140.5)
    assert compute_leave_summary(records) == compute_leave_summary(records)


def test_invalid_records_are_skipped_not_counted() -> None:
    records = _months(6, hours=87.0)
    records.append(MonthlyRecord(year=2019, month=12, hours=None))
    records.append(MonthlyRecord(year=2019, month=11, hours=161.0))
    summary = compute_leave_summary(records)
    assert summary.valid_months == 6
    assert summary.period_text == "2020-01 ~ 2020-06"


def test_fractional_hours_accepted() -> None:
    records = _months(6, hours=12.02)
    summary = compute_leave_summary(records)
    assert summary.total_hours == pytest.approx(72.12)


def test_valid_sorted_records_chronological() -> None:
    records = [
        MonthlyRecord(year=2024, month=3, hours=1.0),
        MonthlyRecord(year=2023, month=12, hours=1.0),
        MonthlyRecord(year=2024, month=1, hours=None),
    ]
    assert [(r.year, r.month) for r in valid_sorted_records(records)] == [(2023, 12), (2024, 3)]


# ---------------------------------------------------------------------------
# compute_bonus
# ---------------------------------------------------------------------------


def test_bonus_none_without_wage() -> None:
    summary = compute_leave_summary(_months(12))
    assert compute_bonus(summary, None) is None
    assert compute_bonus(summary, 0) is None


def test_bonus_per_segment_and_total() -> None:
    summary = compute_leave_summary(_months(6, hours=90.0))
    bonus = compute_bonus(summary, 190.0)
    assert bonus is not None
    segment = summary.segments[0]
    assert bonus.segments[0].raw == pytest.approx(segment.raw * 190)
    assert bonus.segments[0].rounded == pytest.approx(segment.rounded * 190)
    assert bonus.total.rounded == pytest.approx(summary.total_rounded * 190)
    assert bonus.total.raw == pytest.approx(summary.total_raw * 190)
