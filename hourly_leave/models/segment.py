from __future__ import annotations

from dataclasses import dataclass

WORK_DAYS_PER_WEEK = 5
HOURS_PER_DAY = 8
WEEKS_PER_YEAR = 52
# 365 days is 52 weeks plus one day.
EXTRA_DAYS_PER_YEAR = 1

YEAR_BASE_HOURS = WORK_DAYS_PER_WEEK * HOURS_PER_DAY * WEEKS_PER_YEAR + EXTRA_DAYS_PER_YEAR * HOURS_PER_DAY
HALF_YEAR_BASE_HOURS = YEAR_BASE_HOURS / 2

# Months of history needed before any leave is granted.
MIN_ENTITLED_MONTHS = 6


@dataclass(frozen=True)
class LeaveSegmentDefinition:
    """One statutory tenure milestone.

    ``start_index`` and ``length`` address a window of the chronologically
    sorted valid records, not calendar months.
    """

    label: str
    start_index: int
    length: int
    base_hours: float
    entitlement_days: int

    @property
    def required_months(self) -> int:
        """Smallest valid-record count for which this segment is reported."""
        return self.start_index + self.length


# Windows overlap on purpose: the 6-month and 1-year milestones both draw on
# the first records and are reported side by side.
SEGMENT_DEFINITIONS: tuple[LeaveSegmentDefinition, ...] = (
    LeaveSegmentDefinition("滿 6 個月", 0, 6, HALF_YEAR_BASE_HOURS, 3),
    LeaveSegmentDefinition("滿 1 年", 0, 12, YEAR_BASE_HOURS, 7),
    LeaveSegmentDefinition("滿 2 年", 12, 12, YEAR_BASE_HOURS, 10),
    LeaveSegmentDefinition("滿 3 年", 24, 12, YEAR_BASE_HOURS, 14),
    LeaveSegmentDefinition("滿 4 年", 36, 12, YEAR_BASE_HOURS, 14),
    LeaveSegmentDefinition("滿 5 年", 48, 12, YEAR_BASE_HOURS, 15),
    LeaveSegmentDefinition("滿 6 年", 60, 12, YEAR_BASE_HOURS, 15),
)
