from hourly_leave.models.enums import ErrorCode, IssueKind, RecordField, SortDirection
from hourly_leave.models.record import MAX_MONTHLY_HOURS, MIN_MONTHLY_HOURS, MonthlyRecord
from hourly_leave.models.segment import (
    HALF_YEAR_BASE_HOURS,
    HOURS_PER_DAY,
    MIN_ENTITLED_MONTHS,
    SEGMENT_DEFINITIONS,
    YEAR_BASE_HOURS,
    LeaveSegmentDefinition,
)

__all__ = [
    "HALF_YEAR_BASE_HOURS",
    "HOURS_PER_DAY",
    "MAX_MONTHLY_HOURS",
    "MIN_ENTITLED_MONTHS",
    "MIN_MONTHLY_HOURS",
    "SEGMENT_DEFINITIONS",
    "YEAR_BASE_HOURS",
    "ErrorCode",
    "IssueKind",
    "LeaveSegmentDefinition",
    "MonthlyRecord",
    "RecordField",
    "SortDirection",
]
