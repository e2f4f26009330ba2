from __future__ import annotations

import enum


class ErrorCode(enum.StrEnum):
    """Machine-readable reason a leave operation was refused."""

    EMPTY_FIELD = "EMPTY_FIELD"
    OUT_OF_RANGE = "OUT_OF_RANGE"
    NO_DATA = "NO_DATA"
    FUTURE_START = "FUTURE_START"
    MISSING_HIRE_DATE = "MISSING_HIRE_DATE"
    DUPLICATE_MONTH = "DUPLICATE_MONTH"
    RECORD_NOT_FOUND = "RECORD_NOT_FOUND"
    WORKSHEET_NOT_FOUND = "WORKSHEET_NOT_FOUND"


class IssueKind(enum.StrEnum):
    """Problem found on a single hours cell."""

    EMPTY = "EMPTY"
    INVALID = "INVALID"


class SortDirection(enum.StrEnum):
    """Display order of the record table."""

    DESC = "DESC"
    ASC = "ASC"


class RecordField(enum.StrEnum):
    """Editable column of a monthly record."""

    YEAR = "year"
    MONTH = "month"
    HOURS = "hours"
