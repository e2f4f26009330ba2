from __future__ import annotations

from pydantic import BaseModel, Field

from hourly_leave.models.enums import IssueKind
from hourly_leave.schemas.record import RecordInput


class ValidationIssueResponse(BaseModel):
    """An offending hours cell."""

    index: int
    year: int
    month: int
    kind: IssueKind


class ValidationResponse(BaseModel):
    """Outcome of scanning the hours table."""

    ok: bool
    checked: int
    empty_count: int
    invalid_count: int
    issues: list[ValidationIssueResponse]


class SegmentResponse(BaseModel):
    """Entitlement for one tenure milestone."""

    label: str
    range_label: str
    hours: float
    raw: float
    rounded: float
    bonus_raw: float | None = None
    bonus_rounded: float | None = None
    lines: list[str]


class CalculationResponse(BaseModel):
    """Leave summary with its rendered display lines."""

    period: str
    valid_months: int
    total_hours: float
    seniority_years: int
    seniority_months: int
    seniority_text: str
    entitled: bool
    total_raw: float
    total_rounded: float
    bonus_total_raw: float | None = None
    bonus_total_rounded: float | None = None
    message: str | None = None
    segments: list[SegmentResponse]
    lines: list[str]


class CalculateRequest(BaseModel):
    """Stateless calculation input."""

    records: list[RecordInput] = Field(default_factory=list)
    wage: float | None = Field(default=None, ge=0, allow_inf_nan=False)
