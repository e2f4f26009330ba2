"""Rendering of a leave summary into the text lines shown to the user."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from hourly_leave.services.accrual import compute_bonus

if TYPE_CHECKING:
    from hourly_leave.services.accrual import BonusAmount, LeaveSummary

NOT_ENTITLED_MESSAGE = "有效月份未滿 6 個月，尚無特休。"


@dataclass
class SegmentView:
    """Display lines for one milestone."""

    heading: str
    entitlement_line: str
    bonus_line: str | None = None

    @property
    def lines(self) -> list[str]:
        out = [self.heading, self.entitlement_line]
        if self.bonus_line is not None:
            out.append(self.bonus_line)
        return out


@dataclass
class SummaryView:
    """Everything the result panel shows, already formatted."""

    period: str
    valid_months: str
    total_hours: str
    seniority: str
    entitled: bool
    message: str | None = None
    total_line: str | None = None
    total_bonus_line: str | None = None
    segments: list[SegmentView] = field(default_factory=list)

    @property
    def result_lines(self) -> list[str]:
        """Lines of the result box in display order."""
        if not self.entitled:
            return [self.message or NOT_ENTITLED_MESSAGE]
        lines = [self.total_line or ""]
        if self.total_bonus_line is not None:
            lines.append(self.total_bonus_line)
        for segment in self.segments:
            lines.extend(segment.lines)
        return lines


def _hours_line(prefix: str, rounded: float, raw: float) -> str:
    return f"{prefix}：{rounded:.2f} 小時（真實：{raw:.2f} 小時）"


def _bonus_line(prefix: str, amount: BonusAmount) -> str:
    return f"{prefix}：{amount.rounded:.0f} 元（真實：{amount.raw:.0f} 元）"


def render_summary(summary: LeaveSummary, wage: float | None = None) -> SummaryView:
    """Format a summary the way the result panel presents it.

    Bonus lines only appear for a positive wage. Below six valid months the
    result box holds a single "not yet entitled" notice instead of zeros.
    """
    view = SummaryView(
        period=summary.period_text,
        valid_months=str(summary.valid_months),
        total_hours=f"{summary.total_hours:.1f}",
        seniority=summary.seniority_text,
        entitled=summary.entitled,
    )
    if not summary.entitled:
        view.message = NOT_ENTITLED_MESSAGE
        return view

    bonus = compute_bonus(summary, wage)
    view.total_line = _hours_line("累計總特休", summary.total_rounded, summary.total_raw)
    if bonus is not None:
        view.total_bonus_line = _bonus_line("累計總不休假獎金", bonus.total)

    for i, segment in enumerate(summary.segments):
        view.segments.append(
            SegmentView(
                heading=f"{segment.range_label}｜{segment.label}",
                entitlement_line=_hours_line("本期特休", segment.rounded, segment.raw),
                bonus_line=_bonus_line("本期不休假獎金", bonus.segments[i]) if bonus is not None else None,
            )
        )
    return view
