"""Reporting helpers for the SkateTrack analytics and reports pages."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Mapping
from datetime import date, datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional, Sequence

from ..models import DailySummary, PeriodTotals, Session, VisitorPoint
from ..utils import (
    BUSY_DAY_NOTE, BUSY_DAY_THRESHOLD, CURRENCY_PREFIX, RANGE_KINDS,
    RANGE_WINDOW_DAYS, SHOE_SIZE_BUCKETS, now_dt
)

logger = logging.getLogger(__name__)

SUMMARY_HEADERS = ["Date", "Sessions", "Total Skaters", "Total Revenue", "Avg. Duration", "Notes"]
DETAIL_HEADERS = ["Date", "Name", "Type", "Participants", "Start Time", "End Time", "Duration", "Revenue"]
REVENUE_REPORT_HEADERS = ["Date", "Visitors", "Revenue"]


def _field(record: Any, *names: str, default: Any = None) -> Any:
    """Read the first present field from a mapping or an object."""
    for name in names:
        if isinstance(record, Mapping):
            if name in record:
                return record[name]
        elif hasattr(record, name):
            return getattr(record, name)
    return default


def _as_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value))


def format_currency(value: float) -> str:
    """
    Format an amount the way the dashboard shows money.

    Example:
        >>> format_currency(1200)
        'NPR 1,200'
    """
    return f"{CURRENCY_PREFIX} {value:,}"


def format_display_date(iso_date: str) -> str:
    """Format an ISO date as "Jun 14, 2023"."""
    return _as_date(iso_date).strftime("%b %d, %Y")


class ReportService:
    """
    Group dated records by day and build report tables.

    Records can be mappings or objects; they need ``date`` (ISO string),
    ``revenue`` and ``participants`` (or ``quantity``). ``duration`` is read
    when present.
    """

    # ------------------------------------------------------------------
    # Aggregation
    # ------------------------------------------------------------------
    @staticmethod
    def group_by_date(records: Iterable[Any]) -> Dict[str, List[Any]]:
        grouped: Dict[str, List[Any]] = {}
        for record in records:
            grouped.setdefault(str(_field(record, "date")), []).append(record)
        return grouped

    @staticmethod
    def summarize_day(day: str, records: Sequence[Any]) -> DailySummary:
        """
        Summarize the records of a single date.

        ``average_session_duration`` is a placeholder rule, not a mean:
        "1h 30m" when any record has a 2h duration, otherwise "1h".
        """
        total_revenue = sum(_field(r, "revenue", default=0) or 0 for r in records)
        total_skaters = sum(_field(r, "participants", "quantity", default=0) or 0 for r in records)
        session_count = len(records)

        average_duration = "1h"
        if any("2h" in str(_field(r, "duration", default="")) for r in records):
            average_duration = "1h 30m"

        return DailySummary(
            date=day,
            total_revenue=total_revenue,
            total_skaters=total_skaters,
            session_count=session_count,
            average_session_duration=average_duration,
            notes=BUSY_DAY_NOTE if session_count > BUSY_DAY_THRESHOLD else "",
        )

    def combined_daily_summary(self, records: Iterable[Any]) -> List[DailySummary]:
        """One summary per date, newest date first."""
        summaries = [
            self.summarize_day(day, day_records)
            for day, day_records in self.group_by_date(records).items()
        ]
        summaries.sort(key=lambda item: item.date, reverse=True)
        return summaries

    @staticmethod
    def period_totals(records: Iterable[Any]) -> PeriodTotals:
        records = list(records)
        return PeriodTotals(
            total_sessions=len(records),
            total_skaters=sum(_field(r, "participants", "quantity", default=0) or 0 for r in records),
            total_revenue=sum(_field(r, "revenue", default=0) or 0 for r in records),
        )

    # ------------------------------------------------------------------
    # Date ranges
    # ------------------------------------------------------------------
    @staticmethod
    def _range_bounds(
        range_kind: str,
        custom_range: Optional[Mapping[str, Any]],
        today: date,
    ) -> tuple:
        if range_kind not in RANGE_KINDS:
            raise ValueError(f"Unknown date range: {range_kind}")

        if range_kind == "today":
            return today, today
        if range_kind == "custom":
            if not custom_range or not custom_range.get("from"):
                raise ValueError("A custom range needs a start date")
            start = _as_date(custom_range["from"])
            end = _as_date(custom_range["to"]) if custom_range.get("to") else start
            if end < start:
                raise ValueError("Custom range ends before it starts")
            return start, end
        return today - timedelta(days=RANGE_WINDOW_DAYS[range_kind]), today

    def filter_by_range(
        self,
        records: Iterable[Any],
        range_kind: str,
        custom_range: Optional[Mapping[str, Any]] = None,
        today: Optional[date] = None,
    ) -> List[Any]:
        """
        Keep records whose calendar date falls inside the range (inclusive).

        Args:
            records: Dated records
            range_kind: today, week, month, year or custom
            custom_range: ``{"from": ..., "to": ...}`` for custom; "to" is optional
            today: Override for the current date

        Raises:
            ValueError: For an unknown range or a custom range without a start
        """
        today = today or now_dt().date()
        start, end = self._range_bounds(range_kind, custom_range, today)
        return [r for r in records if start <= _as_date(_field(r, "date")) <= end]

    def date_range_days(
        self,
        range_kind: str,
        custom_range: Optional[Mapping[str, Any]] = None,
        today: Optional[date] = None,
    ) -> List[str]:
        """Every ISO date covered by the range, oldest first."""
        today = today or now_dt().date()
        start, end = self._range_bounds(range_kind, custom_range, today)
        return [
            (start + timedelta(days=offset)).isoformat()
            for offset in range((end - start).days + 1)
        ]

    # ------------------------------------------------------------------
    # Report tables
    # ------------------------------------------------------------------
    @staticmethod
    def summary_rows(summaries: Iterable[DailySummary]) -> List[List[Any]]:
        return [
            [
                format_display_date(s.date),
                s.session_count,
                s.total_skaters,
                format_currency(s.total_revenue),
                s.average_session_duration,
                s.notes,
            ]
            for s in summaries
        ]

    @staticmethod
    def detail_rows(records: Iterable[Any]) -> List[List[Any]]:
        return [
            [
                format_display_date(_field(r, "date")),
                _field(r, "name", default=""),
                _field(r, "type", default=""),
                _field(r, "participants", "quantity", default=0),
                _field(r, "start_time", "startTime", default=""),
                _field(r, "end_time", "endTime", default=""),
                _field(r, "duration", default=""),
                format_currency(_field(r, "revenue", default=0) or 0),
            ]
            for r in records
        ]

    def analytics_export_rows(
        self,
        range_label: str,
        records: Sequence[Any],
        generated_at: Optional[datetime] = None,
    ) -> List[List[Any]]:
        """Single-table layout for the analytics text export."""
        generated_at = generated_at or now_dt()
        summaries = self.combined_daily_summary(records)
        title = "Custom Range" if range_label == "custom" else range_label
        return [
            [f"Analytics Report - {title}", generated_at.strftime("%m/%d/%Y %I:%M:%S %p")],
            [""],
            ["SUMMARY"],
            SUMMARY_HEADERS,
            *self.summary_rows(summaries),
            [""],
            ["DETAILS"],
            DETAIL_HEADERS,
            *self.detail_rows(records),
        ]

    def analytics_workbook_sheets(self, records: Sequence[Any]) -> Dict[str, List[List[Any]]]:
        summaries = self.combined_daily_summary(records)
        return {
            "Summary": [SUMMARY_HEADERS, *self.summary_rows(summaries)],
            "Details": [DETAIL_HEADERS, *self.detail_rows(records)],
        }

    @staticmethod
    def revenue_report_rows(
        time_range: str,
        points: Sequence[VisitorPoint],
        generated_at: Optional[datetime] = None,
    ) -> List[List[Any]]:
        """Visitors and revenue per weekday or month, with a total row."""
        generated_at = generated_at or now_dt()
        rows: List[List[Any]] = [
            ["Skate Park Analytics Report", generated_at.strftime("%m/%d/%Y %I:%M:%S %p")],
            ["Time Range", time_range],
            [""],
            REVENUE_REPORT_HEADERS,
        ]
        for point in points:
            rows.append([point.name, str(point.visitors), f"${point.revenue}"])

        total_visitors = sum(p.visitors for p in points)
        total_revenue = sum(p.revenue for p in points)
        rows.append([""])
        rows.append(["Total", str(total_visitors), f"${total_revenue}"])
        return rows

    @staticmethod
    def dashboard_report_rows(
        active_sessions: int,
        todays_visitors: int,
        todays_revenue: int,
        available_shoes: int,
        total_shoes: int,
        generated_at: Optional[datetime] = None,
    ) -> List[List[Any]]:
        generated_at = generated_at or now_dt()
        return [
            ["Dashboard Report", generated_at.strftime("%m/%d/%Y %I:%M:%S %p")],
            [""],
            ["Metric", "Value"],
            ["Active Sessions", active_sessions],
            ["Today's Visitors", todays_visitors],
            ["Revenue", format_currency(todays_revenue)],
            ["Available Shoes", f"{available_shoes}/{total_shoes}"],
        ]

    @staticmethod
    def shoe_size_distribution(sessions: Iterable[Session]) -> List[Dict[str, Any]]:
        """Count session participants per shoe-size bucket."""
        counter: Counter = Counter()
        for session in sessions:
            for participant in session.participants:
                try:
                    size = int(participant.shoe_size)
                except ValueError:
                    logger.warning("Skipping non-numeric shoe size %r", participant.shoe_size)
                    continue
                for label, low, high in SHOE_SIZE_BUCKETS:
                    if size >= low and (high is None or size <= high):
                        counter[label] += 1
                        break
        return [{"name": label, "value": counter.get(label, 0)} for label, _, _ in SHOE_SIZE_BUCKETS]
