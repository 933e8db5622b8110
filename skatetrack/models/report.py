"""Dataclasses representing revenue records and report summaries."""

from dataclasses import dataclass


@dataclass
class RevenueRecord:
    """A dated, revenue-bearing session as listed on the analytics page."""

    id: int
    date: str  # ISO yyyy-mm-dd
    name: str
    type: str  # "individual" or "group"
    participants: int
    start_time: str
    end_time: str
    duration: str
    shoe_sizes: str
    revenue: int


@dataclass
class DailySummary:
    """Aggregate of all records sharing one date. Recomputed on every query."""

    date: str
    total_revenue: int = 0
    total_skaters: int = 0
    session_count: int = 0
    average_session_duration: str = "1h"
    notes: str = ""

    def to_json(self) -> dict:
        return {
            "date": self.date,
            "totalRevenue": self.total_revenue,
            "totalSkaters": self.total_skaters,
            "sessionCount": self.session_count,
            "averageSessionDuration": self.average_session_duration,
            "notes": self.notes,
        }


@dataclass
class PeriodTotals:
    """Totals across every record in the selected range."""

    total_sessions: int = 0
    total_skaters: int = 0
    total_revenue: int = 0

    def to_json(self) -> dict:
        return {
            "totalSessions": self.total_sessions,
            "totalSkaters": self.total_skaters,
            "totalRevenue": self.total_revenue,
        }


@dataclass
class VisitorPoint:
    """One bar on the reports page chart (a weekday or a month)."""

    name: str
    visitors: int
    revenue: int
