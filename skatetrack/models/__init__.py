"""
Models package for the SkateTrack dashboard.

This package contains the core data models used throughout the application.
"""
from .session import (
    Participant, Session, SessionBook, SessionStatus, UndoSlot, TIME_OUT_STATUS
)
from .report import RevenueRecord, DailySummary, PeriodTotals, VisitorPoint
from .inventory import InventoryItem
from .branding import BrandingSettings, adjust_color

__all__ = [
    "Participant", "Session", "SessionBook", "SessionStatus", "UndoSlot",
    "TIME_OUT_STATUS", "RevenueRecord", "DailySummary", "PeriodTotals",
    "VisitorPoint", "InventoryItem", "BrandingSettings", "adjust_color"
]
