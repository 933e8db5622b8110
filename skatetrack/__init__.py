"""
SkateTrack

Management dashboard for a skate-park rental business: session tracking,
shoe inventory, analytics, reporting and branding.

This package provides the session lifecycle, report aggregation and export
logic, and a Flask JSON API for the dashboard pages.
"""
from .models import Participant, Session, SessionBook, SessionStatus
from .services import SessionService, ReportService, ServiceFactory
from .ui import create_app, run_web_app
from .utils import compute_end_time, parse_time_of_day, APP_TITLE

__version__ = "1.0.0"

__all__ = [
    "Participant", "Session", "SessionBook", "SessionStatus",
    "SessionService", "ReportService", "ServiceFactory",
    "create_app", "run_web_app", "compute_end_time", "parse_time_of_day",
    "APP_TITLE"
]
