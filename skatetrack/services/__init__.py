"""
Services package for the SkateTrack dashboard.

This package contains service classes that handle business logic.
Includes factory for dependency injection.
"""
from .session_service import (
    SessionService, NoValidParticipants, SessionAlreadyCompleted, SessionNotFound,
    filter_participants
)
from .report_service import ReportService, format_currency, format_display_date
from .export_service import to_delimited_text, to_workbook, export_filename, render_export
from .inventory_service import InventoryService
from .persistence_service import KeyValueStore, InMemoryKeyValueStore, JsonFileKeyValueStore
from .branding_service import BrandingService, BrandingValidationError
from .timer_service import TimerService
from .display_service import TvDisplayService
from .service_factory import ServiceFactory

__all__ = [
    "SessionService", "NoValidParticipants", "SessionAlreadyCompleted", "SessionNotFound",
    "filter_participants",
    "ReportService", "format_currency", "format_display_date",
    "to_delimited_text", "to_workbook", "export_filename", "render_export",
    "InventoryService", "KeyValueStore", "InMemoryKeyValueStore",
    "JsonFileKeyValueStore", "BrandingService", "BrandingValidationError",
    "TimerService", "TvDisplayService", "ServiceFactory"
]
