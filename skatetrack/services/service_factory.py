"""
Service factory for the SkateTrack dashboard.

Builds the service suite with its dependencies injected, so the web layer
and tests can swap the session book or the preference store.
"""
from datetime import datetime
from typing import Callable, List, Optional

from ..models import Session, SessionBook
from ..models.seed import seed_inventory, seed_session_book
from ..utils import DISPLAY_REFRESH_SECONDS, SWEEP_INTERVAL_SECONDS
from .branding_service import BrandingService
from .display_service import TvDisplayService
from .inventory_service import InventoryService
from .persistence_service import InMemoryKeyValueStore, KeyValueStore
from .report_service import ReportService
from .session_service import SessionService
from .timer_service import TimerService


class ServiceFactory:
    """Factory for creating service instances with their dependencies."""

    def __init__(self, branding_store: Optional[KeyValueStore] = None):
        self._branding_store = branding_store
        self._report_service: Optional[ReportService] = None

    def create_session_service(self, book: Optional[SessionBook] = None) -> SessionService:
        """
        Create SessionService over a session book.

        Args:
            book: Existing collection; defaults to a fresh copy of the seed sessions

        Returns:
            Configured SessionService instance
        """
        return SessionService(book if book is not None else seed_session_book())

    def create_inventory_service(self) -> InventoryService:
        return InventoryService(seed_inventory())

    def create_branding_service(self) -> BrandingService:
        """Create BrandingService and load stored preferences."""
        store = self._branding_store if self._branding_store is not None else InMemoryKeyValueStore()
        service = BrandingService(store)
        service.load()
        return service

    def create_timer_service(
        self,
        session_service: SessionService,
        display_service: Optional[TvDisplayService] = None,
        sweep_listener: Optional[Callable[[List[Session]], None]] = None,
    ) -> TimerService:
        """
        Create TimerService with the sweep and display refresh timers registered.

        Args:
            session_service: Service whose active sessions are swept
            display_service: Live display to refresh, if any
            sweep_listener: Called with the sessions each sweep completed
        """
        def _sweep(now: datetime) -> None:
            completed = session_service.sweep_expired(now)
            if sweep_listener is not None:
                sweep_listener(completed)

        timers = TimerService()
        timers.register("sweep", SWEEP_INTERVAL_SECONDS, _sweep)
        if display_service is not None:
            timers.register("display_refresh", DISPLAY_REFRESH_SECONDS, display_service.refresh)
        return timers

    def create_complete_service_suite(
        self,
        book: Optional[SessionBook] = None,
        sweep_listener: Optional[Callable[[List[Session]], None]] = None,
    ) -> dict:
        """
        Create a complete suite of services with proper dependencies.

        Returns:
            Dictionary containing all configured services
        """
        sessions = self.create_session_service(book)
        display = TvDisplayService(sessions)
        return {
            "sessions": sessions,
            "reports": self._get_report_service(),
            "inventory": self.create_inventory_service(),
            "branding": self.create_branding_service(),
            "display": display,
            "timers": self.create_timer_service(sessions, display, sweep_listener),
        }

    def _get_report_service(self) -> ReportService:
        """Get singleton report service."""
        if self._report_service is None:
            self._report_service = ReportService()
        return self._report_service
