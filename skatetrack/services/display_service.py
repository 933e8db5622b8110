"""Live display (TV screen) showing the clock and recently ended sessions."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from ..models import SessionStatus
from ..utils import now_dt
from .session_service import SessionService


class TvDisplayService:
    """Snapshot builder for the wall-mounted display."""

    def __init__(self, session_service: SessionService):
        self.session_service = session_service
        self.last_refreshed: datetime = now_dt()
        self._ended: List[Dict[str, Any]] = self._read_ended()

    def _read_ended(self) -> List[Dict[str, Any]]:
        return [
            {
                "id": s.id,
                "name": s.name,
                "type": s.session_kind,
                "startTime": s.start_time,
                "endTime": s.end_time,
                "duration": s.duration,
            }
            for s in self.session_service.list_sessions()
            if s.status == SessionStatus.COMPLETED
        ]

    def refresh(self, now: Optional[datetime] = None) -> None:
        """Re-read ended sessions; driven by the one-minute display timer."""
        self.last_refreshed = now or now_dt()
        self._ended = self._read_ended()

    def snapshot(self, now: Optional[datetime] = None) -> Dict[str, Any]:
        now = now or now_dt()
        return {
            "clock": now.strftime("%I:%M:%S %p"),
            "date": now.strftime("%A, %B %d, %Y"),
            "lastRefreshed": self.last_refreshed.strftime("%I:%M:%S %p"),
            "endedSessions": list(self._ended),
        }
