"""
Session service for the SkateTrack dashboard.

This module owns the session lifecycle: creating and editing sessions,
ending them by hand or through the periodic sweep, and the single-slot undo
of the most recent end action.
"""
import logging
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from ..models import Participant, Session, SessionBook, SessionStatus, UndoSlot, TIME_OUT_STATUS
from ..utils import (
    DEFAULT_CREATED_BY, SESSION_TYPE_DURATIONS, compute_end_time,
    format_time_of_day, has_elapsed, now_dt, parse_duration_token
)

logger = logging.getLogger(__name__)

EXPORT_HEADERS = [
    "ID", "Name", "Group", "Participants", "Shoe Sizes", "Start Time",
    "End Time", "Duration", "Status", "Notes", "Created By",
]
EDITABLE_FIELDS = {"name", "participants", "duration", "notes", "is_group"}


class NoValidParticipants(ValueError):
    """Raised when no participant has both a name and a shoe size."""

    def __init__(self, message: str = "Please add at least one participant with name and shoe size."):
        super().__init__(message)


class SessionAlreadyCompleted(ValueError):
    """Raised when ending a session that is not active."""

    def __init__(self, session_id: Any):
        self.session_id = session_id
        super().__init__(f"Session {session_id} is already completed")


class SessionNotFound(LookupError):
    """Raised when a session id does not match any session."""

    def __init__(self, session_id: Any):
        self.session_id = session_id
        super().__init__(f"Session {session_id} not found")


def filter_participants(participants: Iterable[Any]) -> List[Participant]:
    """
    Drop participants missing a name or a shoe size.

    Raises:
        ValueError: If the list or one of its entries is malformed
    """
    if participants is None:
        return []
    if not isinstance(participants, (list, tuple)):
        raise ValueError("Participants must be a list")
    people = [Participant.from_json(p) for p in participants]
    return [p for p in people if p.is_valid()]


def _require_flag(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"{field_name} must be true or false")
    return value


class SessionService:
    """
    Service for managing skate sessions and their status transitions.

    All operations run on the caller's thread; the dashboard serializes
    user actions and timer ticks, so no locking is done here.
    """

    def __init__(self, book: Optional[SessionBook] = None):
        self.book = book if book is not None else SessionBook()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def list_sessions(self) -> List[Session]:
        return list(self.book.sessions)

    def get_session(self, session_id: int) -> Session:
        session = self.book.find(session_id)
        if session is None:
            raise SessionNotFound(session_id)
        return session

    def search_sessions(self, query: str = "") -> List[Session]:
        """
        Filter sessions by name, participant name or shoe size.

        Names match case-insensitively; shoe sizes match as substrings.
        """
        query = (query or "").strip()
        if not query:
            return self.list_sessions()

        needle = query.lower()
        return [
            session for session in self.book.sessions
            if needle in session.name.lower()
            or any(
                needle in p.name.lower() or query in p.shoe_size
                for p in session.participants
            )
        ]

    def count_active(self) -> int:
        return sum(1 for s in self.book.sessions if s.status == SessionStatus.ACTIVE)

    @staticmethod
    def display_status(session: Session, now: Optional[datetime] = None) -> str:
        """Status to show for a session; "time-out" is derived and never stored."""
        if session.status == SessionStatus.ACTIVE and has_elapsed(session.end_time, now or now_dt()):
            return TIME_OUT_STATUS
        return session.status.value

    # ------------------------------------------------------------------
    # Lifecycle operations
    # ------------------------------------------------------------------
    def create_session(
        self,
        name: str,
        participants: Iterable[Any],
        session_type: str = "standard",
        notes: str = "",
        is_group: bool = False,
        created_by: str = DEFAULT_CREATED_BY,
    ) -> Session:
        """
        Create a new active session starting now.

        Args:
            name: Display name for the session
            participants: Participants or dicts with name and shoe size
            session_type: One of standard, extended, half-day, full-day
            notes: Free text
            is_group: Force the session to be shown as a group

        Returns:
            The new session, also placed first in the collection

        Raises:
            NoValidParticipants: If no participant has a name and shoe size
            ValueError: If the session type is unknown or is_group is not a boolean
        """
        valid = filter_participants(participants)
        if not valid:
            logger.warning("Rejected new session %r: no valid participants", name)
            raise NoValidParticipants()

        is_group = _require_flag(is_group, "is_group")
        session_type = str(session_type)
        if session_type not in SESSION_TYPE_DURATIONS:
            raise ValueError(f"Unknown session type: {session_type}")
        duration = SESSION_TYPE_DURATIONS[session_type]
        name = "" if name is None else str(name)

        start_time = format_time_of_day(now_dt())
        session = Session(
            id=self.book.allocate_id(),
            name=name.strip() or valid[0].name.strip(),
            participants=valid,
            start_time=start_time,
            duration=duration,
            end_time=compute_end_time(start_time, duration),
            status=SessionStatus.ACTIVE,
            is_group=is_group or len(valid) > 1,
            notes=str(notes or ""),
            created_by=created_by,
        )
        self.book.sessions.insert(0, session)
        logger.info("Created session %s (%s) %s-%s", session.id, session.name,
                    session.start_time, session.end_time)
        return session

    def edit_session(self, session_id: int, patch: Dict[str, Any]) -> Session:
        """
        Apply field changes to a session.

        Only name, participants, duration, notes and is_group may change. The
        patch is validated in full before anything is written.

        Raises:
            SessionNotFound: If the id is unknown
            NoValidParticipants: If the new participant list has no valid entry
            InvalidDurationFormat: If the new duration cannot be parsed
            ValueError: If the patch touches a read-only field
        """
        session = self.get_session(session_id)

        read_only = set(patch) - EDITABLE_FIELDS
        if read_only:
            raise ValueError(f"Fields cannot be edited: {', '.join(sorted(read_only))}")

        participants = session.participants
        if "participants" in patch:
            participants = filter_participants(patch["participants"])
            if not participants:
                logger.warning("Rejected edit of session %s: no valid participants", session_id)
                raise NoValidParticipants()

        is_group = session.is_group
        if "is_group" in patch:
            is_group = _require_flag(patch["is_group"], "is_group")

        duration = session.duration
        end_time = session.end_time
        if "duration" in patch and patch["duration"] != session.duration:
            duration = str(patch["duration"]).strip()
            parse_duration_token(duration)
            end_time = compute_end_time(session.start_time, duration)

        if "name" in patch:
            session.name = str(patch["name"] or "")
        if "notes" in patch:
            session.notes = str(patch["notes"] or "")
        session.participants = participants
        session.duration = duration
        session.end_time = end_time
        session.is_group = is_group or len(participants) > 1

        logger.info("Edited session %s", session_id)
        return session

    def end_session(self, session_id: int) -> Session:
        """
        Mark an active session completed and remember it for undo.

        Raises:
            SessionNotFound: If the id is unknown
            SessionAlreadyCompleted: If the session is not active; the undo slot is kept
        """
        session = self.get_session(session_id)
        if session.status != SessionStatus.ACTIVE:
            raise SessionAlreadyCompleted(session_id)
        self.book.last_ended = UndoSlot(session_id=session.id, previous_status=session.status)
        session.status = SessionStatus.COMPLETED
        logger.info("Ended session %s (%s)", session.id, session.name)
        return session

    def can_undo(self, session_id: Optional[int] = None) -> bool:
        slot = self.book.last_ended
        if slot is None:
            return False
        return session_id is None or slot.session_id == session_id

    def undo_last_end(self, session_id: Optional[int] = None) -> Optional[Session]:
        """
        Revert the most recent end action.

        Args:
            session_id: When given, undo only if it names the remembered session

        Returns:
            The restored session, or None when there was nothing to undo
        """
        if not self.can_undo(session_id):
            return None

        slot = self.book.last_ended
        session = self.book.find(slot.session_id)
        if session is None or session.status != SessionStatus.COMPLETED:
            # Changed since it was ended; leave it alone
            self.book.last_ended = None
            return None

        session.status = slot.previous_status
        self.book.last_ended = None
        logger.info("Undid end of session %s", session.id)
        return session

    def sweep_expired(self, now: Optional[datetime] = None) -> List[Session]:
        """
        Complete every active session whose end time has passed.

        Returns:
            Sessions transitioned by this call (empty when nothing changed)
        """
        now = now or now_dt()
        completed: List[Session] = []
        for session in self.book.sessions:
            if session.status == SessionStatus.ACTIVE and has_elapsed(session.end_time, now):
                session.status = SessionStatus.COMPLETED
                completed.append(session)

        if completed:
            logger.info("%d session(s) have been automatically marked as completed", len(completed))
        return completed

    def remove_session(self, session_id: int) -> Session:
        session = self.get_session(session_id)
        self.book.sessions.remove(session)
        if self.book.last_ended and self.book.last_ended.session_id == session_id:
            self.book.last_ended = None
        logger.info("Removed session %s", session_id)
        return session

    # ------------------------------------------------------------------
    # Export helpers
    # ------------------------------------------------------------------
    @staticmethod
    def export_rows(sessions: Iterable[Session]) -> List[List[Any]]:
        """Rows for the sessions export, without the header row."""
        return [
            [
                s.id,
                s.name,
                "Yes" if s.is_group else "No",
                s.participant_names,
                s.shoe_sizes,
                s.start_time,
                s.end_time,
                s.duration,
                s.status.value,
                s.notes,
                s.created_by,
            ]
            for s in sessions
        ]
