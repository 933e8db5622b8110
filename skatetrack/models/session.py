"""
Session models for the SkateTrack dashboard.

This module contains the Participant and Session dataclasses plus the
SessionBook, which holds the authoritative in-memory session collection
together with the id counter and the single undo slot.
"""
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional

from ..utils import DEFAULT_CREATED_BY


class SessionStatus(str, Enum):
    """Stored session status."""
    ACTIVE = "active"
    COMPLETED = "completed"


# Shown for an active session whose end time has passed; never stored
TIME_OUT_STATUS = "time-out"


@dataclass
class Participant:
    """A skater on a session, identified only by its position in the list."""

    name: str = ""
    shoe_size: str = ""

    def is_valid(self) -> bool:
        return bool(str(self.name or "").strip()) and bool(str(self.shoe_size or "").strip())

    @staticmethod
    def from_json(data: Any) -> "Participant":
        """
        Build a participant from a dict (camelCase or snake_case keys) or copy one.

        Raises:
            ValueError: If ``data`` is neither a mapping nor a Participant
        """
        if isinstance(data, Participant):
            return Participant(name=data.name, shoe_size=data.shoe_size)
        if not isinstance(data, Mapping):
            raise ValueError(f"Participant must be an object with name and shoe size, got {data!r}")
        shoe_size = data.get("shoe_size", data.get("shoeSize", ""))
        return Participant(
            name=str(data.get("name") or ""),
            shoe_size=str(shoe_size if shoe_size is not None else ""),
        )


@dataclass
class Session:
    """
    A timed rental for one skater or a group.

    Attributes:
        id: Unique id assigned at creation
        name: Display label (skater or group name)
        is_group: True when flagged as a group or with more than one participant
        participants: Skaters and their rental shoe sizes
        start_time: 12-hour start time, fixed at creation
        duration: Duration token such as "1h" or "1h 15m"
        end_time: Derived from start_time + duration
        status: Stored status (active/completed)
        notes: Free text
        created_by: Staff attribution
    """
    id: int
    name: str
    participants: List[Participant] = field(default_factory=list)
    start_time: str = ""
    duration: str = "1h"
    end_time: str = ""
    status: SessionStatus = SessionStatus.ACTIVE
    is_group: bool = False
    notes: str = ""
    created_by: str = DEFAULT_CREATED_BY

    @property
    def participant_names(self) -> str:
        return ", ".join(p.name for p in self.participants)

    @property
    def shoe_sizes(self) -> str:
        return ", ".join(p.shoe_size for p in self.participants)

    @property
    def session_kind(self) -> str:
        return "Group" if self.is_group else "Individual"

    def to_json(self) -> dict:
        """
        Convert Session to a JSON-serializable dictionary.

        Returns:
            Dictionary using the dashboard's camelCase field names
        """
        return {
            "id": self.id,
            "name": self.name,
            "isGroup": self.is_group,
            "participants": [
                {"name": p.name, "shoeSize": p.shoe_size} for p in self.participants
            ],
            "startTime": self.start_time,
            "endTime": self.end_time,
            "duration": self.duration,
            "status": self.status.value,
            "notes": self.notes,
            "createdBy": self.created_by,
        }


@dataclass
class UndoSlot:
    """The most recent end action, remembered for a single undo."""
    session_id: int
    previous_status: SessionStatus


@dataclass
class SessionBook:
    """
    Authoritative session collection for one dashboard.

    Attributes:
        sessions: Sessions in display order (newest first)
        next_id: Next id to hand out; never reused
        last_ended: Single-slot undo memory, overwritten by every end action
    """
    sessions: List[Session] = field(default_factory=list)
    next_id: int = 0
    last_ended: Optional[UndoSlot] = None

    def __post_init__(self) -> None:
        highest = max((s.id for s in self.sessions), default=0)
        self.next_id = max(self.next_id, highest + 1)

    def allocate_id(self) -> int:
        session_id = self.next_id
        self.next_id += 1
        return session_id

    def find(self, session_id: int) -> Optional[Session]:
        for session in self.sessions:
            if session.id == session_id:
                return session
        return None
