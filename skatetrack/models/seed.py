"""
Seed data loaded on every start of the SkateTrack dashboard.

Nothing here persists: each call returns fresh objects so a new app (or a
test) never shares state with another.
"""
from typing import List

from .inventory import InventoryItem
from .report import RevenueRecord, VisitorPoint
from .session import Participant, Session, SessionBook, SessionStatus
from ..utils import compute_end_time


def _session(session_id, name, participants, start_time, duration,
             status=SessionStatus.ACTIVE, notes="", is_group=False) -> Session:
    people = [Participant(name=n, shoe_size=s) for n, s in participants]
    return Session(
        id=session_id,
        name=name,
        participants=people,
        start_time=start_time,
        duration=duration,
        end_time=compute_end_time(start_time, duration),
        status=status,
        is_group=is_group or len(people) > 1,
        notes=notes,
    )


def seed_sessions() -> List[Session]:
    return [
        _session(1, "Alex Smith", [("Alex Smith", "42")], "10:30 AM", "1h"),
        _session(2, "Maya Johnson", [("Maya Johnson", "38")], "11:15 AM", "1h"),
        _session(3, "Raj Patel", [("Raj Patel", "43")], "09:55 AM", "2h"),
        _session(4, "Sarah Lee", [("Sarah Lee", "37")], "12:30 PM", "1h"),
        _session(5, "Tom Wilson", [("Tom Wilson", "44")], "10:00 AM", "2h",
                 status=SessionStatus.COMPLETED),
        _session(6, "Emma Davis", [("Emma Davis", "39")], "11:45 AM", "1h 15m",
                 status=SessionStatus.COMPLETED),
        _session(
            7, "Skate Club",
            [("Michael Brown", "45"), ("Jessica Taylor", "38"), ("David Wilson", "43")],
            "01:30 PM", "1h", notes="Weekly club meeting",
        ),
        _session(
            8, "Garcia Family",
            [("Sophia Garcia", "36"), ("Carlos Garcia", "44"), ("Elena Garcia", "38")],
            "02:15 PM", "1h", notes="Family session",
        ),
    ]


def seed_session_book() -> SessionBook:
    return SessionBook(sessions=seed_sessions())


def seed_revenue_records() -> List[RevenueRecord]:
    """Historical sessions shown on the analytics page."""
    rows = [
        (1, "2023-06-14", "Alex Smith", "individual", 1, "10:30 AM", "11:30 AM", "1h", "42", 500),
        (2, "2023-06-14", "Maya Johnson", "individual", 1, "11:15 AM", "12:15 PM", "1h", "38", 500),
        (3, "2023-06-13", "Raj Patel", "individual", 1, "09:55 AM", "11:55 AM", "2h", "43", 800),
        (4, "2023-06-13", "Sarah Lee", "individual", 1, "12:30 PM", "01:30 PM", "1h", "37", 500),
        (5, "2023-06-12", "Tom Wilson", "individual", 1, "10:00 AM", "12:00 PM", "2h", "44", 800),
        (6, "2023-06-12", "Emma Davis", "individual", 1, "11:45 AM", "01:00 PM", "1h 15m", "39", 600),
        (7, "2023-06-11", "Skate Club", "group", 3, "01:30 PM", "02:30 PM", "1h", "45, 38, 43", 1200),
        (8, "2023-06-10", "Garcia Family", "group", 3, "02:15 PM", "03:15 PM", "1h", "36, 44, 38", 1200),
        (9, "2023-06-09", "Beginners Class", "group", 5, "09:00 AM", "10:30 AM", "1h 30m",
         "37, 38, 40, 42, 39", 2000),
        (10, "2023-06-08", "Advanced Workshop", "group", 4, "04:00 PM", "06:00 PM", "2h",
         "41, 43, 44, 42", 2000),
        (11, "2023-06-07", "John Doe", "individual", 1, "10:00 AM", "11:00 AM", "1h", "42", 500),
        (12, "2023-06-07", "Jane Smith", "individual", 1, "11:30 AM", "12:30 PM", "1h", "38", 500),
        (13, "2023-06-06", "Youth Group", "group", 6, "02:00 PM", "04:00 PM", "2h",
         "36, 37, 38, 39, 40, 41", 2400),
        (14, "2023-06-05", "Mike Johnson", "individual", 1, "09:00 AM", "10:00 AM", "1h", "44", 500),
        (15, "2023-06-05", "Lisa Chen", "individual", 1, "10:30 AM", "11:30 AM", "1h", "37", 500),
    ]
    return [RevenueRecord(*row) for row in rows]


def seed_daily_visitors() -> List[VisitorPoint]:
    return [
        VisitorPoint("Mon", 45, 1200),
        VisitorPoint("Tue", 52, 1350),
        VisitorPoint("Wed", 48, 1280),
        VisitorPoint("Thu", 61, 1450),
        VisitorPoint("Fri", 78, 1800),
        VisitorPoint("Sat", 94, 2200),
        VisitorPoint("Sun", 85, 2000),
    ]


def seed_monthly_visitors() -> List[VisitorPoint]:
    return [
        VisitorPoint("Jan", 1200, 32000),
        VisitorPoint("Feb", 1350, 36000),
        VisitorPoint("Mar", 1450, 38000),
        VisitorPoint("Apr", 1200, 32000),
        VisitorPoint("May", 1600, 42000),
        VisitorPoint("Jun", 1800, 48000),
    ]


def seed_inventory() -> List[InventoryItem]:
    levels = [
        ("36", 3, 2), ("37", 4, 3), ("38", 5, 2), ("39", 5, 4),
        ("40", 6, 3), ("41", 6, 5), ("42", 5, 2), ("43", 5, 3),
        ("44", 4, 2), ("45", 3, 1), ("46", 2, 0), ("47", 2, 1),
    ]
    return [
        InventoryItem(id=index, size=size, total=total, available=available)
        for index, (size, total, available) in enumerate(levels, start=1)
    ]
