import unittest
from datetime import datetime, timedelta
from unittest.mock import patch

from skatetrack.models import Participant, Session, SessionBook, SessionStatus
from skatetrack.services import ServiceFactory, SessionService, TimerService, TvDisplayService

START = datetime(2023, 6, 14, 10, 0, 0)


class TimerServiceTests(unittest.TestCase):
    def setUp(self) -> None:
        self.service = TimerService()
        self.calls = []

    def test_task_runs_once_per_interval(self) -> None:
        self.service.register("clock", 1, self.calls.append, now=START)

        self.assertEqual(self.service.tick(START), [])
        self.assertEqual(self.service.tick(START + timedelta(seconds=1)), ["clock"])
        self.assertEqual(self.service.tick(START + timedelta(milliseconds=1500)), [])
        self.assertEqual(self.service.tick(START + timedelta(seconds=2)), ["clock"])
        self.assertEqual(len(self.calls), 2)

    def test_late_task_runs_only_once(self) -> None:
        self.service.register("sweep", 60, self.calls.append, now=START)
        late = START + timedelta(minutes=5)
        self.assertEqual(self.service.tick(late), ["sweep"])
        self.assertEqual(self.calls, [late])
        self.assertEqual(self.service.tick(late + timedelta(seconds=59)), [])

    def test_tasks_run_in_registration_order(self) -> None:
        self.service.register("sweep", 60, lambda now: self.calls.append("sweep"), now=START)
        self.service.register("clock", 1, lambda now: self.calls.append("clock"), now=START)
        ran = self.service.tick(START + timedelta(minutes=1))
        self.assertEqual(ran, ["sweep", "clock"])
        self.assertEqual(self.calls, ["sweep", "clock"])

    def test_cancel_and_clear(self) -> None:
        self.service.register("clock", 1, self.calls.append, now=START)
        self.service.register("sweep", 60, self.calls.append, now=START)

        self.assertTrue(self.service.cancel("clock"))
        self.assertFalse(self.service.cancel("clock"))
        self.assertEqual(self.service.task_names(), ["sweep"])

        self.service.clear()
        self.assertEqual(self.service.tick(START + timedelta(hours=1)), [])
        self.assertEqual(self.calls, [])

    def test_interval_must_be_positive(self) -> None:
        with self.assertRaises(ValueError):
            self.service.register("broken", 0, self.calls.append, now=START)


class SuiteTimerTests(unittest.TestCase):
    def setUp(self) -> None:
        self.book = SessionBook(sessions=[
            Session(id=1, name="Alex Smith", participants=[Participant("Alex Smith", "42")],
                    start_time="09:00 AM", duration="1h", end_time="10:00 AM"),
            Session(id=2, name="Maya Johnson", participants=[Participant("Maya Johnson", "38")],
                    start_time="10:30 AM", duration="1h", end_time="11:30 AM"),
        ])
        self.swept = []
        with patch("skatetrack.services.timer_service.now_dt", return_value=datetime(2023, 6, 14, 10, 44)):
            self.suite = ServiceFactory().create_complete_service_suite(
                self.book, sweep_listener=self.swept.append
            )

    def test_suite_contents(self) -> None:
        self.assertEqual(
            sorted(self.suite),
            ["branding", "display", "inventory", "reports", "sessions", "timers"],
        )
        self.assertEqual(self.suite["timers"].task_names(), ["sweep", "display_refresh"])
        self.assertIs(self.suite["sessions"].book, self.book)

    def test_sweep_timer_completes_expired_sessions(self) -> None:
        timers = self.suite["timers"]
        self.assertEqual(timers.tick(datetime(2023, 6, 14, 10, 44, 30)), [])

        later = datetime(2023, 6, 14, 10, 45)
        ran = timers.tick(later)
        self.assertEqual(ran, ["sweep", "display_refresh"])
        self.assertEqual(self.book.find(1).status, SessionStatus.COMPLETED)
        self.assertEqual(self.book.find(2).status, SessionStatus.ACTIVE)
        self.assertEqual([[s.id for s in batch] for batch in self.swept], [[1]])

        ended = self.suite["display"].snapshot(later)["endedSessions"]
        self.assertEqual([entry["id"] for entry in ended], [1])


class TvDisplayServiceTests(unittest.TestCase):
    def setUp(self) -> None:
        self.book = SessionBook(sessions=[
            Session(id=1, name="Skate Club", participants=[Participant("A", "40"), Participant("B", "41")],
                    start_time="09:00 AM", duration="1h", end_time="10:00 AM",
                    status=SessionStatus.COMPLETED, is_group=True),
            Session(id=2, name="Tom Wilson", participants=[Participant("Tom Wilson", "44")],
                    start_time="10:00 AM", duration="1h", end_time="11:00 AM"),
        ])
        self.sessions = SessionService(self.book)
        self.display = TvDisplayService(self.sessions)

    def test_snapshot_formats_clock_and_date(self) -> None:
        snapshot = self.display.snapshot(datetime(2023, 6, 14, 15, 4, 9))
        self.assertEqual(snapshot["clock"], "03:04:09 PM")
        self.assertEqual(snapshot["date"], "Wednesday, June 14, 2023")

    def test_only_completed_sessions_are_listed(self) -> None:
        ended = self.display.snapshot(START)["endedSessions"]
        self.assertEqual(ended, [{
            "id": 1,
            "name": "Skate Club",
            "type": "Group",
            "startTime": "09:00 AM",
            "endTime": "10:00 AM",
            "duration": "1h",
        }])

    def test_list_changes_only_on_refresh(self) -> None:
        self.sessions.end_session(2)
        self.assertEqual(len(self.display.snapshot(START)["endedSessions"]), 1)

        refreshed_at = datetime(2023, 6, 14, 11, 5, 0)
        self.display.refresh(refreshed_at)
        snapshot = self.display.snapshot(refreshed_at)
        self.assertEqual(len(snapshot["endedSessions"]), 2)
        self.assertEqual(snapshot["lastRefreshed"], "11:05:00 AM")


if __name__ == "__main__":
    unittest.main()
