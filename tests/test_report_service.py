import unittest
from datetime import date, datetime

from skatetrack.models import Participant, RevenueRecord, Session
from skatetrack.models.seed import seed_daily_visitors, seed_revenue_records
from skatetrack.services import ReportService, format_currency, format_display_date

TODAY = date(2023, 6, 14)


class GroupingTests(unittest.TestCase):
    def setUp(self) -> None:
        self.service = ReportService()

    def test_two_records_on_one_day(self) -> None:
        records = [
            {"date": "2023-06-14", "revenue": 500, "participants": 1},
            {"date": "2023-06-14", "revenue": 500, "participants": 1},
        ]
        summaries = self.service.combined_daily_summary(records)
        self.assertEqual(len(summaries), 1)
        summary = summaries[0]
        self.assertEqual(summary.date, "2023-06-14")
        self.assertEqual(summary.total_revenue, 1000)
        self.assertEqual(summary.total_skaters, 2)
        self.assertEqual(summary.session_count, 2)
        self.assertEqual(summary.notes, "")

    def test_group_by_exact_date_string(self) -> None:
        grouped = self.service.group_by_date(seed_revenue_records())
        self.assertEqual(len(grouped["2023-06-14"]), 2)
        self.assertEqual(len(grouped["2023-06-11"]), 1)
        self.assertEqual(len(grouped), 10)

    def test_busy_day_needs_more_than_three_sessions(self) -> None:
        three = [{"date": "2023-06-01", "revenue": 100, "quantity": 1}] * 3
        self.assertEqual(self.service.summarize_day("2023-06-01", three).notes, "")
        self.assertEqual(self.service.summarize_day("2023-06-01", three * 2).notes, "Busy day")

    def test_quantity_counts_as_participants(self) -> None:
        summary = self.service.summarize_day("2023-06-01", [{"date": "2023-06-01", "revenue": 0, "quantity": 4}])
        self.assertEqual(summary.total_skaters, 4)

    def test_average_duration_placeholder_rule(self) -> None:
        with_long = [
            {"date": "2023-06-13", "revenue": 800, "participants": 1, "duration": "2h"},
            {"date": "2023-06-13", "revenue": 500, "participants": 1, "duration": "1h"},
        ]
        short_only = [{"date": "2023-06-12", "revenue": 600, "participants": 1, "duration": "1h 15m"}]
        self.assertEqual(self.service.summarize_day("2023-06-13", with_long).average_session_duration, "1h 30m")
        self.assertEqual(self.service.summarize_day("2023-06-12", short_only).average_session_duration, "1h")

    def test_summaries_sorted_newest_first(self) -> None:
        summaries = self.service.combined_daily_summary(seed_revenue_records())
        dates = [s.date for s in summaries]
        self.assertEqual(dates, sorted(dates, reverse=True))

    def test_period_totals(self) -> None:
        totals = self.service.period_totals(seed_revenue_records())
        self.assertEqual(totals.total_sessions, 15)
        self.assertEqual(totals.total_skaters, 31)
        self.assertEqual(totals.total_revenue, 14500)


class RangeFilterTests(unittest.TestCase):
    def setUp(self) -> None:
        self.service = ReportService()
        self.records = seed_revenue_records()

    def test_today_only_matches_current_day(self) -> None:
        kept = self.service.filter_by_range(self.records, "today", today=TODAY)
        self.assertEqual({r.date for r in kept}, {"2023-06-14"})

    def test_today_with_no_matching_records(self) -> None:
        self.assertEqual(self.service.filter_by_range(self.records, "today", today=date(2024, 1, 1)), [])

    def test_week_window_is_inclusive(self) -> None:
        kept = self.service.filter_by_range(self.records, "week", today=TODAY)
        dates = {r.date for r in kept}
        self.assertIn("2023-06-07", dates)
        self.assertIn("2023-06-14", dates)
        self.assertNotIn("2023-06-06", dates)

    def test_month_and_year_windows(self) -> None:
        self.assertEqual(len(self.service.filter_by_range(self.records, "month", today=TODAY)), 15)
        self.assertEqual(len(self.service.filter_by_range(self.records, "year", today=date(2024, 6, 20))), 0)

    def test_custom_range_with_and_without_end(self) -> None:
        span = self.service.filter_by_range(
            self.records, "custom", {"from": "2023-06-10", "to": "2023-06-12"}, today=TODAY
        )
        self.assertEqual(sorted({r.date for r in span}), ["2023-06-10", "2023-06-11", "2023-06-12"])

        single = self.service.filter_by_range(self.records, "custom", {"from": date(2023, 6, 5)}, today=TODAY)
        self.assertEqual([r.name for r in single], ["Mike Johnson", "Lisa Chen"])

    def test_custom_range_requires_start(self) -> None:
        with self.assertRaises(ValueError):
            self.service.filter_by_range(self.records, "custom", today=TODAY)
        with self.assertRaises(ValueError):
            self.service.filter_by_range(self.records, "custom", {"to": "2023-06-12"}, today=TODAY)

    def test_unknown_range(self) -> None:
        with self.assertRaises(ValueError):
            self.service.filter_by_range(self.records, "decade", today=TODAY)

    def test_date_range_days(self) -> None:
        days = self.service.date_range_days("week", today=TODAY)
        self.assertEqual(len(days), 8)
        self.assertEqual(days[0], "2023-06-07")
        self.assertEqual(days[-1], "2023-06-14")


class ReportTableTests(unittest.TestCase):
    def setUp(self) -> None:
        self.service = ReportService()
        self.generated = datetime(2023, 6, 14, 9, 5, 0)

    def test_currency_and_date_formatting(self) -> None:
        self.assertEqual(format_currency(1200), "NPR 1,200")
        self.assertEqual(format_display_date("2023-06-05"), "Jun 05, 2023")

    def test_analytics_export_layout(self) -> None:
        records = [r for r in seed_revenue_records() if r.date == "2023-06-14"]
        rows = self.service.analytics_export_rows("week", records, generated_at=self.generated)
        self.assertEqual(rows[0][0], "Analytics Report - week")
        self.assertEqual(rows[2], ["SUMMARY"])
        self.assertEqual(rows[3][0], "Date")
        self.assertEqual(rows[4], ["Jun 14, 2023", 2, 2, "NPR 1,000", "1h", ""])
        self.assertEqual(rows[6], ["DETAILS"])
        self.assertEqual(rows[8][1], "Alex Smith")
        self.assertEqual(len(rows), 10)

    def test_custom_range_title(self) -> None:
        rows = self.service.analytics_export_rows("custom", [], generated_at=self.generated)
        self.assertEqual(rows[0][0], "Analytics Report - Custom Range")

    def test_workbook_sheets(self) -> None:
        sheets = self.service.analytics_workbook_sheets(seed_revenue_records())
        self.assertEqual(list(sheets), ["Summary", "Details"])
        self.assertEqual(len(sheets["Summary"]), 11)
        self.assertEqual(len(sheets["Details"]), 16)

    def test_revenue_report_total_row(self) -> None:
        rows = self.service.revenue_report_rows("week", seed_daily_visitors(), generated_at=self.generated)
        self.assertEqual(rows[1], ["Time Range", "week"])
        self.assertEqual(rows[4], ["Mon", "45", "$1200"])
        self.assertEqual(rows[-1], ["Total", "463", "$11280"])

    def test_dashboard_report(self) -> None:
        rows = self.service.dashboard_report_rows(5, 78, 4231, 28, 50, generated_at=self.generated)
        self.assertEqual(rows[3], ["Active Sessions", 5])
        self.assertEqual(rows[5], ["Revenue", "NPR 4,231"])
        self.assertEqual(rows[6], ["Available Shoes", "28/50"])

    def test_shoe_size_distribution(self) -> None:
        sessions = [
            Session(id=1, name="Family", participants=[
                Participant("A", "36"), Participant("B", "40"), Participant("C", "44"),
                Participant("D", "47"), Participant("E", "n/a"),
            ]),
        ]
        distribution = self.service.shoe_size_distribution(sessions)
        self.assertEqual(distribution, [
            {"name": "36-38", "value": 1},
            {"name": "39-41", "value": 1},
            {"name": "42-44", "value": 1},
            {"name": "45+", "value": 1},
        ])

    def test_records_can_be_objects(self) -> None:
        record = RevenueRecord(1, "2023-06-14", "Alex", "individual", 1, "10:30 AM", "11:30 AM", "2h", "42", 800)
        summary = self.service.summarize_day("2023-06-14", [record])
        self.assertEqual(summary.total_revenue, 800)
        self.assertEqual(summary.average_session_duration, "1h 30m")


if __name__ == "__main__":
    unittest.main()
