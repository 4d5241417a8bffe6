"""Tests for agenda.services.calendar_service."""

from datetime import date

from agenda.services.calendar_service import days_in_month, month_overview
from conftest import make_appointment, make_block, make_week


class TestDaysInMonth:
    def test_lengths(self):
        assert len(days_in_month(2025, 1)) == 31
        assert len(days_in_month(2025, 2)) == 28
        assert len(days_in_month(2024, 2)) == 29


class TestMonthOverview:
    """Busy and closed days for the provider calendar."""

    def test_closed_days_are_weekends(self):
        """Mon-Fri week closes every Saturday and Sunday of January 2025."""
        overview = month_overview(2025, 1, make_week(), [], [])
        assert overview["closed_days"] == [
            date(2025, 1, 4),
            date(2025, 1, 5),
            date(2025, 1, 11),
            date(2025, 1, 12),
            date(2025, 1, 18),
            date(2025, 1, 19),
            date(2025, 1, 25),
            date(2025, 1, 26),
        ]

    def test_no_rules_closes_every_day(self):
        overview = month_overview(2025, 2, None)
        assert len(overview["closed_days"]) == 28
        assert overview["busy_days"] == []

    def test_busy_days(self):
        """Blocks and live appointments mark a day busy; canceled ones and other months do not."""
        blocks = [make_block(date(2025, 1, 13), "12:00", "13:00"), make_block(date(2025, 2, 3), "09:00", "10:00")]
        appts = [
            make_appointment(date(2025, 1, 15), "09:00", "09:30", status="confirmed"),
            make_appointment(date(2025, 1, 14), "09:00", "09:30", status="canceled"),
            make_appointment(date(2025, 1, 13), "10:00", "10:30", status="pending"),
        ]
        overview = month_overview(2025, 1, make_week(), blocks, appts)
        assert overview["busy_days"] == [date(2025, 1, 13), date(2025, 1, 15)]
