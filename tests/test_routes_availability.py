"""Tests for /availability routes."""

import pytest

API = "/api/v1"


def _week(open_days=(1, 2, 3, 4, 5), start="09:00", end="11:00", interval=30):
    return [
        {
            "dayOfWeek": dow,
            "startTime": start,
            "endTime": end,
            "isAvailable": dow in open_days,
            "intervalMinutes": interval,
        }
        for dow in range(7)
    ]


@pytest.fixture
def provider(client):
    """Provider 7 with a saved Mon-Fri 09:00-11:00 week."""
    resp = client.post(f"{API}/availability/weekly", json={"providerId": 7, "rules": _week()})
    assert resp.status_code == 200
    return client, 7


class TestWeeklySchedule:
    """GET /availability/provider/{id} and POST /availability/weekly."""

    def test_default_week(self, client):
        """A provider that never saved gets the default Mon-Fri week."""
        response = client.get(f"{API}/availability/provider/3")
        assert response.status_code == 200
        rules = response.json()
        assert [r["dayOfWeek"] for r in rules] == list(range(7))
        assert [r["isAvailable"] for r in rules] == [False, True, True, True, True, True, False]
        assert rules[1]["startTime"] == "09:00"
        assert rules[1]["endTime"] == "17:00"
        assert rules[1]["intervalMinutes"] == 30

    def test_save_and_read_back(self, provider):
        """Saved rules replace the defaults."""
        client, pid = provider
        rules = client.get(f"{API}/availability/provider/{pid}").json()
        assert rules[1]["endTime"] == "11:00"
        assert rules[1]["id"] is not None

    def test_save_replaces_everything(self, provider):
        """A second save drops rules not in the new payload (those fall back to defaults)."""
        client, pid = provider
        resp = client.post(
            f"{API}/availability/weekly",
            json={"providerId": pid, "rules": _week(open_days=(6,))[6:]},
        )
        assert resp.status_code == 200
        assert len(resp.json()["rules"]) == 1
        rules = client.get(f"{API}/availability/provider/{pid}").json()
        assert rules[6]["isAvailable"] is True
        assert rules[6]["endTime"] == "11:00"
        assert rules[1]["endTime"] == "17:00"

    def test_duplicate_weekday_rejected(self, client):
        rules = _week()
        rules.append(dict(rules[1]))
        resp = client.post(f"{API}/availability/weekly", json={"providerId": 7, "rules": rules})
        assert resp.status_code == 422

    def test_open_day_needs_start_before_end(self, client):
        rules = _week(start="12:00", end="09:00")
        resp = client.post(f"{API}/availability/weekly", json={"providerId": 7, "rules": rules})
        assert resp.status_code == 422

    def test_closed_day_may_have_any_hours(self, client):
        rules = _week(open_days=(), start="12:00", end="09:00")
        resp = client.post(f"{API}/availability/weekly", json={"providerId": 7, "rules": rules})
        assert resp.status_code == 200

    def test_bad_time_format_rejected(self, client):
        rules = _week(start="9h00")
        resp = client.post(f"{API}/availability/weekly", json={"providerId": 7, "rules": rules})
        assert resp.status_code == 422

    def test_non_positive_interval_rejected(self, client):
        rules = _week(interval=0)
        resp = client.post(f"{API}/availability/weekly", json={"providerId": 7, "rules": rules})
        assert resp.status_code == 422


class TestDaySlots:
    """GET /availability/provider/{id}/slots."""

    def test_open_monday(self, provider):
        client, pid = provider
        response = client.get(f"{API}/availability/provider/{pid}/slots", params={"date": "2025-01-13"})
        assert response.status_code == 200
        data = response.json()
        assert data["date"] == "2025-01-13"
        assert data["dayOfWeek"] == 1
        assert [(s["startTime"], s["endTime"]) for s in data["slots"]] == [
            ("09:00", "09:30"),
            ("09:30", "10:00"),
            ("10:00", "10:30"),
            ("10:30", "11:00"),
        ]
        assert all(s["isAvailable"] for s in data["slots"])

    def test_closed_sunday(self, provider):
        client, pid = provider
        data = client.get(f"{API}/availability/provider/{pid}/slots", params={"date": "2025-01-12"}).json()
        assert data["dayOfWeek"] == 0
        assert data["slots"] == []

    def test_default_week_slots(self, client):
        """Unsaved provider: 09:00-17:00 every 30 minutes."""
        data = client.get(f"{API}/availability/provider/3/slots", params={"date": "2025-01-13"}).json()
        assert len(data["slots"]) == 16

    def test_block_closes_slot(self, provider):
        client, pid = provider
        client.post(
            f"{API}/availability/blocked-times",
            json={"providerId": pid, "date": "2025-01-13", "startTime": "10:00", "endTime": "10:30"},
        )
        slots = client.get(f"{API}/availability/provider/{pid}/slots", params={"date": "2025-01-13"}).json()["slots"]
        assert [s["isAvailable"] for s in slots] == [True, True, False, True]

    def test_appointment_marks_status(self, provider):
        client, pid = provider
        resp = client.post(
            f"{API}/appointments",
            json={"providerId": pid, "date": "2025-01-13", "startTime": "09:15", "endTime": "09:45"},
        )
        assert resp.status_code == 201
        slots = client.get(f"{API}/availability/provider/{pid}/slots", params={"date": "2025-01-13"}).json()["slots"]
        assert [(s["isAvailable"], s["status"]) for s in slots] == [
            (False, "confirmed"),
            (False, "confirmed"),
            (True, None),
            (True, None),
        ]

    def test_date_required(self, provider):
        client, pid = provider
        assert client.get(f"{API}/availability/provider/{pid}/slots").status_code == 422


class TestMonthCalendar:
    """GET /availability/provider/{id}/calendar."""

    def test_overview(self, provider):
        client, pid = provider
        client.post(
            f"{API}/availability/blocked-times",
            json={"providerId": pid, "date": "2025-01-20", "startTime": "09:00", "endTime": "10:00"},
        )
        client.post(
            f"{API}/appointments",
            json={"providerId": pid, "date": "2025-01-13", "startTime": "09:00", "endTime": "09:30"},
        )
        response = client.get(f"{API}/availability/provider/{pid}/calendar", params={"year": 2025, "month": 1})
        assert response.status_code == 200
        data = response.json()
        assert data["busyDays"] == ["2025-01-13", "2025-01-20"]
        assert len(data["closedDays"]) == 8
        assert data["closedDays"][0] == "2025-01-04"

    def test_invalid_month(self, provider):
        client, pid = provider
        resp = client.get(f"{API}/availability/provider/{pid}/calendar", params={"year": 2025, "month": 13})
        assert resp.status_code == 422
