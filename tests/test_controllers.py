from __future__ import annotations

from datetime import time
from types import SimpleNamespace

import pytest

from src.shiftdesk.shiftdesk.attendance.service import AttendanceService
from src.shiftdesk.shiftdesk.attendance.settings_model import AttendanceSettings
from src.shiftdesk.shiftdesk.core.enums import ShiftType
from src.shiftdesk.shiftdesk.geo.model import GeoPoint
from src.shiftdesk.shiftdesk.main import create_app
from src.shiftdesk.shiftdesk.shifts.model import ShiftConfig
from src.shiftdesk.shiftdesk.tasks.service import TaskBoardService
from src.shiftdesk.shiftdesk.users.model import Profile, Team
from src.shiftdesk.shiftdesk.users.service import UserDirectoryService


class Records:
    def __init__(self):
        self.rows = {}

    def find_record(self, user_id, work_date, shift_type):
        return None

    def get_by_id(self, record_id):
        return None

    def upsert_checkin(self, **fields):
        self.rows[len(self.rows) + 1] = fields
        return len(self.rows)

    def update_checkout(self, **fields):
        return False

    def list_recent_for_user(self, user_id, limit):
        return []

    def list_for_user_and_date(self, user_id, work_date):
        return []


class Users:
    roles = {1: "staff", 2: None}

    def get_profile(self, user_id):
        return Profile(user_id=user_id, first_name="An", last_name=None, team_id=7 if user_id == 1 else None)

    def get_role(self, user_id):
        return self.roles.get(user_id)

    def get_team(self, team_id):
        return Team(team_id, "Kho")

    def find_team_led_by(self, user_id):
        return None

    def approve_and_assign_role(self, user_id, role):
        return True

    def set_account_status(self, user_id, status):
        return True


class Columns:
    def list_for_team(self, team_id):
        return []

    def get_by_id(self, column_id):
        return None


class Tasks:
    def list_for_team(self, team_id):
        return []


@pytest.fixture()
def records():
    return Records()


@pytest.fixture()
def client(monkeypatch, records):
    monkeypatch.setenv("APP_ENV", "testing")
    shifts = SimpleNamespace(
        list_for_team=lambda team_id: [ShiftConfig(1, team_id, ShiftType.MORNING, time(8, 0), time(12, 0))]
    )
    settings = SimpleNamespace(
        get_for_team=lambda team_id: AttendanceSettings(team_id=team_id, office=GeoPoint(10.7769, 106.7009), radius_meters=100)
    )
    container = SimpleNamespace(
        user_service=UserDirectoryService(Users()),
        attendance_service=AttendanceService(records, shifts, settings, location_timeout=1),
        task_board_service=TaskBoardService(Tasks(), Columns()),
    )
    app = create_app(container=container)
    return app.test_client()


def login(client, user_id):
    with client.session_transaction() as sess:
        sess["user_id"] = user_id


def test_requires_signed_in_user(client):
    resp = client.get("/api/attendance/today")
    assert resp.status_code == 401
    assert resp.get_json()["success"] is False


def test_me(client):
    login(client, 1)
    data = client.get("/api/me").get_json()
    assert data["role"] == "staff"
    assert data["team"] == {"team_id": 7, "name": "Kho"}


def test_checkin_inside_radius(client, records):
    login(client, 1)
    resp = client.post("/api/attendance/checkin", json={"shift_type": "morning", "location": "10.7770, 106.7009"})

    assert resp.status_code == 200
    assert resp.get_json()["record_id"] == 1
    assert records.rows[1]["location"] == "10.777, 106.7009"


def test_checkin_out_of_range_reports_radius(client, records):
    login(client, 1)
    resp = client.post("/api/attendance/checkin", json={"shift_type": "morning", "location": "10.8769, 106.7009"})

    assert resp.status_code == 400
    body = resp.get_json()
    assert body["error"] == "out_of_range"
    assert body["radius_meters"] == 100
    assert records.rows == {}


def test_checkin_without_location(client, records):
    login(client, 1)
    resp = client.post("/api/attendance/checkin", json={"shift_type": "morning"})

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "location_unavailable"
    assert records.rows == {}


def test_checkin_bad_shift_type_and_bad_location(client):
    login(client, 1)
    assert client.post("/api/attendance/checkin", json={"shift_type": "night"}).status_code == 400
    resp = client.post("/api/attendance/checkin", json={"shift_type": "morning", "location": "abc"})
    assert resp.status_code == 400


def test_checkout_of_unknown_record(client):
    login(client, 1)
    resp = client.post("/api/attendance/checkout", json={"record_id": 5, "location": "10.7769, 106.7009"})
    assert resp.status_code == 404


def test_stats_and_history(client):
    login(client, 1)
    stats = client.get("/api/attendance/stats?month=2026-03").get_json()["stats"]
    assert stats == {"total_shifts": 0, "completed_shifts": 0, "pending_shifts": 0, "absent_shifts": 0}

    assert client.get("/api/attendance/history?period=month").status_code == 200
    assert client.get("/api/attendance/history?period=decade").status_code == 400
    assert client.get("/api/attendance/stats?month=march").status_code == 400


def test_today_lists_team_shifts(client):
    login(client, 1)
    shifts = client.get("/api/attendance/today").get_json()["shifts"]
    assert [s["shift_type"] for s in shifts] == ["morning"]


def test_board_requires_team(client):
    login(client, 2)
    assert client.get("/api/board").status_code == 400

    login(client, 1)
    assert client.get("/api/board").get_json() == {"success": True, "columns": []}


def test_board_write_on_missing_column(client):
    login(client, 1)
    resp = client.post("/api/board/tasks", json={"column_id": 3, "title": "A"})
    assert resp.status_code == 404


def test_registration_approval_is_forbidden_for_staff(client):
    login(client, 1)
    assert client.post("/api/admin/registrations/9/approve", json={}).status_code == 403
    assert client.post("/api/admin/registrations/9/reject").status_code == 403
