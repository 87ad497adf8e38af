from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime, time
from typing import Optional

import pytest

from src.shiftdesk.shiftdesk.attendance.model import ShiftRecord
from src.shiftdesk.shiftdesk.attendance.service import AttendanceService, parse_shift_type
from src.shiftdesk.shiftdesk.attendance.settings_model import AttendanceSettings
from src.shiftdesk.shiftdesk.common.events import ChangeNotifier
from src.shiftdesk.shiftdesk.core.enums import ShiftStatus, ShiftType
from src.shiftdesk.shiftdesk.core.exceptions import (
    InvalidRecord,
    LocationUnavailable,
    NotFoundError,
    OutOfRange,
    ValidationError,
)
from src.shiftdesk.shiftdesk.geo.location import ClientReportedLocation
from src.shiftdesk.shiftdesk.geo.model import GeoPoint
from src.shiftdesk.shiftdesk.shifts.model import ShiftConfig

OFFICE = GeoPoint(10.7769, 106.7009)
NEAR = "10.7772, 106.7009"  # ~33 m
FAR = "10.7869, 106.7009"  # ~1.1 km


class InMemoryRecords:
    def __init__(self):
        self._by_id: dict[int, ShiftRecord] = {}
        self._id = 0
        self.writes = 0

    def get_by_id(self, record_id: int) -> Optional[ShiftRecord]:
        return self._by_id.get(record_id)

    def find_record(self, user_id, work_date, shift_type):
        for r in self._by_id.values():
            if (r.user_id, r.work_date, r.shift_type) == (user_id, work_date, shift_type):
                return r
        return None

    def add(self, record: ShiftRecord) -> ShiftRecord:
        self._by_id[record.record_id] = record
        self._id = max(self._id, record.record_id)
        return record

    def upsert_checkin(self, *, user_id, work_date, shift_type, check_in, location) -> int:
        self.writes += 1
        existing = self.find_record(user_id, work_date, shift_type)
        if existing:
            self._by_id[existing.record_id] = replace(
                existing, check_in=check_in, location=location, status=ShiftStatus.CHECKED_IN
            )
            return existing.record_id
        self._id += 1
        self._by_id[self._id] = ShiftRecord(
            record_id=self._id,
            user_id=user_id,
            shift_type=shift_type,
            work_date=work_date,
            check_in=check_in,
            check_out=None,
            status=ShiftStatus.CHECKED_IN,
            location=location,
        )
        return self._id

    def update_checkout(self, *, record_id, check_out, location_out, status=ShiftStatus.COMPLETED) -> bool:
        self.writes += 1
        r = self._by_id.get(record_id)
        if not r:
            return False
        self._by_id[record_id] = replace(r, check_out=check_out, location_out=location_out, status=status)
        return True

    def list_recent_for_user(self, user_id, limit):
        items = [r for r in self._by_id.values() if r.user_id == user_id]
        items.sort(key=lambda r: r.work_date, reverse=True)
        return items[:limit]

    def list_for_user_and_date(self, user_id, work_date):
        return [r for r in self._by_id.values() if r.user_id == user_id and r.work_date == work_date]


@dataclass
class InMemoryShiftConfigs:
    configs: dict[int, list[ShiftConfig]]

    def list_for_team(self, team_id):
        return self.configs.get(team_id, [])


@dataclass
class InMemorySettings:
    settings: dict[int, AttendanceSettings]

    def get_for_team(self, team_id):
        return self.settings.get(team_id)


def make_service(*, office: Optional[GeoPoint] = OFFICE, notifier=None):
    records = InMemoryRecords()
    configs = InMemoryShiftConfigs(
        {
            7: [
                ShiftConfig(1, 7, ShiftType.MORNING, time(8, 0), time(12, 0)),
                ShiftConfig(2, 7, ShiftType.AFTERNOON, time(13, 0), time(17, 0)),
            ]
        }
    )
    settings = InMemorySettings({7: AttendanceSettings(team_id=7, office=office, radius_meters=100)})
    svc = AttendanceService(records, configs, settings, notifier=notifier, location_timeout=1)
    return svc, records


NOW = datetime(2026, 3, 10, 8, 2)


def test_check_in_creates_record_with_location():
    svc, records = make_service()

    record_id = svc.check_in(1, 7, ShiftType.MORNING, location_provider=ClientReportedLocation(NEAR), now=NOW)

    r = records.get_by_id(record_id)
    assert r.status == ShiftStatus.CHECKED_IN
    assert r.check_in == NOW
    assert r.work_date == NOW.date()
    assert r.location == "10.7772, 106.7009"


def test_check_in_rejected_when_location_unavailable_and_nothing_written():
    svc, records = make_service()

    with pytest.raises(LocationUnavailable):
        svc.check_in(1, 7, ShiftType.MORNING, location_provider=ClientReportedLocation("Location unavailable"), now=NOW)
    with pytest.raises(LocationUnavailable):
        svc.check_in(1, 7, ShiftType.MORNING, now=NOW)

    assert records.writes == 0


def test_check_in_rejected_out_of_range_carries_radius():
    svc, records = make_service()

    with pytest.raises(OutOfRange) as exc:
        svc.check_in(1, 7, ShiftType.MORNING, location_provider=ClientReportedLocation(FAR), now=NOW)

    assert exc.value.radius_meters == 100
    assert records.writes == 0


def test_check_in_without_office_accepts_missing_location():
    svc, records = make_service(office=None)

    record_id = svc.check_in(1, 7, ShiftType.MORNING, now=NOW)

    assert records.get_by_id(record_id).location == "Location unavailable"


def test_user_without_team_skips_geofence():
    svc, records = make_service()
    record_id = svc.check_in(1, None, ShiftType.OVERTIME, now=NOW)
    assert records.get_by_id(record_id).shift_type == ShiftType.OVERTIME


def test_second_check_in_for_same_shift_is_rejected():
    svc, records = make_service()
    svc.check_in(1, 7, ShiftType.MORNING, location_provider=ClientReportedLocation(NEAR), now=NOW)

    with pytest.raises(ValidationError):
        svc.check_in(1, 7, ShiftType.MORNING, location_provider=ClientReportedLocation(NEAR), now=NOW)
    assert records.writes == 1


def test_check_in_fills_pre_created_pending_record():
    svc, records = make_service(office=None)
    records.add(ShiftRecord(50, 1, ShiftType.MORNING, NOW.date(), None, None, ShiftStatus.PENDING))

    record_id = svc.check_in(1, 7, ShiftType.MORNING, now=NOW)

    assert record_id == 50
    assert records.get_by_id(50).status == ShiftStatus.CHECKED_IN


def test_check_out_completes_record():
    svc, records = make_service()
    record_id = svc.check_in(1, 7, ShiftType.MORNING, location_provider=ClientReportedLocation(NEAR), now=NOW)

    out = datetime(2026, 3, 10, 12, 1)
    svc.check_out(1, 7, record_id, location_provider=ClientReportedLocation(NEAR), now=out)

    r = records.get_by_id(record_id)
    assert r.status == ShiftStatus.COMPLETED
    assert r.check_out == out
    assert r.location_out == "10.7772, 106.7009"


def test_check_out_uses_same_geofence_rule():
    svc, records = make_service()
    record_id = svc.check_in(1, 7, ShiftType.MORNING, location_provider=ClientReportedLocation(NEAR), now=NOW)

    with pytest.raises(OutOfRange):
        svc.check_out(1, 7, record_id, location_provider=ClientReportedLocation(FAR), now=NOW.replace(hour=12))
    with pytest.raises(LocationUnavailable):
        svc.check_out(1, 7, record_id, now=NOW.replace(hour=12))

    assert records.get_by_id(record_id).status == ShiftStatus.CHECKED_IN
    assert records.writes == 1


def test_check_out_before_check_in_is_invalid_record():
    svc, records = make_service(office=None)
    record_id = svc.check_in(1, 7, ShiftType.MORNING, now=NOW)

    with pytest.raises(InvalidRecord):
        svc.check_out(1, 7, record_id, now=datetime(2026, 3, 10, 7, 0))
    assert records.get_by_id(record_id).check_out is None


def test_check_out_of_someone_elses_record_is_not_found():
    svc, _ = make_service(office=None)
    record_id = svc.check_in(1, 7, ShiftType.MORNING, now=NOW)

    with pytest.raises(NotFoundError):
        svc.check_out(2, 7, record_id, now=NOW.replace(hour=12))


def test_double_check_out_is_rejected():
    svc, _ = make_service(office=None)
    record_id = svc.check_in(1, 7, ShiftType.MORNING, now=NOW)
    svc.check_out(1, 7, record_id, now=NOW.replace(hour=12))

    with pytest.raises(ValidationError):
        svc.check_out(1, 7, record_id, now=NOW.replace(hour=13))


def test_writes_notify_listeners():
    notifier = ChangeNotifier()
    seen = []
    notifier.subscribe(1, seen.append)
    svc, _ = make_service(office=None, notifier=notifier)

    record_id = svc.check_in(1, 7, ShiftType.MORNING, now=NOW)
    svc.check_out(1, 7, record_id, now=NOW.replace(hour=12))

    assert seen == [1, 1]


def test_rejected_check_in_does_not_notify():
    notifier = ChangeNotifier()
    seen = []
    notifier.subscribe(1, seen.append)
    svc, _ = make_service(notifier=notifier)

    with pytest.raises(LocationUnavailable):
        svc.check_in(1, 7, ShiftType.MORNING, now=NOW)
    assert seen == []


def test_today_view_marks_missed_shift_absent():
    svc, _ = make_service(office=None)
    svc.check_in(1, 7, ShiftType.AFTERNOON, now=datetime(2026, 3, 10, 13, 0))

    rows = svc.today_view(1, 7, now=datetime(2026, 3, 10, 14, 0))

    morning, afternoon = rows
    assert morning["shift_type"] == "morning"
    assert morning["status"] == "absent"
    assert morning["can_check_in"] is True
    assert afternoon["status"] == "checked_in"
    assert afternoon["status_label"] == "Đang làm"
    assert afternoon["check_in"] == "13:00"
    assert afternoon["can_check_out"] is True


def test_today_view_without_team_is_empty():
    svc, _ = make_service()
    assert svc.today_view(1, None, now=NOW) == []


def test_monthly_stats_and_history():
    svc, records = make_service()
    records.add(ShiftRecord(1, 1, ShiftType.MORNING, date(2026, 3, 2), datetime(2026, 3, 2, 8), datetime(2026, 3, 2, 12), ShiftStatus.COMPLETED))
    records.add(ShiftRecord(2, 1, ShiftType.MORNING, date(2026, 3, 3), None, None, ShiftStatus.ABSENT))
    records.add(ShiftRecord(3, 1, ShiftType.MORNING, date(2026, 2, 27), None, None, ShiftStatus.ABSENT))

    stats = svc.monthly_stats(1, reference=date(2026, 3, 4))
    assert stats.as_dict() == {"total_shifts": 2, "completed_shifts": 1, "pending_shifts": 0, "absent_shifts": 1}

    week = svc.history(1, period="week", reference=date(2026, 3, 4))
    assert [r["date"] for r in week] == ["2026-03-03", "2026-03-02"]
    assert week[1]["check_out"] == "12:00"

    with pytest.raises(ValidationError):
        svc.history(1, period="year", reference=date(2026, 3, 4))


def test_parse_shift_type():
    assert parse_shift_type("Morning") == ShiftType.MORNING
    with pytest.raises(ValidationError):
        parse_shift_type("night")


class _DeniedProvider:
    def get_current_location(self):
        raise OSError("permission denied")


def test_failed_location_lookup_without_office_still_checks_in():
    svc, records = make_service(office=None)

    record_id = svc.check_in(1, 7, ShiftType.MORNING, location_provider=_DeniedProvider(), now=NOW)

    assert records.get_by_id(record_id).location == "Location unavailable"


def test_failed_location_lookup_with_office_is_location_unavailable():
    svc, records = make_service()

    with pytest.raises(LocationUnavailable):
        svc.check_in(1, 7, ShiftType.MORNING, location_provider=_DeniedProvider(), now=NOW)
    assert records.writes == 0
