from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import fmt_time, month_bounds, now_local, week_bounds
from ..common.events import ChangeNotifier
from ..core.constants import DEFAULT_HISTORY_LIMIT, DEFAULT_LOCATION_TIMEOUT_SECONDS
from ..core.enums import ShiftStatus, ShiftType
from ..core.exceptions import NotFoundError, ValidationError
from ..geo.location import LocationProvider, resolve_location
from ..geo.model import GeoPoint, format_location
from ..geo.validator import GeofenceValidator
from ..shifts.model import SHIFT_LABELS
from ..shifts.repository import ShiftConfigRepository
from .aggregator import monthly_stats, records_between, shift_display_status
from .model import MonthlyStats, ShiftRecord, validate_record_times
from .repository import ShiftRecordRepository
from .settings_repository import AttendanceSettingsRepository

logger = logging.getLogger(__name__)

STATUS_LABELS = {
    ShiftStatus.CHECKED_IN: "Đang làm",
    ShiftStatus.COMPLETED: "Hoàn thành",
    ShiftStatus.PENDING: "Chờ xử lý",
    ShiftStatus.ABSENT: "Vắng mặt",
}

STATUS_CSS = {
    ShiftStatus.CHECKED_IN: "bg-info",
    ShiftStatus.COMPLETED: "bg-success",
    ShiftStatus.PENDING: "bg-light text-dark",
    ShiftStatus.ABSENT: "bg-danger",
}


def parse_shift_type(value) -> ShiftType:
    try:
        return ShiftType(str(value).strip().lower())
    except ValueError:
        raise ValidationError("Loại ca không hợp lệ")


class AttendanceService:
    """Use cases: chấm công vào/ra theo ca, xem hôm nay, thống kê tháng."""

    def __init__(
        self,
        records: ShiftRecordRepository,
        shifts: ShiftConfigRepository,
        settings: AttendanceSettingsRepository,
        *,
        geofence: GeofenceValidator | None = None,
        notifier: ChangeNotifier | None = None,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
        location_timeout: float = DEFAULT_LOCATION_TIMEOUT_SECONDS,
    ):
        self._records = records
        self._shifts = shifts
        self._settings = settings
        self._geofence = geofence or GeofenceValidator()
        self._notifier = notifier or ChangeNotifier()
        self._history_limit = int(history_limit)
        self._location_timeout = float(location_timeout)

    def _locate_and_validate(
        self, team_id: Optional[int], location_provider: Optional[LocationProvider]
    ) -> Optional[GeoPoint]:
        current = None
        if location_provider is not None:
            current = resolve_location(location_provider, timeout=self._location_timeout)

        settings = self._settings.get_for_team(team_id) if team_id is not None else None
        self._geofence.validate(settings, current)
        return current

    def check_in(
        self,
        user_id: int,
        team_id: Optional[int],
        shift_type: ShiftType,
        *,
        location_provider: Optional[LocationProvider] = None,
        now: datetime | None = None,
    ) -> int:
        now = now or now_local()
        today = now.date()

        current = self._locate_and_validate(team_id, location_provider)

        existing = self._records.find_record(user_id, today, shift_type)
        if existing and existing.check_in is not None:
            raise ValidationError(f"Bạn đã chấm công {SHIFT_LABELS[shift_type]} hôm nay rồi")

        validate_record_times(work_date=today, check_in=now, check_out=None)
        record_id = self._records.upsert_checkin(
            user_id=user_id,
            work_date=today,
            shift_type=shift_type,
            check_in=now,
            location=format_location(current),
        )
        logger.info("check-in user_id=%s shift=%s record_id=%s", user_id, shift_type.value, record_id)
        self._notifier.notify(user_id)
        return record_id

    def check_out(
        self,
        user_id: int,
        team_id: Optional[int],
        record_id: int,
        *,
        location_provider: Optional[LocationProvider] = None,
        now: datetime | None = None,
    ) -> None:
        now = now or now_local()

        current = self._locate_and_validate(team_id, location_provider)

        record = self._records.get_by_id(record_id)
        if not record or record.user_id != user_id:
            raise NotFoundError("Không tìm thấy bản ghi chấm công")
        if record.check_in is None:
            raise ValidationError("Bạn chưa chấm công vào ca này")
        if record.check_out is not None:
            raise ValidationError("Bạn đã chấm công ra ca này rồi")

        validate_record_times(work_date=record.work_date, check_in=record.check_in, check_out=now)
        if not self._records.update_checkout(record_id=record.record_id, check_out=now, location_out=format_location(current)):
            raise ValidationError("Chấm công ra ca thất bại")

        logger.info("check-out user_id=%s record_id=%s", user_id, record.record_id)
        self._notifier.notify(user_id)

    def today_view(self, user_id: int, team_id: Optional[int], *, now: datetime | None = None) -> list[dict]:
        now = now or now_local()
        configs = self._shifts.list_for_team(team_id) if team_id is not None else []
        records = {r.shift_type: r for r in self._records.list_for_user_and_date(user_id, now.date())}

        rows = []
        for config in configs:
            record = records.get(config.shift_type)
            status = shift_display_status(config, record, now)
            has_check_in = record is not None and record.check_in is not None
            has_check_out = record is not None and record.check_out is not None
            rows.append(
                {
                    "shift_type": config.shift_type.value,
                    "label": config.label,
                    "start_time": config.start_time.strftime("%H:%M"),
                    "end_time": config.end_time.strftime("%H:%M"),
                    "record_id": record.record_id if record else None,
                    "status": status.value,
                    "status_label": STATUS_LABELS.get(status, "Không xác định"),
                    "css_class": STATUS_CSS.get(status, "bg-secondary"),
                    "check_in": fmt_time(record.check_in if record else None),
                    "check_out": fmt_time(record.check_out if record else None),
                    "can_check_in": not has_check_in,
                    "can_check_out": has_check_in and not has_check_out,
                }
            )
        return rows

    def _recent(self, user_id: int) -> list[ShiftRecord]:
        return list(self._records.list_recent_for_user(user_id, self._history_limit))

    def monthly_stats(self, user_id: int, *, reference: date | None = None) -> MonthlyStats:
        reference = reference or now_local().date()
        return monthly_stats(self._recent(user_id), reference)

    def history(self, user_id: int, *, period: str = "week", reference: date | None = None) -> list[dict]:
        reference = reference or now_local().date()
        if period == "week":
            start, end = week_bounds(reference)
        elif period == "month":
            start, end = month_bounds(reference)
        else:
            raise ValidationError("Khoảng thời gian không hợp lệ")

        rows = records_between(self._recent(user_id), start, end)
        rows.sort(key=lambda r: (r.work_date, r.shift_type.value), reverse=True)
        return [self._to_ui(r) for r in rows]

    def _to_ui(self, r: ShiftRecord) -> dict:
        return {
            "record_id": r.record_id,
            "date": r.work_date.strftime("%Y-%m-%d"),
            "shift_type": r.shift_type.value,
            "label": SHIFT_LABELS.get(r.shift_type, "Unknown Shift"),
            "check_in": fmt_time(r.check_in),
            "check_out": fmt_time(r.check_out),
            "status": r.status.value,
            "status_label": STATUS_LABELS.get(r.status, "Chờ xử lý"),
            "css_class": STATUS_CSS.get(r.status, "bg-secondary"),
        }
