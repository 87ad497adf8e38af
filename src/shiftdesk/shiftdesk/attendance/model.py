from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.constants import MAX_RECORD_YEAR, MIN_RECORD_YEAR
from ..core.enums import DayStatus, ShiftStatus, ShiftType
from ..core.exceptions import InvalidRecord


@dataclass(frozen=True)
class ShiftRecord:
    """Thực thể miền (domain): Bản ghi chấm công của một ca.

    (user_id, work_date, shift_type) is the natural key: at most one record.
    """

    record_id: int
    user_id: int
    shift_type: ShiftType
    work_date: date
    check_in: Optional[datetime]
    check_out: Optional[datetime]
    status: ShiftStatus
    location: Optional[str] = None
    location_out: Optional[str] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class DailyAggregate:
    """Read-model: tất cả ca của một ngày gộp lại thành một trạng thái."""

    work_date: date
    status: DayStatus
    records: tuple[ShiftRecord, ...]


@dataclass(frozen=True)
class MonthlyStats:
    total_shifts: int = 0
    completed_shifts: int = 0
    pending_shifts: int = 0
    absent_shifts: int = 0

    def as_dict(self) -> dict:
        return {
            "total_shifts": self.total_shifts,
            "completed_shifts": self.completed_shifts,
            "pending_shifts": self.pending_shifts,
            "absent_shifts": self.absent_shifts,
        }


def validate_record_times(
    *, work_date: date, check_in: Optional[datetime], check_out: Optional[datetime]
) -> None:
    if not MIN_RECORD_YEAR <= work_date.year <= MAX_RECORD_YEAR:
        raise InvalidRecord(f"Ngày chấm công không hợp lệ: {work_date.isoformat()}")
    if check_out is not None and check_in is None:
        raise InvalidRecord("Không thể chấm công ra khi chưa chấm công vào")
    if check_in is not None and check_out is not None and check_out < check_in:
        raise InvalidRecord("Giờ ra không được trước giờ vào")


def validate_record(record: ShiftRecord) -> ShiftRecord:
    validate_record_times(work_date=record.work_date, check_in=record.check_in, check_out=record.check_out)
    return record
