from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import ShiftStatus, ShiftType
from .model import ShiftRecord


class ShiftRecordRepository(Protocol):
    def get_by_id(self, record_id: int) -> Optional[ShiftRecord]:
        raise NotImplementedError

    def find_record(self, user_id: int, work_date: date, shift_type: ShiftType) -> Optional[ShiftRecord]:
        raise NotImplementedError

    def upsert_checkin(
        self,
        *,
        user_id: int,
        work_date: date,
        shift_type: ShiftType,
        check_in: datetime,
        location: str,
    ) -> int:
        """Insert or update the record for (user_id, work_date, shift_type).

        The natural key makes concurrent first check-ins collapse into one row.
        Returns record_id.
        """

        raise NotImplementedError

    def update_checkout(
        self,
        *,
        record_id: int,
        check_out: datetime,
        location_out: str,
        status: ShiftStatus = ShiftStatus.COMPLETED,
    ) -> bool:
        raise NotImplementedError

    def list_recent_for_user(self, user_id: int, limit: int) -> Sequence[ShiftRecord]:
        """Newest records first."""

        raise NotImplementedError

    def list_for_user_and_date(self, user_id: int, work_date: date) -> Sequence[ShiftRecord]:
        raise NotImplementedError
