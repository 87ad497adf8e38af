from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Iterable, Optional, Sequence

from ..core.enums import ShiftStatus, ShiftType
from ..core.exceptions import InvalidRecord
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import ShiftRecord, validate_record
from .repository import ShiftRecordRepository

logger = logging.getLogger(__name__)

_COLUMNS = "record_id, user_id, shift_type, work_date, check_in, check_out, status, location, location_out, notes"


def _to_record(r: dict) -> ShiftRecord:
    """Row -> ShiftRecord; raises InvalidRecord for rows that break record rules."""

    record = ShiftRecord(
        record_id=int(r["record_id"]),
        user_id=int(r["user_id"]),
        shift_type=ShiftType.parse(r["shift_type"]),
        work_date=r["work_date"],
        check_in=r.get("check_in"),
        check_out=r.get("check_out"),
        status=ShiftStatus.parse(r.get("status")),
        location=r.get("location"),
        location_out=r.get("location_out"),
        notes=r.get("notes"),
    )
    return validate_record(record)


def _to_records(rows: Iterable[dict]) -> list[ShiftRecord]:
    records = []
    for r in rows:
        try:
            records.append(_to_record(r))
        except InvalidRecord as e:
            logger.warning("skipping shift_attendance row record_id=%s: %s", r.get("record_id"), e)
    return records


class MySQLShiftRecordRepository(ShiftRecordRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, record_id: int) -> Optional[ShiftRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM shift_attendance WHERE record_id=%s", (int(record_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def find_record(self, user_id: int, work_date: date, shift_type: ShiftType) -> Optional[ShiftRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM shift_attendance
                WHERE user_id=%s AND work_date=%s AND shift_type=%s
                """,
                (int(user_id), work_date, shift_type.value),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def upsert_checkin(
        self,
        *,
        user_id: int,
        work_date: date,
        shift_type: ShiftType,
        check_in: datetime,
        location: str,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            # LAST_INSERT_ID(expr) makes lastrowid the existing id on the update path.
            cur.execute(
                """
                INSERT INTO shift_attendance(user_id, shift_type, work_date, check_in, status, location)
                VALUES(%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    record_id=LAST_INSERT_ID(record_id),
                    check_in=VALUES(check_in),
                    status=VALUES(status),
                    location=VALUES(location)
                """,
                (int(user_id), shift_type.value, work_date, check_in, ShiftStatus.CHECKED_IN.value, location),
            )
            return int(cur.lastrowid)

    def update_checkout(
        self,
        *,
        record_id: int,
        check_out: datetime,
        location_out: str,
        status: ShiftStatus = ShiftStatus.COMPLETED,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE shift_attendance
                SET check_out=%s, location_out=%s, status=%s
                WHERE record_id=%s
                """,
                (check_out, location_out, status.value, int(record_id)),
            )
            return cur.rowcount > 0

    def list_recent_for_user(self, user_id: int, limit: int) -> Sequence[ShiftRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM shift_attendance
                WHERE user_id=%s
                ORDER BY work_date DESC
                LIMIT %s
                """,
                (int(user_id), int(limit)),
            )
            return _to_records(fetchall(cur))

    def list_for_user_and_date(self, user_id: int, work_date: date) -> Sequence[ShiftRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM shift_attendance
                WHERE user_id=%s AND work_date=%s
                ORDER BY shift_type
                """,
                (int(user_id), work_date),
            )
            return _to_records(fetchall(cur))
