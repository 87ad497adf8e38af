from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from ..geo.model import GeoPoint
from .settings_model import AttendanceSettings
from .settings_repository import AttendanceSettingsRepository


class MySQLAttendanceSettingsRepository(AttendanceSettingsRepository):
    def __init__(self, conn_factory: DatabaseConnection, *, default_radius_meters: float):
        self._conn_factory = conn_factory
        self._default_radius = float(default_radius_meters)

    def get_for_team(self, team_id: int) -> Optional[AttendanceSettings]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT team_id, office_latitude, office_longitude, check_in_radius_meters
                FROM attendance_settings
                WHERE team_id=%s
                """,
                (int(team_id),),
            )
            r = fetchone(cur)
            if not r:
                return None

            office = None
            if r.get("office_latitude") is not None and r.get("office_longitude") is not None:
                office = GeoPoint(latitude=float(r["office_latitude"]), longitude=float(r["office_longitude"]))

            radius = r.get("check_in_radius_meters")
            return AttendanceSettings(
                team_id=int(r["team_id"]),
                office=office,
                radius_meters=float(radius) if radius is not None else self._default_radius,
            )
