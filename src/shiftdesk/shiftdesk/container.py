from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLShiftRecordRepository
from .attendance.mysql_settings_repository import MySQLAttendanceSettingsRepository
from .attendance.service import AttendanceService
from .common.events import ChangeNotifier
from .core.constants import (
    DEFAULT_CHECK_IN_RADIUS_METERS,
    DEFAULT_HISTORY_LIMIT,
    DEFAULT_LOCATION_TIMEOUT_SECONDS,
)
from .database.connection import DBConfig, DatabaseConnection
from .geo.validator import GeofenceValidator
from .shifts.mysql_shift_repository import MySQLShiftConfigRepository
from .tasks.mysql_column_repository import MySQLTaskColumnRepository
from .tasks.mysql_task_repository import MySQLTaskRepository
from .tasks.service import TaskBoardService
from .users.mysql_user_repository import MySQLUserRepository
from .users.service import UserDirectoryService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection
    notifier: ChangeNotifier

    users_repo: MySQLUserRepository
    shifts_repo: MySQLShiftConfigRepository
    settings_repo: MySQLAttendanceSettingsRepository
    records_repo: MySQLShiftRecordRepository
    tasks_repo: MySQLTaskRepository
    columns_repo: MySQLTaskColumnRepository

    user_service: UserDirectoryService
    attendance_service: AttendanceService
    task_board_service: TaskBoardService


def build_container(
    *,
    db_config: dict,
    default_radius_meters: float = DEFAULT_CHECK_IN_RADIUS_METERS,
    history_limit: int = DEFAULT_HISTORY_LIMIT,
    location_timeout: float = DEFAULT_LOCATION_TIMEOUT_SECONDS,
) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))
    notifier = ChangeNotifier()

    users_repo = MySQLUserRepository(conn)
    shifts_repo = MySQLShiftConfigRepository(conn)
    settings_repo = MySQLAttendanceSettingsRepository(conn, default_radius_meters=default_radius_meters)
    records_repo = MySQLShiftRecordRepository(conn)
    tasks_repo = MySQLTaskRepository(conn)
    columns_repo = MySQLTaskColumnRepository(conn)

    attendance_service = AttendanceService(
        records_repo,
        shifts_repo,
        settings_repo,
        geofence=GeofenceValidator(),
        notifier=notifier,
        history_limit=history_limit,
        location_timeout=location_timeout,
    )

    return Container(
        conn=conn,
        notifier=notifier,
        users_repo=users_repo,
        shifts_repo=shifts_repo,
        settings_repo=settings_repo,
        records_repo=records_repo,
        tasks_repo=tasks_repo,
        columns_repo=columns_repo,
        user_service=UserDirectoryService(users_repo),
        attendance_service=attendance_service,
        task_board_service=TaskBoardService(tasks_repo, columns_repo),
    )
