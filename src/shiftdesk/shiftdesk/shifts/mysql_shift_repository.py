from __future__ import annotations

import logging
from datetime import time
from typing import Sequence

from ..core.enums import ShiftType
from ..core.exceptions import InvalidRecord
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, normalize_mysql_time
from .model import ShiftConfig
from .repository import ShiftConfigRepository

logger = logging.getLogger(__name__)


class MySQLShiftConfigRepository(ShiftConfigRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_team(self, team_id: int) -> Sequence[ShiftConfig]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT config_id, team_id, shift_type, start_time, end_time, required
                FROM shift_configurations
                WHERE team_id=%s
                ORDER BY FIELD(shift_type, 'morning', 'afternoon', 'overtime')
                """,
                (int(team_id),),
            )
            rows = fetchall(cur)

        configs = []
        for r in rows:
            try:
                shift_type = ShiftType.parse(r["shift_type"])
            except InvalidRecord:
                logger.warning("skipping shift config %s with unknown type %r", r["config_id"], r["shift_type"])
                continue
            configs.append(
                ShiftConfig(
                    config_id=int(r["config_id"]),
                    team_id=int(r["team_id"]),
                    shift_type=shift_type,
                    start_time=normalize_mysql_time(r.get("start_time")) or time(0, 0),
                    end_time=normalize_mysql_time(r.get("end_time")) or time(0, 0),
                    required=bool(r.get("required", True)),
                )
            )
        return configs
