from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import ColumnColor
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .column_model import TaskColumn
from .column_repository import TaskColumnRepository


def _to_column(r: dict) -> TaskColumn:
    return TaskColumn(
        column_id=int(r["column_id"]),
        team_id=int(r["team_id"]),
        name=r["name"],
        position=int(r.get("position") or 0),
        color=ColumnColor.parse(r.get("color")),
    )


class MySQLTaskColumnRepository(TaskColumnRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_team(self, team_id: int) -> Sequence[TaskColumn]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT column_id, team_id, name, position, color
                FROM task_columns
                WHERE team_id=%s
                ORDER BY position ASC, column_id ASC
                """,
                (int(team_id),),
            )
            return [_to_column(r) for r in fetchall(cur)]

    def get_by_id(self, column_id: int) -> Optional[TaskColumn]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT column_id, team_id, name, position, color FROM task_columns WHERE column_id=%s",
                (int(column_id),),
            )
            r = fetchone(cur)
            return _to_column(r) if r else None

    def create(self, *, team_id: int, name: str, color: ColumnColor, position: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO task_columns(team_id, name, color, position) VALUES(%s,%s,%s,%s)",
                (int(team_id), name, color.value, int(position)),
            )
            return int(cur.lastrowid)

    def update(self, *, column_id: int, name: str, color: ColumnColor) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE task_columns SET name=%s, color=%s WHERE column_id=%s",
                (name, color.value, int(column_id)),
            )
            return cur.rowcount > 0

    def delete(self, column_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM task_columns WHERE column_id=%s", (int(column_id),))
            return cur.rowcount > 0
