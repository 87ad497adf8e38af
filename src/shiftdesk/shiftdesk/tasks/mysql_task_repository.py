from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import TaskPriority
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Task
from .repository import UPDATABLE_FIELDS, TaskRepository

_COLUMNS = (
    "task_id, title, description, priority, deadline, assignee_id, creator_id, team_id, status, "
    "column_id, group_id, space_id, created_at, updated_at, completed_at"
)


def _to_task(r: dict) -> Task:
    try:
        priority = TaskPriority(r.get("priority") or TaskPriority.MEDIUM.value)
    except ValueError:
        priority = TaskPriority.MEDIUM
    return Task(
        task_id=int(r["task_id"]),
        title=r["title"],
        creator_id=int(r["creator_id"]),
        team_id=int(r["team_id"]),
        column_id=int(r["column_id"]),
        status=r.get("status") or "",
        priority=priority,
        description=r.get("description"),
        deadline=r.get("deadline"),
        assignee_id=r.get("assignee_id"),
        group_id=r.get("group_id"),
        space_id=r.get("space_id"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
        completed_at=r.get("completed_at"),
    )


class MySQLTaskRepository(TaskRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_team(self, team_id: int) -> Sequence[Task]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM tasks WHERE team_id=%s ORDER BY created_at DESC, task_id DESC",
                (int(team_id),),
            )
            return [_to_task(r) for r in fetchall(cur)]

    def get_by_id(self, task_id: int) -> Optional[Task]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM tasks WHERE task_id=%s", (int(task_id),))
            r = fetchone(cur)
            return _to_task(r) if r else None

    def create(
        self,
        *,
        title: str,
        creator_id: int,
        team_id: int,
        column_id: int,
        status: str,
        priority: TaskPriority,
        description: Optional[str] = None,
        deadline: Optional[date] = None,
        assignee_id: Optional[int] = None,
        group_id: Optional[int] = None,
        space_id: Optional[int] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO tasks(title, description, priority, deadline, assignee_id, creator_id,
                                  team_id, status, column_id, group_id, space_id)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    title,
                    description,
                    priority.value,
                    deadline,
                    assignee_id,
                    int(creator_id),
                    int(team_id),
                    status,
                    int(column_id),
                    group_id,
                    space_id,
                ),
            )
            return int(cur.lastrowid)

    def update(self, task_id: int, changes: dict) -> bool:
        fields = [k for k in UPDATABLE_FIELDS if k in changes]
        if not fields:
            return False

        params: list[object] = []
        for k in fields:
            value = changes[k]
            params.append(value.value if isinstance(value, TaskPriority) else value)
        params.append(int(task_id))

        assignments = ", ".join(f"{k}=%s" for k in fields)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE tasks SET {assignments} WHERE task_id=%s", tuple(params))
            return cur.rowcount > 0

    def delete(self, task_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM tasks WHERE task_id=%s", (int(task_id),))
            return cur.rowcount > 0

    def any_in_column(self, column_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT task_id FROM tasks WHERE column_id=%s LIMIT 1", (int(column_id),))
            return fetchone(cur) is not None

    def set_status_for_column(self, column_id: int, status: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE tasks SET status=%s WHERE column_id=%s", (status, int(column_id)))
            return int(cur.rowcount)
