from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import parse_optional_date
from ..common.validators import require_max_length, require_non_empty, require_positive_id
from ..core.enums import ColumnColor, Role, TaskPriority
from ..core.exceptions import NotFoundError, ValidationError
from ..users.permissions import BOARD_EDITORS, require_role
from .column_model import TaskColumn
from .column_repository import TaskColumnRepository
from .model import Task
from .repository import TaskRepository

logger = logging.getLogger(__name__)

ASSIGNEE_ALL = "all"
ASSIGNEE_UNASSIGNED = "unassigned"


def parse_priority(value) -> TaskPriority:
    if value is None or value == "":
        return TaskPriority.MEDIUM
    try:
        return TaskPriority(str(value).lower())
    except ValueError:
        raise ValidationError("Mức ưu tiên không hợp lệ")


def _optional_id(value) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError("Mã người dùng không hợp lệ")


def filter_tasks(tasks: Iterable[Task], *, search: str = "", assignee: str = ASSIGNEE_ALL) -> list[Task]:
    """Case-insensitive search over title/description plus an assignee filter.

    ``assignee`` is "all", "unassigned" or a user id.
    """

    term = (search or "").strip().lower()
    assignee = str(assignee or ASSIGNEE_ALL)

    out = []
    for t in tasks:
        if term and term not in t.title.lower() and term not in (t.description or "").lower():
            continue
        if assignee == ASSIGNEE_UNASSIGNED and t.assignee_id is not None:
            continue
        if assignee not in (ASSIGNEE_ALL, ASSIGNEE_UNASSIGNED) and str(t.assignee_id) != assignee:
            continue
        out.append(t)
    return out


class TaskBoardService:
    """Use case: bảng Kanban theo nhóm (cột + công việc)."""

    def __init__(self, tasks: TaskRepository, columns: TaskColumnRepository):
        self._tasks = tasks
        self._columns = columns

    def _get_column(self, column_id: int, team_id: int) -> TaskColumn:
        column = self._columns.get_by_id(column_id)
        if not column or column.team_id != team_id:
            raise NotFoundError("Cột không tồn tại")
        return column

    def _get_task(self, task_id: int, team_id: int) -> Task:
        task = self._tasks.get_by_id(task_id)
        if not task or task.team_id != team_id:
            raise NotFoundError("Công việc không tồn tại")
        return task

    def load_board(self, team_id: int, *, search: str = "", assignee: str = ASSIGNEE_ALL) -> list[dict]:
        columns: Sequence[TaskColumn] = self._columns.list_for_team(team_id)
        tasks = filter_tasks(self._tasks.list_for_team(team_id), search=search, assignee=assignee)

        board = []
        for c in columns:
            column_tasks = [t for t in tasks if t.column_id == c.column_id]
            board.append(
                {
                    "column_id": c.column_id,
                    "name": c.name,
                    "color": c.color.value,
                    "position": c.position,
                    "task_count": len(column_tasks),
                    "tasks": [self._task_to_ui(t) for t in column_tasks],
                }
            )
        return board

    def create_column(self, *, current_role: Role, team_id: int, name: str, color: str | None = None) -> int:
        require_role(current_role, BOARD_EDITORS)
        name = require_max_length(require_non_empty(name, "Tên cột"), "Tên cột", 100)
        position = len(self._columns.list_for_team(team_id))
        column_id = self._columns.create(team_id=team_id, name=name, color=ColumnColor.parse(color), position=position)
        logger.info("column created team_id=%s column_id=%s", team_id, column_id)
        return column_id

    def update_column(
        self, *, current_role: Role, team_id: int, column_id: int, name: str | None = None, color: str | None = None
    ) -> None:
        require_role(current_role, BOARD_EDITORS)
        column = self._get_column(column_id, team_id)
        new_name = column.name if name is None else require_non_empty(name, "Tên cột")
        new_color = column.color if color is None else ColumnColor.parse(color)
        self._columns.update(column_id=column.column_id, name=new_name, color=new_color)
        if new_name != column.name:
            self._tasks.set_status_for_column(column.column_id, new_name)

    def delete_column(self, *, current_role: Role, team_id: int, column_id: int) -> None:
        require_role(current_role, BOARD_EDITORS)
        column = self._get_column(column_id, team_id)
        if self._tasks.any_in_column(column.column_id):
            raise ValidationError("Không thể xóa cột khi vẫn còn công việc trong đó.")
        if not self._columns.delete(column.column_id):
            raise ValidationError("Xóa cột thất bại")
        logger.info("column deleted column_id=%s", column.column_id)

    def create_task(
        self,
        *,
        current_role: Role,
        creator_id: int,
        team_id: int,
        column_id: int,
        title: str,
        priority: str | None = None,
        description: str | None = None,
        deadline: str | None = None,
        assignee_id=None,
        group_id=None,
        space_id=None,
    ) -> int:
        require_role(current_role, BOARD_EDITORS)
        title = require_non_empty(title, "Tiêu đề công việc")
        column = self._get_column(column_id, team_id)

        task_id = self._tasks.create(
            title=title,
            creator_id=creator_id,
            team_id=team_id,
            column_id=column.column_id,
            status=column.name,
            priority=parse_priority(priority),
            description=(description or "").strip() or None,
            deadline=parse_optional_date(deadline),
            assignee_id=_optional_id(assignee_id),
            group_id=_optional_id(group_id),
            space_id=_optional_id(space_id),
        )
        logger.info("task created team_id=%s task_id=%s", team_id, task_id)
        return task_id

    def update_task(self, *, current_role: Role, team_id: int, task_id: int, changes: dict) -> Task:
        require_role(current_role, BOARD_EDITORS)
        task = self._get_task(task_id, team_id)

        clean: dict = {}
        if "title" in changes:
            clean["title"] = require_non_empty(changes["title"], "Tiêu đề công việc")
        if "description" in changes:
            clean["description"] = (changes["description"] or "").strip() or None
        if "priority" in changes:
            clean["priority"] = parse_priority(changes["priority"])
        if "deadline" in changes:
            clean["deadline"] = parse_optional_date(changes["deadline"])
        if "assignee_id" in changes:
            clean["assignee_id"] = _optional_id(changes["assignee_id"])
        if "column_id" in changes and changes["column_id"] is not None:
            column = self._get_column(require_positive_id(changes["column_id"], "Cột"), team_id)
            # status follows the column name; update_column keeps it in sync on rename
            clean["column_id"] = column.column_id
            clean["status"] = column.name

        if clean:
            self._tasks.update(task.task_id, clean)
        return self._get_task(task.task_id, team_id)

    def delete_task(self, *, current_role: Role, team_id: int, task_id: int) -> None:
        require_role(current_role, BOARD_EDITORS)
        task = self._get_task(task_id, team_id)
        if not self._tasks.delete(task.task_id):
            raise ValidationError("Không xóa được công việc")
        logger.info("task deleted task_id=%s", task.task_id)

    def _task_to_ui(self, t: Task) -> dict:
        return {
            "task_id": t.task_id,
            "title": t.title,
            "description": t.description,
            "priority": t.priority.value,
            "deadline": t.deadline.strftime("%Y-%m-%d") if t.deadline else None,
            "assignee_id": t.assignee_id,
            "creator_id": t.creator_id,
            "status": t.status,
            "column_id": t.column_id,
        }
