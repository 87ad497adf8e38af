from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import TaskPriority
from .model import Task

# Fields a caller may change through update().
UPDATABLE_FIELDS = ("title", "description", "priority", "deadline", "assignee_id", "column_id", "status")


class TaskRepository(Protocol):
    def list_for_team(self, team_id: int) -> Sequence[Task]:
        """Newest first."""

        raise NotImplementedError

    def get_by_id(self, task_id: int) -> Optional[Task]:
        raise NotImplementedError

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
        raise NotImplementedError

    def update(self, task_id: int, changes: dict) -> bool:
        """Apply a partial update; keys are a subset of UPDATABLE_FIELDS."""

        raise NotImplementedError

    def delete(self, task_id: int) -> bool:
        raise NotImplementedError

    def any_in_column(self, column_id: int) -> bool:
        raise NotImplementedError

    def set_status_for_column(self, column_id: int, status: str) -> int:
        """Set ``status`` on every task in the column; returns the number changed."""

        raise NotImplementedError
