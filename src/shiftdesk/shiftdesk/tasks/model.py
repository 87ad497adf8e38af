from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import TaskPriority


@dataclass(frozen=True)
class Task:
    """Thực thể miền (domain): Công việc trên bảng Kanban."""

    task_id: int
    title: str
    creator_id: int
    team_id: int
    column_id: int
    status: str
    priority: TaskPriority = TaskPriority.MEDIUM
    description: Optional[str] = None
    deadline: Optional[date] = None
    assignee_id: Optional[int] = None
    group_id: Optional[int] = None
    space_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
