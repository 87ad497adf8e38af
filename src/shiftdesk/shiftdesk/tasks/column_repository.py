from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import ColumnColor
from .column_model import TaskColumn


class TaskColumnRepository(Protocol):
    def list_for_team(self, team_id: int) -> Sequence[TaskColumn]:
        """Ordered by position."""

        raise NotImplementedError

    def get_by_id(self, column_id: int) -> Optional[TaskColumn]:
        raise NotImplementedError

    def create(self, *, team_id: int, name: str, color: ColumnColor, position: int) -> int:
        raise NotImplementedError

    def update(self, *, column_id: int, name: str, color: ColumnColor) -> bool:
        raise NotImplementedError

    def delete(self, column_id: int) -> bool:
        raise NotImplementedError
