from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import ColumnColor


@dataclass(frozen=True)
class TaskColumn:
    column_id: int
    team_id: int
    name: str
    position: int
    color: ColumnColor = ColumnColor.GRAY
