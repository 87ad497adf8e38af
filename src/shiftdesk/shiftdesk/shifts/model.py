from __future__ import annotations

from dataclasses import dataclass
from datetime import time

from ..core.enums import ShiftType

SHIFT_LABELS = {
    ShiftType.MORNING: "Buổi Sáng",
    ShiftType.AFTERNOON: "Buổi Chiều",
    ShiftType.OVERTIME: "Tăng Ca",
}


@dataclass(frozen=True)
class ShiftConfig:
    """Thực thể miền (domain): Cấu hình ca làm việc của một nhóm."""

    config_id: int
    team_id: int
    shift_type: ShiftType
    start_time: time
    end_time: time
    required: bool = True

    @property
    def label(self) -> str:
        return SHIFT_LABELS.get(self.shift_type, "Unknown Shift")
