from __future__ import annotations

from typing import Protocol, Sequence

from .model import ShiftConfig


class ShiftConfigRepository(Protocol):
    def list_for_team(self, team_id: int) -> Sequence[ShiftConfig]:
        raise NotImplementedError
