from __future__ import annotations

from typing import Optional, Protocol

from .settings_model import AttendanceSettings


class AttendanceSettingsRepository(Protocol):
    def get_for_team(self, team_id: int) -> Optional[AttendanceSettings]:
        """Settings row for the team, or None when the team has none."""

        raise NotImplementedError
