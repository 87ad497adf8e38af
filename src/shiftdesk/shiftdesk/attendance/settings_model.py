from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.constants import DEFAULT_CHECK_IN_RADIUS_METERS
from ..core.exceptions import ValidationError
from ..geo.model import GeoPoint


@dataclass(frozen=True)
class AttendanceSettings:
    """Cài đặt chấm công theo nhóm.

    Without an office point geofencing is disabled for the team.
    """

    team_id: int
    office: Optional[GeoPoint] = None
    radius_meters: float = DEFAULT_CHECK_IN_RADIUS_METERS

    def __post_init__(self):
        if self.radius_meters is None or self.radius_meters < 0:
            raise ValidationError("Bán kính chấm công không hợp lệ")

    @property
    def geofence_enabled(self) -> bool:
        return self.office is not None
