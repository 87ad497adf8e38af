from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.constants import GEOLOCATION_NOT_SUPPORTED, LOCATION_UNAVAILABLE
from ..core.exceptions import ValidationError

_UNAVAILABLE_SENTINELS = {LOCATION_UNAVAILABLE.lower(), GEOLOCATION_NOT_SUPPORTED.lower()}


@dataclass(frozen=True)
class GeoPoint:
    """Toạ độ địa lý (độ thập phân)."""

    latitude: float
    longitude: float

    def __post_init__(self):
        if not -90.0 <= self.latitude <= 90.0:
            raise ValidationError(f"Vĩ độ không hợp lệ: {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValidationError(f"Kinh độ không hợp lệ: {self.longitude}")


def parse_location(raw: Optional[str]) -> Optional[GeoPoint]:
    """Parse a stored/client location string ("lat, lon").

    Empty values and the "unavailable" sentinels yield None. Anything else
    that is not two numbers is rejected rather than treated as a position.
    """

    if raw is None:
        return None
    text = str(raw).strip()
    if not text or text.lower() in _UNAVAILABLE_SENTINELS:
        return None

    parts = [p.strip() for p in text.split(",")]
    if len(parts) != 2:
        raise ValidationError(f"Vị trí không hợp lệ: {raw!r}")
    try:
        lat, lon = float(parts[0]), float(parts[1])
    except ValueError:
        raise ValidationError(f"Vị trí không hợp lệ: {raw!r}")
    return GeoPoint(latitude=lat, longitude=lon)


def format_location(point: Optional[GeoPoint]) -> str:
    if point is None:
        return LOCATION_UNAVAILABLE
    return f"{point.latitude}, {point.longitude}"
