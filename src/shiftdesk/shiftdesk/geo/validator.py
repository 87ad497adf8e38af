"""Geofence checks for check-in/check-out.

Distance uses the haversine formula on a sphere of radius 6,371 km, which is
accurate to well under a metre at office-radius scale.
"""

from __future__ import annotations

import logging
import math
from typing import Optional

from ..attendance.settings_model import AttendanceSettings
from ..core.constants import EARTH_RADIUS_METERS
from ..core.exceptions import LocationUnavailable, OutOfRange
from .model import GeoPoint

logger = logging.getLogger(__name__)


def distance_meters(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance between two points, in metres."""

    phi1 = math.radians(a.latitude)
    phi2 = math.radians(b.latitude)
    d_phi = math.radians(b.latitude - a.latitude)
    d_lambda = math.radians(b.longitude - a.longitude)

    h = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    # Rounding can push h a hair outside [0, 1] for antipodal points.
    h = min(max(h, 0.0), 1.0)
    return 2 * EARTH_RADIUS_METERS * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def is_within_radius(current: GeoPoint, office: GeoPoint, radius_meters: float) -> bool:
    return distance_meters(current, office) <= radius_meters


class GeofenceValidator:
    """Gate applied before recording a check-in or check-out."""

    def validate(self, settings: Optional[AttendanceSettings], current: Optional[GeoPoint]) -> None:
        """Raise when the action must be rejected; return None otherwise.

        - no office configured: anything passes, including an unknown location;
        - office configured, location unknown: LocationUnavailable;
        - office configured, location beyond the radius: OutOfRange.
        """

        if settings is None or not settings.geofence_enabled:
            return

        if current is None:
            logger.info("geofence rejected: location unavailable (team_id=%s)", settings.team_id)
            raise LocationUnavailable()

        distance = distance_meters(current, settings.office)
        if distance > settings.radius_meters:
            logger.info(
                "geofence rejected: %.1fm from office, radius %sm (team_id=%s)",
                distance,
                settings.radius_meters,
                settings.team_id,
            )
            raise OutOfRange(settings.radius_meters, distance)
