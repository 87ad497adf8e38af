"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

EARTH_RADIUS_METERS = 6_371_000

DEFAULT_CHECK_IN_RADIUS_METERS = 100
DEFAULT_HISTORY_LIMIT = 100
DEFAULT_LOCATION_TIMEOUT_SECONDS = 10.0

LOCATION_UNAVAILABLE = "Location unavailable"
GEOLOCATION_NOT_SUPPORTED = "Geolocation not supported"

# Records dated outside this window are rejected as corrupt input.
MIN_RECORD_YEAR = 2000
MAX_RECORD_YEAR = 2100
