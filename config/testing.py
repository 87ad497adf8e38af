import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "shiftdesk_test"),
}

DEBUG = False
TESTING = True

AUTO_INIT_DB = False

DEFAULT_CHECK_IN_RADIUS_METERS = 100
LOCATION_TIMEOUT_SECONDS = 1.0
HISTORY_LIMIT = 100
