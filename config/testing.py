import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "faceclock_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

STANDARD_HOURS = 8
LATE_AFTER = "09:05"
FALLBACK_HOURLY_RATE = 50000

FACE_VERIFY_URL = ""
FACE_VERIFY_TIMEOUT = 1

MEDIA_ROOT = os.getenv("MEDIA_ROOT", "/tmp/faceclock-test-media")
MEDIA_BASE_URL = "http://testserver/media"

HISTORY_PAGE_SIZE = 10

# positional | next_checkout
PAIRING = os.getenv("PAIRING", "positional")
