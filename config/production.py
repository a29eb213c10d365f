import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "faceclock_db"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

STANDARD_HOURS = float(os.getenv("STANDARD_HOURS", "8"))
LATE_AFTER = os.getenv("LATE_AFTER", "09:05")
FALLBACK_HOURLY_RATE = float(os.getenv("FALLBACK_HOURLY_RATE", "50000"))

# Required in production; check-in fails with a service error when empty.
FACE_VERIFY_URL = os.getenv("FACE_VERIFY_URL", "")
FACE_VERIFY_TIMEOUT = float(os.getenv("FACE_VERIFY_TIMEOUT", "10"))

MEDIA_ROOT = os.getenv("MEDIA_ROOT", "/var/lib/faceclock/media")
MEDIA_BASE_URL = os.getenv("MEDIA_BASE_URL", "/media")

HISTORY_PAGE_SIZE = int(os.getenv("HISTORY_PAGE_SIZE", "10"))

# positional | next_checkout
PAIRING = os.getenv("PAIRING", "positional")
