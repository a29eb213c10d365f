import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "faceclock_db"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

# Giờ làm chuẩn mỗi ngày và mốc tính đi muộn
STANDARD_HOURS = float(os.getenv("STANDARD_HOURS", "8"))
LATE_AFTER = os.getenv("LATE_AFTER", "09:05")
FALLBACK_HOURLY_RATE = float(os.getenv("FALLBACK_HOURLY_RATE", "50000"))

FACE_VERIFY_URL = os.getenv("FACE_VERIFY_URL", "http://localhost:5001/verify")
FACE_VERIFY_TIMEOUT = float(os.getenv("FACE_VERIFY_TIMEOUT", "10"))

MEDIA_ROOT = os.getenv("MEDIA_ROOT", "media")
MEDIA_BASE_URL = os.getenv("MEDIA_BASE_URL", "http://localhost:5000/media")

HISTORY_PAGE_SIZE = int(os.getenv("HISTORY_PAGE_SIZE", "10"))

# positional | next_checkout
PAIRING = os.getenv("PAIRING", "positional")
