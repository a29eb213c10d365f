"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

EMPTY_DURATION = "--"
ZERO_DURATION = "0h 0m"
IN_PROGRESS_DURATION = "In progress"
EMPTY_CHECK_OUT = "--:-- --"
EMPTY_CLOCK = "--:--"

DEFAULT_STANDARD_HOURS = 8
DEFAULT_LATE_AFTER = time(9, 5)
DEFAULT_HISTORY_LIMIT = 10
DEFAULT_FALLBACK_HOURLY_RATE = 50000
DAYS_IN_WEEK = 7

MAX_APPEND_ATTEMPTS = 3

ATTENDANCE_IMAGE_FOLDER = "attendance_images"
EMPLOYEE_FACE_FOLDER = "employee_faces"

UNKNOWN_LOCATION = "Unknown"
UNKNOWN_DEPARTMENT = "Unknown Department"

# Set by the authentication gateway in front of the API.
EMPLOYEE_HEADER = "X-Employee-Id"
