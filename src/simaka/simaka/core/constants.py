"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# Fixed normalization denominator for the attendance percentage. It is not a
# count of elapsed school days; reports depend on this exact normalization.
TOTAL_DAYS = 100

# Stored in `time` when no check-in time was recorded.
NOT_RECORDED = "-"

CLOCK_FORMAT = "%H:%M"

DEFAULT_ATTENDANCE_MAX_RETRIES = 3
MIN_PASSWORD_LENGTH = 8
TOP_STUDENTS_LIMIT = 5

DEFAULT_SETTINGS = {
    "school_name": "SMA Namira",
    "academic_year": "2025/2026",
    "semester": "Ganjil",
    "start_time": "07:00",
    "end_time": "15:00",
    "notifications": True,
    "language": "id",
    "theme": "light",
}

# VARCHAR widths from database/schema.sql.
NIS_MAX_LENGTH = 32
NAME_MAX_LENGTH = 120
EMAIL_MAX_LENGTH = 190
CLASS_MAX_LENGTH = 32
DAY_MAX_LENGTH = 16
ROOM_MAX_LENGTH = 32
DESCRIPTION_MAX_LENGTH = 255
SETTINGS_MAX_LENGTHS = {
    "school_name": 120,
    "academic_year": 16,
    "semester": 16,
    "language": 8,
    "theme": 16,
}
