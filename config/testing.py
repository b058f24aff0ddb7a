import os

from config import logging_config

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "simaka_test"),
}

DEBUG = False
TESTING = True

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

ATTENDANCE_MAX_RETRIES = 3
REQUIRE_LOGIN = bool(int(os.getenv("REQUIRE_LOGIN", "0")))

DEFAULT_ADMIN_PASSWORD = "admin-password"
DEFAULT_TEACHER_PASSWORD = "teacher-password"

LOGGING = logging_config("WARNING")
