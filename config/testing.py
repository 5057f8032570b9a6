import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "staff_attendance_test"),
}

TELEGRAM_TOKEN = "test-token"
TELEGRAM_API_BASE = "https://api.telegram.org"
TELEGRAM_POLL_TIMEOUT = 1

UPLOAD_DIR = os.getenv("UPLOAD_DIR", "uploads-test")
MAX_CONTENT_LENGTH = 1024 * 1024

MERGE_WINDOW_MINUTES = 5
REQUIRE_OWNER_ON_DELETE = False

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
