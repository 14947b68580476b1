import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "registration_test_db"),
}

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD_HASH = ""
ADMIN_PASSWORD = "test-password"

EVENT_NAME = "Test Event"
EVENT_SLUG = "test-event"

DEBUG = False
TESTING = True
SESSION_COOKIE_SECURE = False
LOG_FILE = ""

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
