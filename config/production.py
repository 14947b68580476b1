import os

# Required; create_app refuses to start without it.
SECRET_KEY = os.getenv("SECRET_KEY", "")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "registration_db"),
}

ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "")
ADMIN_PASSWORD_HASH = os.getenv("ADMIN_PASSWORD_HASH", "")
# Plaintext fallback; prefer ADMIN_PASSWORD_HASH in production.
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "")

EVENT_NAME = os.getenv("EVENT_NAME", "NANMA Family Fest 2025")
EVENT_SLUG = os.getenv("EVENT_SLUG", "nanma-family-fest")

DEBUG = False
SESSION_COOKIE_SECURE = bool(int(os.getenv("SESSION_COOKIE_SECURE", "1")))
LOG_FILE = os.getenv("LOG_FILE", "logs/registration.log")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
