"""Settings shared by every environment.

Environment modules import * from here and override what differs.
"""

import os

from ..core.constants import DEFAULT_SESSION_DAYS, DEFAULT_STUDENT_ID_PATTERN


def _flag(name: str, default: str) -> bool:
    return bool(int(os.getenv(name, default)))


def _csv(name: str, default: str = "") -> tuple[str, ...]:
    raw = os.getenv(name, default)
    return tuple(item.strip().lower() for item in raw.split(",") if item.strip())


SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "siwes_portal"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
SESSION_DAYS = int(os.getenv("SESSION_DAYS", str(DEFAULT_SESSION_DAYS)))

# Dates and times on attendance records are taken in this timezone.
TIMEZONE = os.getenv("TIMEZONE", "Africa/Lagos")

STUDENT_ID_PATTERN = os.getenv("STUDENT_ID_PATTERN", DEFAULT_STUDENT_ID_PATTERN)
STUDENT_EMAIL_DOMAIN = os.getenv("STUDENT_EMAIL_DOMAIN", "fud.edu.ng")
MIN_PASSWORD_LENGTH = int(os.getenv("MIN_PASSWORD_LENGTH", "4"))

# Blank password on the student form falls back to this (empty disables it).
DEFAULT_STUDENT_PASSWORD = os.getenv("DEFAULT_STUDENT_PASSWORD", "")

# First student sign-in with an unknown id creates the account.
AUTO_REGISTER_STUDENTS = _flag("AUTO_REGISTER_STUDENTS", "1")

# Admin accounts may only be created for these emails, and only while enabled.
ADMIN_BOOTSTRAP_ENABLED = _flag("ADMIN_BOOTSTRAP_ENABLED", "0")
ADMIN_BOOTSTRAP_EMAILS = _csv("ADMIN_BOOTSTRAP_EMAILS")

GUEST_LOGIN_ENABLED = _flag("GUEST_LOGIN_ENABLED", "1")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = _flag("AUTO_INIT_DB", "0")
