from .base import *  # noqa: F401,F403

SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

TIMEZONE = "Africa/Lagos"
DEFAULT_STUDENT_PASSWORD = "password"
AUTO_REGISTER_STUDENTS = True
ADMIN_BOOTSTRAP_ENABLED = True
ADMIN_BOOTSTRAP_EMAILS = ("admin@fud.edu.ng",)
GUEST_LOGIN_ENABLED = True

AUTO_INIT_DB = False
