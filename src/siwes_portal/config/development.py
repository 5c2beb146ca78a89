import os

from .base import *  # noqa: F401,F403
from .base import _csv, _flag

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

DEFAULT_STUDENT_PASSWORD = os.getenv("DEFAULT_STUDENT_PASSWORD", "password")

ADMIN_BOOTSTRAP_ENABLED = _flag("ADMIN_BOOTSTRAP_ENABLED", "1")
ADMIN_BOOTSTRAP_EMAILS = _csv("ADMIN_BOOTSTRAP_EMAILS", "admin@fud.edu.ng")

AUTO_INIT_DB = _flag("AUTO_INIT_DB", "1")
