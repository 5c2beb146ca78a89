from __future__ import annotations

from enum import Enum
from typing import Optional


class Role(str, Enum):
    """Application role stored on a Profile."""

    ADMIN = "admin"
    STUDENT = "student"
    GUEST = "guest"

    @classmethod
    def parse(cls, value: Optional[str]) -> "Role":
        """Unknown or missing roles fall back to STUDENT."""
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.STUDENT


class SessionState(str, Enum):
    """States of the session-gated router."""

    UNAUTHENTICATED = "unauthenticated"
    RESOLVING = "resolving"
    STUDENT = "student"
    ADMIN = "admin"
    GUEST = "guest"


class GeolocationErrorCode(int, Enum):
    """W3C GeolocationPositionError codes, plus 0 for a missing capability."""

    UNSUPPORTED = 0
    PERMISSION_DENIED = 1
    POSITION_UNAVAILABLE = 2
    TIMEOUT = 3
