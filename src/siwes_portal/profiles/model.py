from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Profile:
    """Application-level user record, one per identity."""

    user_id: str
    first_name: str
    last_name: str
    role: Role
    student_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
