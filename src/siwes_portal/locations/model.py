from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class LocationAssignment:
    """Where a student is placed for SIWES. One per student."""

    location_id: int
    student_id: str
    location: str
    company: Optional[str] = None
    address: Optional[str] = None
    supervisor: Optional[str] = None
    phone: Optional[str] = None
    assigned_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
