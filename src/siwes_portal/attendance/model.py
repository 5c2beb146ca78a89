from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional


@dataclass(frozen=True)
class AttendanceRecord:
    """One check-in of one identity on one calendar date."""

    record_id: int
    user_id: str
    student_name: str
    student_id: Optional[str]
    record_date: date
    record_time: time
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    location: Optional[str] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "record_id": self.record_id,
            "student_name": self.student_name,
            "student_id": self.student_id or "",
            "date": self.record_date.strftime("%Y-%m-%d"),
            "time": self.record_time.strftime("%H:%M:%S"),
            "latitude": self.latitude,
            "longitude": self.longitude,
            "location": self.location or "Unknown",
        }


@dataclass(frozen=True)
class GeoPosition:
    latitude: float
    longitude: float
    accuracy: Optional[float] = None

    @property
    def label(self) -> str:
        return f"Location ({self.latitude:.4f}, {self.longitude:.4f})"


@dataclass(frozen=True)
class CheckInResult:
    record: AttendanceRecord
    already_checked_in: bool
    message: str
