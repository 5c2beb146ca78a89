from __future__ import annotations

from datetime import date, time
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_for_user_and_date(self, user_id: str, record_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_for_user(self, user_id: str, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def create(
        self,
        *,
        user_id: str,
        student_name: str,
        student_id: Optional[str],
        record_date: date,
        record_time: time,
        latitude: Optional[float],
        longitude: Optional[float],
        location: Optional[str],
    ) -> int:
        """Insert a record; raises DuplicateRecordError if (user_id, record_date) exists."""

        raise NotImplementedError

    def list_recent(self, limit: int) -> Sequence[AttendanceRecord]:
        """Newest first."""

        raise NotImplementedError

    def list_after(self, record_id: int, limit: int) -> Sequence[AttendanceRecord]:
        """Records with a larger id than record_id, oldest first."""

        raise NotImplementedError

    def count_all(self) -> int:
        raise NotImplementedError

    def count_for_date(self, record_date: date) -> int:
        raise NotImplementedError

    def delete_all(self) -> int:
        raise NotImplementedError
