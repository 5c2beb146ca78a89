from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..core.constants import ANALYTICS_RECENT_LIMIT, ASSUMED_WORKING_DAYS, RECENT_RECORDS_LIMIT
from ..core.enums import Role
from ..core.exceptions import AuthorizationError
from ..locations.repository import LocationRepository
from ..profiles.repository import ProfileRepository
from ..session.model import PortalSession
from .csv_export import records_to_csv

logger = logging.getLogger(__name__)


def today_count(records: Iterable[AttendanceRecord], today: date) -> int:
    return sum(1 for r in records if r.record_date == today)


def attendance_rate(total_records: int, student_count: int, assumed_working_days: int = ASSUMED_WORKING_DAYS) -> int:
    """Rough percentage of expected check-ins that happened.

    Heuristic only: it assumes every student should check in on a fixed
    number of days and ignores enrolment dates. Always within [0, 100].
    """
    if total_records <= 0 or student_count <= 0 or assumed_working_days <= 0:
        return 0
    # Half-up rounding in integer arithmetic: 2.5 -> 3, like Math.round.
    expected = student_count * assumed_working_days
    rate = (200 * total_records + expected) // (2 * expected)
    return max(0, min(100, rate))


@dataclass(frozen=True)
class Overview:
    total_students: int
    today_check_ins: int
    total_check_ins: int
    locations_assigned: int
    attendance_rate: int
    recent: Sequence[AttendanceRecord] = ()


class AggregationService:
    """Read-only summaries for the admin dashboard, plus the admin-only purge."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        profiles: ProfileRepository,
        locations: LocationRepository,
        *,
        assumed_working_days: int = ASSUMED_WORKING_DAYS,
    ):
        self._attendance = attendance
        self._profiles = profiles
        self._locations = locations
        self._assumed_working_days = int(assumed_working_days)

    def overview(self, today: date, *, recent_limit: int = ANALYTICS_RECENT_LIMIT) -> Overview:
        students = self._profiles.count_by_role(Role.STUDENT)
        total = self._attendance.count_all()
        return Overview(
            total_students=students,
            today_check_ins=self._attendance.count_for_date(today),
            total_check_ins=total,
            locations_assigned=self._locations.count_all(),
            attendance_rate=attendance_rate(total, students, self._assumed_working_days),
            recent=list(self._attendance.list_recent(recent_limit)) if recent_limit else [],
        )

    def recent_records(self, limit: int = RECENT_RECORDS_LIMIT) -> Sequence[AttendanceRecord]:
        return list(self._attendance.list_recent(limit))

    def records_after(self, record_id: int, limit: int = RECENT_RECORDS_LIMIT) -> Sequence[AttendanceRecord]:
        return list(self._attendance.list_after(max(0, int(record_id)), limit))

    def count_for_date(self, day: date) -> int:
        return self._attendance.count_for_date(day)

    def export_csv(self, records: Sequence[AttendanceRecord]) -> Optional[str]:
        return records_to_csv(records)

    def clear_all(self, actor: PortalSession) -> int:
        if not actor.is_admin:
            raise AuthorizationError("Only admins can clear attendance records")
        deleted = self._attendance.delete_all()
        logger.warning("All attendance records cleared by %s (%d rows)", actor.user_id, deleted)
        return deleted
