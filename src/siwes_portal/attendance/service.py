from __future__ import annotations

import logging
import time as _time
from datetime import date, datetime
from typing import Any, Callable, Mapping, Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_HISTORY_LIMIT, GEOLOCATION_MAX_AGE_SECONDS, GEOLOCATION_TIMEOUT_SECONDS
from ..core.exceptions import AuthorizationError, DuplicateRecordError, ExternalServiceError
from ..session.model import PortalSession
from .geolocation import parse_fix
from .model import AttendanceRecord, CheckInResult, GeoPosition
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def already_checked_in_message(record: AttendanceRecord) -> str:
    return f"You already checked in today at {record.record_time.strftime('%H:%M:%S')}."


class AttendanceRecorder:
    """Use case: record at most one geolocated check-in per identity per day."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        *,
        timezone: Optional[str] = None,
        max_age_seconds: int = GEOLOCATION_MAX_AGE_SECONDS,
        timeout_seconds: int = GEOLOCATION_TIMEOUT_SECONDS,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._attendance = attendance
        self._timezone = timezone
        self.max_age_seconds = int(max_age_seconds)
        self.timeout_seconds = int(timeout_seconds)
        self._clock = clock or (lambda: now_local(self._timezone))

    def now(self) -> datetime:
        return self._clock()

    def today(self) -> date:
        return self.now().date()

    def read_fix(self, payload: Optional[Mapping[str, Any]], *, received_at: Optional[float] = None) -> GeoPosition:
        # A cached fix may be max_age old, plus the time the browser spent acquiring it.
        return parse_fix(
            payload,
            received_at=_time.time() if received_at is None else received_at,
            max_age_seconds=self.max_age_seconds + self.timeout_seconds,
        )

    def check_in(self, actor: PortalSession, position: GeoPosition, *, now: Optional[datetime] = None) -> CheckInResult:
        if not actor.can_check_in or not actor.user_id:
            raise AuthorizationError("Only students can check in")

        now = now or self.now()
        today = now.date()
        at = now.time().replace(microsecond=0)
        name = actor.display_name or "Unknown"

        # Read-before-write; the UNIQUE(user_id, record_date) key backs it up.
        existing = self._attendance.get_for_user_and_date(actor.user_id, today)
        if existing:
            return CheckInResult(record=existing, already_checked_in=True, message=already_checked_in_message(existing))

        try:
            record_id = self._attendance.create(
                user_id=actor.user_id,
                student_name=name,
                student_id=actor.student_id,
                record_date=today,
                record_time=at,
                latitude=position.latitude,
                longitude=position.longitude,
                location=position.label,
            )
        except DuplicateRecordError:
            existing = self._attendance.get_for_user_and_date(actor.user_id, today)
            if not existing:
                raise
            logger.info("Concurrent check-in for %s on %s collapsed", actor.user_id, today)
            return CheckInResult(record=existing, already_checked_in=True, message=already_checked_in_message(existing))
        except ExternalServiceError as e:
            logger.error("Check-in write rejected for %s: %s", actor.user_id, e)
            raise ExternalServiceError(f"Check-in could not be saved: {e}") from e

        record = AttendanceRecord(
            record_id=record_id,
            user_id=actor.user_id,
            student_name=name,
            student_id=actor.student_id,
            record_date=today,
            record_time=at,
            latitude=position.latitude,
            longitude=position.longitude,
            location=position.label,
            created_at=now,
        )
        logger.info("Check-in %s recorded for %s at %s", record_id, actor.user_id, now.isoformat())
        return CheckInResult(
            record=record,
            already_checked_in=False,
            message=f"Check-in successful. Location recorded: {position.latitude:.4f}, {position.longitude:.4f}",
        )

    def today_record(self, user_id: str, today: Optional[date] = None) -> Optional[AttendanceRecord]:
        return self._attendance.get_for_user_and_date(user_id, today or self.today())

    def history(self, user_id: str, *, limit: int = DEFAULT_HISTORY_LIMIT) -> Sequence[AttendanceRecord]:
        return self._attendance.list_for_user(user_id, limit)
