from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.validators import require_non_empty, require_student_id
from ..core.constants import DEFAULT_STUDENT_ID_PATTERN
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..profiles.repository import ProfileRepository
from ..session.model import PortalSession
from .model import LocationAssignment
from .repository import LocationRepository

logger = logging.getLogger(__name__)


def _optional(value: Optional[str]) -> Optional[str]:
    value = (value or "").strip()
    return value or None


class LocationService:
    """Use case: admins assign each student one SIWES placement."""

    def __init__(
        self,
        locations: LocationRepository,
        profiles: ProfileRepository,
        *,
        student_id_pattern: str = DEFAULT_STUDENT_ID_PATTERN,
    ):
        self._locations = locations
        self._profiles = profiles
        self._pattern = student_id_pattern

    def assign(
        self,
        actor: PortalSession,
        *,
        student_id: str,
        location: str,
        company: Optional[str] = None,
        address: Optional[str] = None,
        supervisor: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> tuple[LocationAssignment, bool]:
        """Create or replace the student's assignment. Returns (assignment, created)."""
        if not actor.is_admin:
            raise AuthorizationError("Only admins can assign SIWES locations")

        student_id = require_student_id(student_id, self._pattern)
        location = require_non_empty(location, "Location")

        student = self._profiles.get_by_student_id(student_id)
        if not student or student.role != Role.STUDENT:
            raise ValidationError("No registered student has that student ID")

        fields = dict(
            location=location,
            company=_optional(company),
            address=_optional(address),
            supervisor=_optional(supervisor),
            phone=_optional(phone),
            assigned_by=actor.user_id,
        )

        existing = self._locations.get_by_student_id(student_id)
        if existing:
            self._locations.update(location_id=existing.location_id, **fields)
            logger.info("Location for %s updated by %s", student_id, actor.user_id)
            created = False
        else:
            self._locations.create(student_id=student_id, **fields)
            logger.info("Location for %s assigned by %s", student_id, actor.user_id)
            created = True

        assignment = self._locations.get_by_student_id(student_id)
        if not assignment:
            raise ValidationError("Location assignment could not be saved")
        return assignment, created

    def remove(self, actor: PortalSession, location_id: int) -> None:
        if not actor.is_admin:
            raise AuthorizationError("Only admins can remove SIWES locations")
        if not self._locations.delete_by_id(int(location_id)):
            raise ValidationError("Location assignment not found")
        logger.info("Location %s removed by %s", location_id, actor.user_id)

    def for_student(self, student_id: Optional[str]) -> Optional[LocationAssignment]:
        if not student_id:
            return None
        return self._locations.get_by_student_id(student_id)

    def list_with_names(self) -> Sequence[dict]:
        names = {p.student_id: p.display_name for p in self._profiles.list_by_role(Role.STUDENT) if p.student_id}
        return [
            {"assignment": a, "student_name": names.get(a.student_id, "Unknown")}
            for a in self._locations.list_all()
        ]
