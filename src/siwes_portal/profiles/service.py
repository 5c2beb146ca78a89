from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from ..auth.model import Identity
from ..common.validators import require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, DuplicateRecordError, ExternalServiceError, ValidationError
from ..session.model import PortalSession
from .model import Profile
from .repository import ProfileRepository

logger = logging.getLogger(__name__)


class IdentityResolver:
    """Use case: fetch or create the single Profile of a signed-in identity."""

    def __init__(
        self,
        profiles: ProfileRepository,
        *,
        admin_emails: Iterable[str] = (),
        admin_bootstrap_enabled: bool = False,
    ):
        self._profiles = profiles
        self._admin_emails = frozenset(e.strip().lower() for e in admin_emails if e)
        self._admin_bootstrap_enabled = bool(admin_bootstrap_enabled)

    def is_bootstrap_admin(self, email: Optional[str]) -> bool:
        return self._admin_bootstrap_enabled and bool(email) and email.strip().lower() in self._admin_emails

    def _initial_role(self, identity: Identity, claims: dict) -> Role:
        if identity.is_anonymous:
            return Role.GUEST
        if self.is_bootstrap_admin(identity.email):
            return Role.ADMIN
        # An admin claim by itself never grants admin.
        claimed = Role.parse(claims.get("role"))
        return Role.GUEST if claimed == Role.GUEST else Role.STUDENT

    def _initial_names(self, role: Role, claims: dict) -> tuple[str, str]:
        first = (claims.get("first_name") or "").strip()
        last = (claims.get("last_name") or "").strip()
        if first or last:
            return first or "-", last or "-"
        if role == Role.GUEST:
            return "Guest", "User"
        if role == Role.ADMIN:
            return "System", "Administrator"
        return "Student", (claims.get("student_id") or "User")

    def resolve(self, identity: Identity, claims: Optional[dict] = None) -> Profile:
        existing = self._profiles.get_by_user_id(identity.user_id)
        if existing:
            return existing

        merged = {**identity.claims, **(claims or {})}
        role = self._initial_role(identity, merged)
        first_name, last_name = self._initial_names(role, merged)
        student_id = merged.get("student_id") if role == Role.STUDENT else None
        if student_id:
            holder = self._profiles.get_by_student_id(student_id)
            if holder and holder.user_id != identity.user_id:
                raise ValidationError("Student ID is already registered to another account")

        try:
            self._profiles.create(
                user_id=identity.user_id,
                first_name=first_name,
                last_name=last_name,
                role=role,
                student_id=student_id,
            )
            logger.info("Profile created for %s with role %s", identity.user_id, role.value)
        except DuplicateRecordError:
            # A concurrent sign-in may have created it first.
            logger.warning("Profile create for %s hit an existing row", identity.user_id)

        profile = self._profiles.get_by_user_id(identity.user_id)
        if not profile:
            raise ExternalServiceError("Could not create a profile for this account")
        return profile


class ProfileService:
    """Use case: read and edit profiles (students directory, own profile)."""

    def __init__(self, profiles: ProfileRepository):
        self._profiles = profiles

    def list_students(self, query: str = "") -> Sequence[Profile]:
        students = list(self._profiles.list_by_role(Role.STUDENT))
        needle = (query or "").strip().lower()
        if not needle:
            return students
        return [
            p
            for p in students
            if needle in p.first_name.lower()
            or needle in p.last_name.lower()
            or needle in (p.student_id or "").lower()
        ]

    def count_students(self) -> int:
        return self._profiles.count_by_role(Role.STUDENT)

    def update_profile(
        self,
        actor: PortalSession,
        *,
        user_id: str,
        first_name: str,
        last_name: str,
    ) -> Profile:
        """Rename a profile. The student id stays fixed because the sign-in email
        and the SIWES location assignment are keyed on it.
        """
        if not actor.is_authenticated or (actor.user_id != user_id and not actor.is_admin):
            raise AuthorizationError("You can only edit your own profile")

        profile = self._profiles.get_by_user_id(user_id)
        if not profile:
            raise ValidationError("Profile not found")

        first_name = require_non_empty(first_name, "First name")
        last_name = require_non_empty(last_name, "Last name")

        self._profiles.update_names(user_id=user_id, first_name=first_name, last_name=last_name)

        logger.info("Profile %s updated by %s", user_id, actor.user_id)
        return self._profiles.get_by_user_id(user_id) or profile
