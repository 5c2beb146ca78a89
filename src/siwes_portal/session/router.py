"""Session-gated router.

States move unauthenticated -> resolving -> {student, admin, guest} and back
to unauthenticated on sign-out. Views ask target_endpoint() where a session
belongs.
"""
from __future__ import annotations

import logging

from ..auth.model import Identity
from ..core.enums import Role, SessionState
from ..core.exceptions import ValidationError
from ..profiles.model import Profile
from .model import PortalSession

logger = logging.getLogger(__name__)

_STATE_FOR_ROLE = {
    Role.ADMIN: SessionState.ADMIN,
    Role.STUDENT: SessionState.STUDENT,
    Role.GUEST: SessionState.GUEST,
}

_ENDPOINT_FOR_STATE = {
    SessionState.UNAUTHENTICATED: "login",
    SessionState.RESOLVING: "login",
    SessionState.ADMIN: "admin_dashboard",
    SessionState.STUDENT: "student_dashboard",
    SessionState.GUEST: "student_dashboard",
}


def state_for_role(role) -> SessionState:
    """Missing or unrecognized roles route to the student state."""
    return _STATE_FOR_ROLE[Role.parse(role)]


class SessionRouter:
    def begin(self, identity: Identity) -> PortalSession:
        """unauthenticated -> resolving, after a successful external sign-in."""
        return PortalSession(state=SessionState.RESOLVING, user_id=identity.user_id, email=identity.email)

    def complete(self, session: PortalSession, profile: Profile) -> PortalSession:
        """resolving -> student/admin/guest, once the profile is resolved."""
        if session.state != SessionState.RESOLVING:
            raise ValidationError(f"Cannot complete sign-in from state '{session.state.value}'")
        if profile.user_id != session.user_id:
            raise ValidationError("Resolved profile does not belong to this session")

        state = state_for_role(profile.role)
        logger.debug("Session %s resolved to %s", session.user_id, state.value)
        return session.evolve(
            state=state,
            role=Role.parse(profile.role),
            first_name=profile.first_name,
            last_name=profile.last_name,
            student_id=profile.student_id,
        )

    def sign_out(self, session: PortalSession) -> PortalSession:
        """Any state -> unauthenticated. Nothing from the old session survives."""
        return PortalSession()

    def target_endpoint(self, session: PortalSession) -> str:
        return _ENDPOINT_FOR_STATE[session.state]
