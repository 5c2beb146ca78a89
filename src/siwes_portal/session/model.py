from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Optional

from ..core.enums import Role, SessionState

AUTHENTICATED_STATES = frozenset({SessionState.STUDENT, SessionState.ADMIN, SessionState.GUEST})


@dataclass(frozen=True)
class PortalSession:
    """What we store into the Flask session for the signed-in user."""

    state: SessionState = SessionState.UNAUTHENTICATED
    user_id: Optional[str] = None
    email: Optional[str] = None
    role: Optional[Role] = None
    first_name: str = ""
    last_name: str = ""
    student_id: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return self.state in AUTHENTICATED_STATES

    @property
    def is_admin(self) -> bool:
        return self.state == SessionState.ADMIN

    @property
    def can_check_in(self) -> bool:
        return self.state in {SessionState.STUDENT, SessionState.GUEST}

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def evolve(self, **changes) -> "PortalSession":
        return replace(self, **changes)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["state"] = self.state.value
        data["role"] = self.role.value if self.role else None
        return data

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "PortalSession":
        if not data:
            return cls()
        try:
            state = SessionState(data.get("state"))
        except ValueError:
            return cls()
        role = data.get("role")
        return cls(
            state=state,
            user_id=data.get("user_id"),
            email=data.get("email"),
            role=Role.parse(role) if role else None,
            first_name=data.get("first_name") or "",
            last_name=data.get("last_name") or "",
            student_id=data.get("student_id"),
        )
