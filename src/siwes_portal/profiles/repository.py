from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import Profile


class ProfileRepository(Protocol):
    def get_by_user_id(self, user_id: str) -> Optional[Profile]:
        raise NotImplementedError

    def get_by_student_id(self, student_id: str) -> Optional[Profile]:
        raise NotImplementedError

    def create(
        self,
        *,
        user_id: str,
        first_name: str,
        last_name: str,
        role: Role,
        student_id: Optional[str],
    ) -> None:
        """Insert a profile; raises DuplicateRecordError if user_id or student_id is taken."""

        raise NotImplementedError

    def update_names(self, *, user_id: str, first_name: str, last_name: str) -> None:
        """student_id is not editable: the account email is derived from it."""

        raise NotImplementedError

    def list_by_role(self, role: Role) -> Sequence[Profile]:
        raise NotImplementedError

    def count_by_role(self, role: Role) -> int:
        raise NotImplementedError
