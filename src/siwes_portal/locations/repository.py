from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import LocationAssignment


class LocationRepository(Protocol):
    def get_by_student_id(self, student_id: str) -> Optional[LocationAssignment]:
        raise NotImplementedError

    def create(
        self,
        *,
        student_id: str,
        location: str,
        company: Optional[str],
        address: Optional[str],
        supervisor: Optional[str],
        phone: Optional[str],
        assigned_by: Optional[str],
    ) -> int:
        raise NotImplementedError

    def update(
        self,
        *,
        location_id: int,
        location: str,
        company: Optional[str],
        address: Optional[str],
        supervisor: Optional[str],
        phone: Optional[str],
        assigned_by: Optional[str],
    ) -> None:
        raise NotImplementedError

    def delete_by_id(self, location_id: int) -> bool:
        raise NotImplementedError

    def list_all(self) -> Sequence[LocationAssignment]:
        """Newest first."""

        raise NotImplementedError

    def count_all(self) -> int:
        raise NotImplementedError
