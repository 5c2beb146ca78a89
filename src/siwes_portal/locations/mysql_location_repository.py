from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import all_rows, db_cursor, first_row
from .model import LocationAssignment
from .repository import LocationRepository

_COLUMNS = (
    "location_id, student_id, location, company, address, supervisor, phone, assigned_by, created_at, updated_at"
)


def _to_assignment(r: dict) -> LocationAssignment:
    return LocationAssignment(
        location_id=int(r["location_id"]),
        student_id=r["student_id"],
        location=r["location"],
        company=r.get("company"),
        address=r.get("address"),
        supervisor=r.get("supervisor"),
        phone=r.get("phone"),
        assigned_by=r.get("assigned_by"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLLocationRepository(LocationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_student_id(self, student_id: str) -> Optional[LocationAssignment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM siwes_locations WHERE student_id=%s", (student_id,))
            r = first_row(cur)
            return _to_assignment(r) if r else None

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO siwes_locations(student_id, location, company, address, supervisor, phone, assigned_by)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (student_id, location, company, address, supervisor, phone, assigned_by),
            )
            return int(cur.lastrowid)

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE siwes_locations
                SET location=%s, company=%s, address=%s, supervisor=%s, phone=%s, assigned_by=%s
                WHERE location_id=%s
                """,
                (location, company, address, supervisor, phone, assigned_by, int(location_id)),
            )

    def delete_by_id(self, location_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM siwes_locations WHERE location_id=%s", (int(location_id),))
            return cur.rowcount > 0

    def list_all(self) -> Sequence[LocationAssignment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM siwes_locations ORDER BY created_at DESC, location_id DESC")
            return [_to_assignment(r) for r in all_rows(cur)]

    def count_all(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM siwes_locations")
            row = first_row(cur)
            return int(row["n"]) if row else 0
