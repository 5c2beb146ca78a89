from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import all_rows, db_cursor, first_row
from .model import Profile
from .repository import ProfileRepository

_COLUMNS = "user_id, first_name, last_name, role, student_id, created_at, updated_at"


def _to_profile(row: dict) -> Profile:
    return Profile(
        user_id=str(row["user_id"]),
        first_name=row["first_name"],
        last_name=row["last_name"],
        role=Role.parse(row.get("role")),
        student_id=row.get("student_id"),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


class MySQLProfileRepository(ProfileRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_user_id(self, user_id: str) -> Optional[Profile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM profiles WHERE user_id=%s", (user_id,))
            row = first_row(cur)
            return _to_profile(row) if row else None

    def get_by_student_id(self, student_id: str) -> Optional[Profile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM profiles WHERE student_id=%s", (student_id,))
            row = first_row(cur)
            return _to_profile(row) if row else None

    def create(
        self,
        *,
        user_id: str,
        first_name: str,
        last_name: str,
        role: Role,
        student_id: Optional[str],
    ) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO profiles(user_id, first_name, last_name, role, student_id)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (user_id, first_name, last_name, role.value, student_id),
            )

    def update_names(self, *, user_id: str, first_name: str, last_name: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE profiles
                SET first_name=%s, last_name=%s
                WHERE user_id=%s
                """,
                (first_name, last_name, user_id),
            )

    def list_by_role(self, role: Role) -> Sequence[Profile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM profiles WHERE role=%s ORDER BY created_at DESC",
                (role.value,),
            )
            return [_to_profile(r) for r in all_rows(cur)]

    def count_by_role(self, role: Role) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM profiles WHERE role=%s", (role.value,))
            row = first_row(cur)
            return int(row["n"]) if row else 0
