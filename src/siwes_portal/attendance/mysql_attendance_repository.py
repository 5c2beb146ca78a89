from __future__ import annotations

from datetime import date, time
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import all_rows, as_time, db_cursor, first_row
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = (
    "record_id, user_id, student_name, student_id, record_date, record_time, "
    "latitude, longitude, location, created_at"
)


def _as_float(value) -> Optional[float]:
    return float(value) if value is not None else None


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=int(r["record_id"]),
        user_id=str(r["user_id"]),
        student_name=r["student_name"],
        student_id=r.get("student_id"),
        record_date=r["record_date"],
        record_time=as_time(r["record_time"]),
        latitude=_as_float(r.get("latitude")),
        longitude=_as_float(r.get("longitude")),
        location=r.get("location"),
        created_at=r.get("created_at"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_user_and_date(self, user_id: str, record_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE user_id=%s AND record_date=%s",
                (user_id, record_date),
            )
            r = first_row(cur)
            return _to_record(r) if r else None

    def list_for_user(self, user_id: str, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE user_id=%s
                ORDER BY record_date DESC, record_time DESC
                LIMIT %s
                """,
                (user_id, int(limit)),
            )
            return [_to_record(r) for r in all_rows(cur)]

    def create(
        self,
        *,
        user_id: str,
        student_name: str,
        student_id: Optional[str],
        record_date: date,
        record_time: time,
        latitude: Optional[float],
        longitude: Optional[float],
        location: Optional[str],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(
                    user_id, student_name, student_id, record_date, record_time, latitude, longitude, location
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (user_id, student_name, student_id, record_date, record_time, latitude, longitude, location),
            )
            return int(cur.lastrowid)

    def list_recent(self, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records ORDER BY created_at DESC, record_id DESC LIMIT %s",
                (int(limit),),
            )
            return [_to_record(r) for r in all_rows(cur)]

    def list_after(self, record_id: int, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE record_id > %s ORDER BY record_id ASC LIMIT %s",
                (int(record_id), int(limit)),
            )
            return [_to_record(r) for r in all_rows(cur)]

    def count_all(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM attendance_records")
            row = first_row(cur)
            return int(row["n"]) if row else 0

    def count_for_date(self, record_date: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM attendance_records WHERE record_date=%s", (record_date,))
            row = first_row(cur)
            return int(row["n"]) if row else 0

    def delete_all(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_records")
            return int(cur.rowcount)
