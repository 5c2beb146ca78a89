from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime, time, timedelta
from typing import Any, Dict, List, Optional

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import DuplicateRecordError, ExternalServiceError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


def translate_error(exc: mysql.connector.Error) -> ExternalServiceError:
    """Map a driver error to the domain; the MySQL message is kept verbatim."""
    message = getattr(exc, "msg", None) or str(exc)
    if getattr(exc, "errno", None) == errorcode.ER_DUP_ENTRY:
        return DuplicateRecordError(message)
    return ExternalServiceError(message)


@contextmanager
def db_cursor(db: DatabaseConnection, *, dictionary: bool = True):
    """Yield (conn, cursor) for one transaction.

    Commits when the block finishes, rolls back otherwise. Services only ever
    see ExternalServiceError / DuplicateRecordError, never driver exceptions.
    """
    try:
        conn = db.connect()
    except mysql.connector.Error as exc:
        logger.error("Cannot connect to %s: %s", db.config.describe(), exc)
        raise translate_error(exc) from exc

    cur = conn.cursor(dictionary=dictionary)
    try:
        yield conn, cur
        conn.commit()
    except mysql.connector.Error as exc:
        conn.rollback()
        raise translate_error(exc) from exc
    except Exception:
        conn.rollback()
        raise
    finally:
        cur.close()
        conn.close()


def first_row(cur) -> Optional[Dict[str, Any]]:
    return cur.fetchone() or None


def all_rows(cur) -> List[Dict[str, Any]]:
    return list(cur.fetchall() or [])


def as_time(value: Any) -> Optional[time]:
    # TIME columns arrive as time, timedelta or "H:MM:SS" depending on the driver build.
    if value is None or isinstance(value, time):
        return value
    if isinstance(value, timedelta):
        seconds = int(value.total_seconds()) % 86400
        return (datetime.min + timedelta(seconds=seconds)).time()
    if isinstance(value, str):
        return datetime.strptime(value.strip().split(".")[0], "%H:%M:%S").time()
    raise TypeError(f"Unsupported MySQL TIME value: {value!r}")
