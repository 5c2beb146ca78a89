"""Create the database and apply the packaged schema.

schema.sql is written so that every statement ends with ';' at the end of a
line and uses CREATE TABLE IF NOT EXISTS, so applying it twice is harmless.
"""
from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterator, Optional, Union

from .connection import DatabaseConnection, DBConfig

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent / "schema.sql"

_STATEMENT_END = re.compile(r";[ \t]*$", re.MULTILINE)


def iter_sql_statements(sql: str) -> Iterator[str]:
    body = "\n".join(line for line in sql.splitlines() if not line.lstrip().startswith("--"))
    for chunk in _STATEMENT_END.split(body):
        stmt = chunk.strip()
        if stmt and not re.match(r"(?i)(CREATE\s+DATABASE|USE)\b", stmt):
            yield stmt


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    conn = DatabaseConnection(target).connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: Optional[Union[str, Path]] = None) -> None:
    ensure_database_exists(db_config)
    path = Path(schema_path or SCHEMA_PATH)

    target = DBConfig.from_dict(db_config)
    conn = DatabaseConnection(target).connect()
    try:
        cur = conn.cursor()
        for stmt in iter_sql_statements(path.read_text(encoding="utf-8")):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()
    logger.info("Applied %s to %s", path.name, target.describe())


def list_tables(db_config: dict) -> list:
    conn = DatabaseConnection(DBConfig.from_dict(db_config)).connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return sorted(row[0] for row in cur.fetchall())
    finally:
        conn.close()
