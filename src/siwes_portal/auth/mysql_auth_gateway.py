from __future__ import annotations

import json
import logging
import uuid
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..core.exceptions import AuthenticationError, DuplicateRecordError, ExternalServiceError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, first_row
from .gateway import AuthGateway
from .model import Identity

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid login credentials"
ALREADY_REGISTERED = "User already registered"


class MySQLAuthGateway(AuthGateway):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _to_identity(self, row: dict) -> Identity:
        try:
            claims = json.loads(row.get("claims") or "{}")
        except ValueError:
            claims = {}
        return Identity(
            user_id=str(row["account_id"]),
            email=row.get("email"),
            is_anonymous=bool(row.get("is_anonymous")),
            claims=claims,
        )

    def sign_in_with_password(self, email: str, password: str) -> Identity:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT account_id, email, password_hash, is_anonymous, claims
                FROM accounts
                WHERE email=%s
                """,
                (email,),
            )
            row = first_row(cur)
            if not row or not row.get("password_hash"):
                raise AuthenticationError(INVALID_CREDENTIALS)

            try:
                ok = check_password_hash(row["password_hash"], password)
            except ValueError:
                # e.g. placeholder or corrupted hashes
                ok = False
            if not ok:
                raise AuthenticationError(INVALID_CREDENTIALS)

            cur.execute("UPDATE accounts SET last_sign_in_at=NOW() WHERE account_id=%s", (row["account_id"],))
            return self._to_identity(row)

    def sign_up(self, email: str, password: str, *, claims: Optional[dict] = None) -> Identity:
        account_id = str(uuid.uuid4())
        claims_json = json.dumps(claims or {})
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO accounts(account_id, email, password_hash, is_anonymous, claims, last_sign_in_at)
                    VALUES(%s,%s,%s,0,%s,NOW())
                    """,
                    (account_id, email, generate_password_hash(password), claims_json),
                )
        except DuplicateRecordError:
            raise AuthenticationError(ALREADY_REGISTERED)

        logger.info("Account created for %s", email)
        return Identity(user_id=account_id, email=email, is_anonymous=False, claims=dict(claims or {}))

    def sign_in_anonymously(self) -> Identity:
        account_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO accounts(account_id, email, password_hash, is_anonymous, claims, last_sign_in_at)
                VALUES(%s,NULL,NULL,1,'{}',NOW())
                """,
                (account_id,),
            )
        return Identity(user_id=account_id, email=None, is_anonymous=True)

    def sign_in_with_oauth(self, provider: str) -> Identity:
        raise ExternalServiceError(f"Unsupported provider: provider '{provider}' is not enabled")
