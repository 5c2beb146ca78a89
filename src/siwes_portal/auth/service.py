from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..common.validators import (
    require_email,
    require_matching_passwords,
    require_min_length,
    require_non_empty,
    require_student_id,
    student_email,
)
from ..core.constants import DEFAULT_STUDENT_ID_PATTERN
from ..core.enums import Role
from ..core.exceptions import AuthenticationError
from ..profiles.service import IdentityResolver
from .gateway import AuthGateway
from .model import Identity, SignInResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginPolicy:
    student_id_pattern: str = DEFAULT_STUDENT_ID_PATTERN
    student_email_domain: str = "fud.edu.ng"
    default_student_password: str = ""
    min_password_length: int = 4
    auto_register_students: bool = True
    guest_login_enabled: bool = True

    @classmethod
    def from_config(cls, config) -> "LoginPolicy":
        return cls(
            student_id_pattern=config.get("STUDENT_ID_PATTERN", DEFAULT_STUDENT_ID_PATTERN),
            student_email_domain=config.get("STUDENT_EMAIL_DOMAIN", "fud.edu.ng"),
            default_student_password=config.get("DEFAULT_STUDENT_PASSWORD", ""),
            min_password_length=int(config.get("MIN_PASSWORD_LENGTH", 4)),
            auto_register_students=bool(config.get("AUTO_REGISTER_STUDENTS", True)),
            guest_login_enabled=bool(config.get("GUEST_LOGIN_ENABLED", True)),
        )


class LoginService:
    """Use case: sign in / sign up through the auth gateway, then resolve the profile."""

    def __init__(self, gateway: AuthGateway, resolver: IdentityResolver, policy: Optional[LoginPolicy] = None):
        self._gateway = gateway
        self._resolver = resolver
        self._policy = policy or LoginPolicy()

    def _finish(self, identity: Identity, claims: Optional[dict] = None) -> SignInResult:
        profile = self._resolver.resolve(identity, claims)
        return SignInResult(identity=identity, profile=profile)

    def _sign_in_or_register(self, email: str, password: str, claims: dict) -> Identity:
        try:
            return self._gateway.sign_in_with_password(email, password)
        except AuthenticationError as sign_in_error:
            try:
                identity = self._gateway.sign_up(email, password, claims=claims)
            except AuthenticationError:
                # Account exists, so the sign-in failure was a bad password.
                raise sign_in_error
            logger.info("Auto-registered %s on first sign-in", email)
            return identity

    def student_sign_in(self, student_id: str, password: str) -> SignInResult:
        student_id = require_student_id(student_id, self._policy.student_id_pattern)
        password = password or self._policy.default_student_password
        require_non_empty(password, "Password")

        email = student_email(student_id, self._policy.student_email_domain)
        claims = {"first_name": "Student", "last_name": student_id, "role": Role.STUDENT.value, "student_id": student_id}

        if self._policy.auto_register_students:
            require_min_length(password, "Password", self._policy.min_password_length)
            identity = self._sign_in_or_register(email, password, claims)
        else:
            identity = self._gateway.sign_in_with_password(email, password)

        logger.info("Student %s signed in", student_id)
        return self._finish(identity, claims)

    def admin_sign_in(self, email: str, password: str) -> SignInResult:
        email = require_email(email)
        password = require_non_empty(password, "Password")

        if self._resolver.is_bootstrap_admin(email):
            claims = {"first_name": "System", "last_name": "Administrator", "role": Role.ADMIN.value}
            identity = self._sign_in_or_register(email, password, claims)
        else:
            try:
                identity = self._gateway.sign_in_with_password(email, password)
            except AuthenticationError:
                logger.warning("Rejected admin sign-in for %s", email)
                raise
            claims = None

        return self._finish(identity, claims)

    def guest_sign_in(self) -> SignInResult:
        if not self._policy.guest_login_enabled:
            raise AuthenticationError("Guest Login Disabled: anonymous sign-ins are turned off for this portal")
        identity = self._gateway.sign_in_anonymously()
        logger.info("Guest session started for %s", identity.user_id)
        return self._finish(identity, {"first_name": "Guest", "last_name": "User", "role": Role.GUEST.value})

    def oauth_sign_in(self, provider: str) -> SignInResult:
        provider = require_non_empty(provider, "Provider").lower()
        identity = self._gateway.sign_in_with_oauth(provider)
        return self._finish(identity)

    def register(
        self,
        *,
        first_name: str,
        last_name: str,
        login: str,
        password: str,
        confirm_password: str,
    ) -> SignInResult:
        first_name = require_non_empty(first_name, "First name")
        last_name = require_non_empty(last_name, "Last name")
        login = require_non_empty(login, "Email or student ID")
        require_non_empty(password, "Password")
        require_non_empty(confirm_password, "Confirm password")
        require_matching_passwords(password, confirm_password)
        require_min_length(password, "Password", self._policy.min_password_length)

        claims = {"first_name": first_name, "last_name": last_name, "role": Role.STUDENT.value}
        if "@" in login:
            email = require_email(login)
        else:
            student_id = require_student_id(login, self._policy.student_id_pattern)
            email = student_email(student_id, self._policy.student_email_domain)
            claims["student_id"] = student_id

        identity = self._gateway.sign_up(email, password, claims=claims)
        logger.info("Registered %s", email)
        return self._finish(identity, claims)
