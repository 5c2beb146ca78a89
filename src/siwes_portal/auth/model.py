from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..profiles.model import Profile


@dataclass(frozen=True)
class Identity:
    """An authenticated account as returned by the auth gateway.

    claims carries sign-up metadata (first_name, last_name, role, student_id).
    """

    user_id: str
    email: Optional[str]
    is_anonymous: bool = False
    claims: dict = field(default_factory=dict)


@dataclass(frozen=True)
class SignInResult:
    identity: Identity
    profile: Profile
