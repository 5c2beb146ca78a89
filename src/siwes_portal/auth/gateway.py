from __future__ import annotations

from typing import Optional, Protocol

from .model import Identity


class AuthGateway(Protocol):
    """Boundary to the identity provider.

    Every method returns an Identity or raises AuthenticationError /
    ExternalServiceError with the provider's message.
    """

    def sign_in_with_password(self, email: str, password: str) -> Identity:
        raise NotImplementedError

    def sign_up(self, email: str, password: str, *, claims: Optional[dict] = None) -> Identity:
        raise NotImplementedError

    def sign_in_anonymously(self) -> Identity:
        raise NotImplementedError

    def sign_in_with_oauth(self, provider: str) -> Identity:
        raise NotImplementedError
