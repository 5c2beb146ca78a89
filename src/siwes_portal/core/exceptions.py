from __future__ import annotations

from .enums import GeolocationErrorCode


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when sign-in or sign-up is rejected by the auth gateway."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class ExternalServiceError(DomainError):
    """Raised when the backing store rejects a request.

    The message is the store's own text and is shown to the user as is.
    """


class DuplicateRecordError(ExternalServiceError):
    """Raised when a write violates a uniqueness constraint."""


class GeolocationError(DomainError):
    """Raised when the device could not provide a usable position."""

    def __init__(self, code: GeolocationErrorCode, message: str):
        super().__init__(message)
        self.code = code
