"""Identity provider interfaces."""

from abc import ABC, abstractmethod

from app.schemas.auth import AuthSession, IdentityUser


class AuthVerificationError(Exception):
    """Raised when a token or credential pair cannot be verified."""


class IdentityProvider(ABC):
    """Provider-neutral identity interface. Tokens are opaque to this service."""

    @abstractmethod
    def verify_token(self, token: str) -> IdentityUser:
        """Verify an access token and return the identity it belongs to."""

    @abstractmethod
    def sign_in(self, email: str, password: str) -> AuthSession:
        """Exchange credentials for a session carrying access and refresh tokens."""

    @abstractmethod
    def refresh_session(self, refresh_token: str) -> AuthSession:
        """Renew a session from its refresh token."""


__all__ = ["AuthVerificationError", "IdentityProvider"]
