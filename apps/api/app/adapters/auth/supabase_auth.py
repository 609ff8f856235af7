"""Supabase Auth identity provider adapter."""

from __future__ import annotations

from typing import Any

from app.adapters.auth.base import AuthVerificationError, IdentityProvider
from app.adapters.supabase_client import SupabaseUnavailableError, create_supabase_client
from app.schemas.auth import AuthSession, IdentityUser


class SupabaseIdentityProvider(IdentityProvider):
    """Delegates token verification, sign-in and refresh to Supabase Auth."""

    def __init__(self, url: str | None, key: str | None) -> None:
        self._url = url
        self._key = key
        self._client: Any = None

    def _auth(self) -> Any:
        if self._client is None:
            try:
                self._client = create_supabase_client(self._url, self._key)
            except SupabaseUnavailableError as exc:
                raise AuthVerificationError("Identity provider is unavailable") from exc
        return self._client.auth

    def verify_token(self, token: str) -> IdentityUser:
        auth = self._auth()
        try:
            response = auth.get_user(token)
        except Exception as exc:  # pragma: no cover - provider exception surface
            raise AuthVerificationError("Invalid bearer token") from exc

        user = getattr(response, "user", None)
        if user is None or not getattr(user, "id", None):
            raise AuthVerificationError("Bearer token missing user identity")
        return IdentityUser(id=str(user.id), email=getattr(user, "email", None))

    def sign_in(self, email: str, password: str) -> AuthSession:
        auth = self._auth()
        try:
            response = auth.sign_in_with_password({"email": email, "password": password})
        except Exception as exc:  # pragma: no cover - provider exception surface
            raise AuthVerificationError("Invalid credentials") from exc
        return self._to_session(response, failure="Invalid credentials")

    def refresh_session(self, refresh_token: str) -> AuthSession:
        auth = self._auth()
        try:
            response = auth.refresh_session(refresh_token)
        except Exception as exc:  # pragma: no cover - provider exception surface
            raise AuthVerificationError("Invalid or expired refresh token") from exc
        return self._to_session(response, failure="Invalid or expired refresh token")

    @staticmethod
    def _to_session(response: Any, *, failure: str) -> AuthSession:
        session = getattr(response, "session", None)
        user = getattr(response, "user", None)
        if session is None:
            raise AuthVerificationError(failure)
        identity = None
        if user is not None and getattr(user, "id", None):
            identity = IdentityUser(id=str(user.id), email=getattr(user, "email", None))
        return AuthSession(
            access_token=session.access_token,
            refresh_token=session.refresh_token,
            expires_at=getattr(session, "expires_at", None),
            user=identity,
        )


__all__ = ["SupabaseIdentityProvider"]
