"""Mock identity provider for local development and tests."""

from app.adapters.auth.base import AuthVerificationError, IdentityProvider
from app.repositories.memory import InMemoryStore
from app.schemas.auth import AuthSession, IdentityUser

_SESSION_TTL_SECONDS = 3600


class MockIdentityProvider(IdentityProvider):
    """Accepts deterministic test tokens only.

    Token formats:
    - access: ``test:<user_id>``
    - refresh: ``refresh:<user_id>``

    ``sign_in`` checks credentials registered with ``InMemoryStore.register_account``.
    """

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def verify_token(self, token: str) -> IdentityUser:
        user_id = self._parse(token, prefix="test")
        account = self._store.get_account_by_id(user_id)
        return IdentityUser(id=user_id, email=account.email if account else None)

    def sign_in(self, email: str, password: str) -> AuthSession:
        account = self._store.get_account_by_email(email)
        if account is None or account.password != password:
            raise AuthVerificationError("Invalid credentials")
        return self._session(account.user_id, account.email)

    def refresh_session(self, refresh_token: str) -> AuthSession:
        user_id = self._parse(refresh_token, prefix="refresh")
        account = self._store.get_account_by_id(user_id)
        if account is None:
            raise AuthVerificationError("Invalid or expired refresh token")
        return self._session(account.user_id, account.email)

    @staticmethod
    def _parse(token: str, *, prefix: str) -> str:
        parts = token.split(":")
        if len(parts) != 2 or parts[0] != prefix:
            raise AuthVerificationError("Invalid bearer token")
        user_id = parts[1].strip()
        if not user_id:
            raise AuthVerificationError("Bearer token missing user identity")
        return user_id

    def _session(self, user_id: str, email: str) -> AuthSession:
        return AuthSession(
            access_token=f"test:{user_id}",
            refresh_token=f"refresh:{user_id}",
            expires_at=int(self._store.clock()) + _SESSION_TTL_SECONDS,
            user=IdentityUser(id=user_id, email=email),
        )


__all__ = ["MockIdentityProvider"]
