"""Session service: login, refresh and principal resolution."""

from __future__ import annotations

import logging

from app.adapters.auth import AuthVerificationError, IdentityProvider
from app.core.logging_safety import safe_log_identifier
from app.errors import ApiError
from app.schemas.auth import AuthPrincipal, LoginResponse, RefreshResponse, SessionUser
from app.services.users import ProfileService

logger = logging.getLogger(__name__)


def _auth_error(message: str) -> ApiError:
    return ApiError(status_code=401, code="UNAUTHORIZED", message=message)


class AuthService:
    def __init__(self, identity: IdentityProvider, profiles: ProfileService) -> None:
        self._identity = identity
        self._profiles = profiles

    def resolve_principal(self, token: str) -> AuthPrincipal:
        """Verify an access token and attach the role from the caller's profile.

        Raises ``AuthVerificationError`` when the token is invalid or no active
        profile exists for the identity.
        """
        user = self._identity.verify_token(token)
        profile = self._profiles.get_profile(user.id)
        if profile is None or not profile.is_active:
            raise AuthVerificationError("User profile not found or inactive")
        return AuthPrincipal(user_id=user.id, role=profile.role, email=user.email, username=profile.username)

    def login(self, *, email: str, password: str) -> LoginResponse:
        try:
            session = self._identity.sign_in(email, password)
        except AuthVerificationError as exc:
            logger.warning("auth.login_rejected reason=invalid_credentials")
            raise _auth_error("Invalid credentials") from exc

        if session.user is None:
            raise _auth_error("Invalid credentials")

        profile = self._profiles.get_profile(session.user.id)
        safe_user_id = safe_log_identifier(session.user.id, prefix="pid")
        if profile is None or not profile.is_active:
            logger.warning("auth.login_rejected principal_id=%s reason=profile_missing", safe_user_id)
            raise ApiError(status_code=403, code="FORBIDDEN", message="User profile not found or access denied")

        logger.info("auth.login_accepted principal_id=%s role=%s", safe_user_id, profile.role)
        return LoginResponse(
            token=session.access_token,
            refresh_token=session.refresh_token,
            expires_at=session.expires_at,
            user=SessionUser(id=session.user.id, email=session.user.email, username=profile.username),
            role=profile.role,
        )

    def refresh(self, refresh_token: str) -> RefreshResponse:
        try:
            session = self._identity.refresh_session(refresh_token)
        except AuthVerificationError as exc:
            logger.warning("auth.refresh_rejected reason=%s", exc)
            raise _auth_error("Invalid or expired refresh token") from exc

        return RefreshResponse(
            token=session.access_token,
            refresh_token=session.refresh_token,
            expires_at=session.expires_at,
        )
