"""Dependency wiring for routes."""

from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from functools import lru_cache
from typing import Annotated
from uuid import uuid4

from fastapi import Depends, Request, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.adapters.auth import (
    AuthVerificationError,
    IdentityProvider,
    MockIdentityProvider,
    SupabaseIdentityProvider,
)
from app.adapters.email import EmailSender, MemoryEmailSender, SendGridEmailSender
from app.adapters.records import RecordStore, SupabaseRecordStore
from app.adapters.storage import ObjectStore, SupabaseObjectStore
from app.core.config import Settings, get_settings
from app.core.logging_safety import safe_log_identifier
from app.core.rate_limit import RateLimitDenial, RateLimiter, RateLimitPolicy
from app.domain.roles import AuthDenial, DenialKind, RoleRequirement, RoleSpec, check_authorization
from app.errors import ApiError, ConfigurationError
from app.repositories.memory import InMemoryStore
from app.schemas.auth import AuthPrincipal
from app.services.auth import AuthService
from app.services.categories import CategoryService
from app.services.consultations import ConsultationService
from app.services.email import ContactEmailService
from app.services.posts import PostService
from app.services.uploads import UploadService
from app.services.users import ProfileService, UserService

bearer_scheme = HTTPBearer(auto_error=False, scheme_name="bearerAuth")
logger = logging.getLogger(__name__)


def _auth_error(message: str) -> ApiError:
    return ApiError(status_code=401, code="UNAUTHORIZED", message=message)


def _request_correlation_id(request: Request) -> str:
    existing = getattr(request.state, "correlation_id", None)
    if isinstance(existing, str) and existing:
        return existing

    correlation_id = request.headers.get("X-Correlation-Id")
    if correlation_id:
        request.state.correlation_id = correlation_id
        return correlation_id

    generated = f"req-{uuid4()}"
    request.state.correlation_id = generated
    return generated


def get_store(request: Request) -> InMemoryStore:
    return request.app.state.store


def get_rate_limiter(request: Request) -> RateLimiter:
    return request.app.state.rate_limiter


@lru_cache(maxsize=4)
def _supabase_record_store(url: str | None, key: str | None) -> SupabaseRecordStore:
    return SupabaseRecordStore(url=url, key=key)


@lru_cache(maxsize=4)
def _supabase_object_store(url: str | None, key: str | None, bucket: str) -> SupabaseObjectStore:
    return SupabaseObjectStore(url=url, key=key, bucket=bucket)


def get_identity_provider(
    settings: Annotated[Settings, Depends(get_settings)],
    store: Annotated[InMemoryStore, Depends(get_store)],
) -> IdentityProvider:
    """Resolve identity adapter from configuration."""
    if settings.backend == "supabase":
        return SupabaseIdentityProvider(url=settings.supabase_url, key=settings.supabase_anon_key)
    return MockIdentityProvider(store)


def get_record_store(
    settings: Annotated[Settings, Depends(get_settings)],
    store: Annotated[InMemoryStore, Depends(get_store)],
) -> RecordStore:
    if settings.backend == "supabase":
        return _supabase_record_store(settings.supabase_url, settings.supabase_service_role_key)
    return store


def get_object_store(
    settings: Annotated[Settings, Depends(get_settings)],
    store: Annotated[InMemoryStore, Depends(get_store)],
) -> ObjectStore:
    if settings.backend == "supabase":
        return _supabase_object_store(
            settings.supabase_url,
            settings.supabase_service_role_key,
            settings.storage_bucket,
        )
    return store


def get_email_sender(
    settings: Annotated[Settings, Depends(get_settings)],
    store: Annotated[InMemoryStore, Depends(get_store)],
) -> EmailSender:
    if settings.email_provider == "sendgrid":
        return SendGridEmailSender(api_key=settings.sendgrid_api_key)
    return MemoryEmailSender(store)


def get_profile_service(records: Annotated[RecordStore, Depends(get_record_store)]) -> ProfileService:
    return ProfileService(records)


def get_auth_service(
    identity: Annotated[IdentityProvider, Depends(get_identity_provider)],
    profiles: Annotated[ProfileService, Depends(get_profile_service)],
) -> AuthService:
    return AuthService(identity, profiles)


def get_category_service(records: Annotated[RecordStore, Depends(get_record_store)]) -> CategoryService:
    return CategoryService(records)


def get_post_service(records: Annotated[RecordStore, Depends(get_record_store)]) -> PostService:
    return PostService(records)


def get_consultation_service(records: Annotated[RecordStore, Depends(get_record_store)]) -> ConsultationService:
    return ConsultationService(records)


def get_user_service(records: Annotated[RecordStore, Depends(get_record_store)]) -> UserService:
    return UserService(records)


def get_contact_email_service(
    sender: Annotated[EmailSender, Depends(get_email_sender)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> ContactEmailService:
    return ContactEmailService(sender, settings)


def get_upload_service(
    storage: Annotated[ObjectStore, Depends(get_object_store)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> UploadService:
    return UploadService(storage, folder=settings.storage_folder)


def get_bearer_token(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Security(bearer_scheme)],
) -> str | None:
    if credentials is None or credentials.scheme.lower() != "bearer" or not credentials.credentials:
        return None
    return credentials.credentials


def get_optional_principal(
    request: Request,
    token: Annotated[str | None, Depends(get_bearer_token)],
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> AuthPrincipal | None:
    """Resolve the caller when a bearer token is present; reject tokens that fail verification."""
    if token is None:
        return None

    safe_correlation_id = safe_log_identifier(_request_correlation_id(request), prefix="cid")
    try:
        principal = auth.resolve_principal(token)
    except AuthVerificationError as exc:
        logger.warning(
            "auth.rejected correlation_id=%s method=%s path=%s reason=token_verification_failed",
            safe_correlation_id,
            request.method,
            request.url.path,
        )
        raise _auth_error(str(exc) or "Invalid bearer token") from exc

    logger.info(
        "auth.accepted correlation_id=%s method=%s path=%s principal_id=%s role=%s",
        safe_correlation_id,
        request.method,
        request.url.path,
        safe_log_identifier(principal.user_id, prefix="pid"),
        principal.role,
    )
    request.state.auth_principal = principal
    return principal


def get_authenticated_principal(
    request: Request,
    principal: Annotated[AuthPrincipal | None, Depends(get_optional_principal)],
) -> AuthPrincipal:
    """Require a verified principal."""
    if principal is None:
        logger.warning(
            "auth.rejected correlation_id=%s method=%s path=%s reason=invalid_or_missing_bearer",
            safe_log_identifier(_request_correlation_id(request), prefix="cid"),
            request.method,
            request.url.path,
        )
        raise _auth_error("Invalid or missing bearer token")
    return principal


def _denial_error(denial: AuthDenial) -> ApiError:
    if denial.kind is DenialKind.UNAUTHENTICATED:
        return _auth_error("Invalid or missing bearer token")
    return ApiError(
        status_code=403,
        code="FORBIDDEN",
        message="Insufficient role for this operation",
        details=denial.to_details(),
    )


def require_role(*roles: str | RoleSpec) -> Callable[..., AuthPrincipal]:
    """Build a dependency granting access when the caller holds any of ``roles``.

    The requirement is validated when the route module is imported, so an empty
    role list fails at startup rather than per request.
    """
    requirement = RoleRequirement.of(*roles)

    def dependency(
        request: Request,
        principal: Annotated[AuthPrincipal | None, Depends(get_optional_principal)],
    ) -> AuthPrincipal:
        denial = check_authorization(principal, requirement)
        if denial is None:
            return principal

        logger.warning(
            "authz.denied correlation_id=%s method=%s path=%s kind=%s principal_id=%s role=%s required=%s",
            safe_log_identifier(_request_correlation_id(request), prefix="cid"),
            request.method,
            request.url.path,
            denial.kind.value,
            safe_log_identifier(principal.user_id if principal else None, prefix="pid"),
            denial.actual_role,
            ",".join(requirement.names()),
        )
        raise _denial_error(denial)

    return dependency


def rate_limit_key(request: Request) -> str:
    """Derive the limiter key: API key when presented, else client IP."""
    authorization = request.headers.get("Authorization")
    if authorization:
        api_key = authorization.strip()
        if api_key.startswith("Bearer "):
            api_key = api_key[len("Bearer ") :].strip()
        if api_key:
            return f"api_key:{api_key}"

    forwarded_for = request.headers.get("X-Forwarded-For", "").split(",")[0].strip()
    ip = request.headers.get("CF-Connecting-IP") or forwarded_for or (request.client.host if request.client else "")
    return f"ip:{ip or 'unknown'}"


def _rate_limit_error(denial: RateLimitDenial) -> ApiError:
    return ApiError(
        status_code=429,
        code="RATE_LIMITED",
        message=(
            f"Too Many Requests - limit of {denial.limit} requests per {denial.window_seconds} seconds exceeded. "
            f"Try again in {denial.retry_after_seconds} seconds."
        ),
        details={
            "limit": denial.limit,
            "window_seconds": denial.window_seconds,
            "retry_after_seconds": denial.retry_after_seconds,
        },
        headers={
            "Retry-After": str(denial.retry_after_seconds),
            "X-RateLimit-Limit": str(denial.limit),
            "X-RateLimit-Remaining": "0",
            "X-RateLimit-Reset": datetime.fromtimestamp(denial.reset_at, UTC).isoformat(),
        },
    )


def rate_limited(
    limit: int | None = None,
    window_seconds: int | None = None,
    *,
    scope: str | None = None,
) -> Callable[..., Awaitable[None]]:
    """Build a dependency that counts the request against the shared limiter.

    Without overrides the limiter's default policy applies. ``scope`` keeps a
    stricter per-endpoint counter separate from the default one.
    """
    if limit is not None and limit <= 0:
        raise ConfigurationError(f"Rate limit must be positive, got {limit}")
    if window_seconds is not None and window_seconds <= 0:
        raise ConfigurationError(f"Rate limit window must be positive, got {window_seconds}")

    async def dependency(
        request: Request,
        limiter: Annotated[RateLimiter, Depends(get_rate_limiter)],
    ) -> None:
        default = limiter.default_policy
        policy = default
        if limit is not None or window_seconds is not None:
            policy = RateLimitPolicy(
                limit=default.limit if limit is None else limit,
                window_seconds=default.window_seconds if window_seconds is None else window_seconds,
            )

        key = rate_limit_key(request)
        if scope:
            key = f"{scope}|{key}"
        denial = limiter.check(key, now=time.time(), policy=policy)
        if denial is not None:
            raise _rate_limit_error(denial)

    return dependency
