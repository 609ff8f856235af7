"""Session routes."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.errors import ApiError
from app.routes.dependencies import (
    get_auth_service,
    get_authenticated_principal,
    get_bearer_token,
    rate_limited,
)
from app.schemas.auth import AuthPrincipal, LoginRequest, LoginResponse, MeResponse, RefreshResponse, SessionUser
from app.schemas.error import ErrorResponse, RateLimitError
from app.services.auth import AuthService

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={401: {"model": ErrorResponse}, 403: {"model": ErrorResponse}, 429: {"model": RateLimitError}},
    dependencies=[Depends(rate_limited(5, 60, scope="auth-login"))],
)
def login(
    payload: LoginRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> LoginResponse:
    return service.login(email=payload.email, password=payload.password)


@router.post(
    "/refresh",
    response_model=RefreshResponse,
    responses={401: {"model": ErrorResponse}},
)
def refresh(
    refresh_token: Annotated[str | None, Depends(get_bearer_token)],
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> RefreshResponse:
    if refresh_token is None:
        raise ApiError(status_code=401, code="UNAUTHORIZED", message="Missing or invalid Authorization header")
    return service.refresh(refresh_token)


@router.get(
    "/me",
    response_model=MeResponse,
    responses={401: {"model": ErrorResponse}},
)
def me(principal: Annotated[AuthPrincipal, Depends(get_authenticated_principal)]) -> MeResponse:
    return MeResponse(
        user=SessionUser(id=principal.user_id, email=principal.email, username=principal.username),
        role=principal.role,
        is_active=True,
    )
