"""FastAPI application entrypoint."""

from __future__ import annotations

import logging

from fastapi import Depends, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.config import Settings, get_settings
from app.core.cors import cors_options
from app.core.rate_limit import RateLimiter, RateLimitPolicy
from app.errors import ApiError
from app.repositories.memory import InMemoryStore
from app.routes import (
    auth_router,
    categories_router,
    consultations_router,
    email_router,
    posts_router,
    uploads_router,
    users_router,
)
from app.routes.dependencies import rate_limited
from app.schemas.error import ErrorResponse

logger = logging.getLogger(__name__)


def build_rate_limiter(settings: Settings) -> RateLimiter:
    """Create the process-wide limiter; invalid settings raise ``ConfigurationError``."""
    return RateLimiter(
        RateLimitPolicy(limit=settings.rate_limit_requests, window_seconds=settings.rate_limit_window),
        cleanup_interval_seconds=settings.rate_limit_cleanup_interval,
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(title="Galilea API", version="2.0.0")
    app.state.store = InMemoryStore()
    app.state.rate_limiter = build_rate_limiter(settings)

    app.add_middleware(CORSMiddleware, **cors_options(settings))

    @app.exception_handler(ApiError)
    async def handle_api_error(_, exc: ApiError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.payload.model_dump(mode="json", exclude_none=True),
            headers=exc.headers,
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.info("request.invalid method=%s path=%s", request.method, request.url.path)
        payload = ErrorResponse(
            code="VALIDATION_ERROR",
            message="Invalid request payload",
            details={"errors": jsonable_encoder(exc.errors(), exclude={"input", "ctx"})},
        )
        return JSONResponse(status_code=422, content=payload.model_dump(mode="json"))

    api_prefix = "/api/v1"
    default_rate_limit = [Depends(rate_limited())]
    for router in (
        auth_router,
        categories_router,
        posts_router,
        consultations_router,
        users_router,
        email_router,
        uploads_router,
    ):
        app.include_router(router, prefix=api_prefix, dependencies=default_rate_limit)

    return app


app = create_app()
