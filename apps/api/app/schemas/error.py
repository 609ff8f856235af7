"""API error response schemas."""

from typing import Any
from typing import Literal

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    code: str
    message: str
    details: dict[str, Any] | None = None


class NoLeakNotFoundError(BaseModel):
    code: Literal["RESOURCE_NOT_FOUND"]
    message: str


class FailedRoleCheck(BaseModel):
    required_role: str
    reason: Literal["exact_match_required", "insufficient_level"]


class ForbiddenErrorDetails(BaseModel):
    required_roles: list[str]
    actual_role: str | None = None
    failed_checks: list[FailedRoleCheck]


class ForbiddenError(BaseModel):
    code: Literal["FORBIDDEN"]
    message: str
    details: ForbiddenErrorDetails


class RateLimitErrorDetails(BaseModel):
    limit: int
    window_seconds: int
    retry_after_seconds: int


class RateLimitError(BaseModel):
    code: Literal["RATE_LIMITED"]
    message: str
    details: RateLimitErrorDetails
