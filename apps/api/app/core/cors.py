"""CORS options derived from settings."""

from __future__ import annotations

import re
from typing import Any

from app.core.config import Settings

ALLOW_METHODS = ["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"]
ALLOW_HEADERS = ["Content-Type", "Authorization", "Accept", "Origin", "X-Requested-With", "X-Correlation-Id"]
EXPOSE_HEADERS = [
    "Content-Length",
    "Content-Type",
    "Retry-After",
    "X-RateLimit-Limit",
    "X-RateLimit-Remaining",
    "X-RateLimit-Reset",
]


def _wildcard_pattern(origin: str) -> str:
    return "".join("[^/.]+" if part == "*" else re.escape(part) for part in re.split(r"(\*)", origin))


def cors_options(settings: Settings) -> dict[str, Any]:
    """Split configured origins into exact matches and a regex for ``*`` wildcard entries."""
    exact = [origin for origin in settings.cors_origins if "*" not in origin]
    wildcards = [origin for origin in settings.cors_origins if "*" in origin]
    origin_regex = None
    if wildcards:
        origin_regex = "^(?:" + "|".join(_wildcard_pattern(origin) for origin in wildcards) + ")$"

    return {
        "allow_origins": exact,
        "allow_origin_regex": origin_regex,
        "allow_credentials": settings.cors_credentials,
        "allow_methods": ALLOW_METHODS,
        "allow_headers": ALLOW_HEADERS,
        "expose_headers": EXPOSE_HEADERS,
        "max_age": settings.cors_max_age,
    }
