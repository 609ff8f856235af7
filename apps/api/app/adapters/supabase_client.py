"""Shared Supabase client construction."""

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)


class SupabaseUnavailableError(Exception):
    """Raised when the Supabase SDK or its connection settings are missing."""


def create_supabase_client(url: str | None, key: str | None) -> Any:
    if not url or not key:
        logger.error("supabase.config_missing url_configured=%s key_configured=%s", bool(url), bool(key))
        raise SupabaseUnavailableError("GALILEA_SUPABASE_URL and a Supabase key must be configured")

    try:
        from supabase import create_client
    except ImportError as exc:  # pragma: no cover - depends on optional package
        raise SupabaseUnavailableError("Supabase client library is unavailable") from exc

    return create_client(url, key)


__all__ = ["SupabaseUnavailableError", "create_supabase_client"]
