"""Helpers that keep tokens, API keys and user ids out of log lines."""

from __future__ import annotations

import hashlib
from typing import Any


def _digest(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()[:12]


def safe_log_identifier(value: Any, *, prefix: str) -> str:
    """Return a deterministic non-reversible token for log correlation fields."""
    text = str(value or "").strip()
    if not text:
        return f"{prefix}-missing"
    return f"{prefix}-{_digest(text)}"


def safe_rate_limit_key(key: str) -> str:
    """Hash the identifying part of a limiter key, keeping its scope and kind readable.

    ``email|api_key:secret`` becomes ``email|api_key:<digest>``.
    """
    scope, separator, rest = key.rpartition("|")
    kind, colon, value = rest.partition(":")
    if not colon:
        return f"{scope}{separator}{_digest(rest)}"
    return f"{scope}{separator}{kind}:{_digest(value) if value else 'missing'}"
