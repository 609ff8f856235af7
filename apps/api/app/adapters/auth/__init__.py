"""Identity provider adapters."""

from .base import AuthVerificationError, IdentityProvider
from .mock_auth import MockIdentityProvider
from .supabase_auth import SupabaseIdentityProvider

__all__ = [
    "AuthVerificationError",
    "IdentityProvider",
    "MockIdentityProvider",
    "SupabaseIdentityProvider",
]
