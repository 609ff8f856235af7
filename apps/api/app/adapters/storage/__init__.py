"""Object store adapters."""

from .base import ObjectStore, ObjectStoreError, StoredObject
from .supabase_storage import SupabaseObjectStore

__all__ = ["ObjectStore", "ObjectStoreError", "StoredObject", "SupabaseObjectStore"]
