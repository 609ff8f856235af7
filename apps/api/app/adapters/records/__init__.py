"""Record store adapters."""

from .base import Record, RecordQuery, RecordStore, RecordStoreError
from .supabase_records import SupabaseRecordStore

__all__ = ["Record", "RecordQuery", "RecordStore", "RecordStoreError", "SupabaseRecordStore"]
