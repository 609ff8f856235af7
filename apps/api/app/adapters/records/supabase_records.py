"""Supabase (PostgREST) record store adapter."""

from __future__ import annotations

from typing import Any

from app.adapters.records.base import Record, RecordQuery, RecordStore, RecordStoreError
from app.adapters.supabase_client import SupabaseUnavailableError, create_supabase_client

_DEFAULT_PAGE_SIZE = 100


def _quote_filter_value(value: str) -> str:
    """Double-quote a PostgREST filter value so commas and parentheses in it stay literal."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


class SupabaseRecordStore(RecordStore):
    def __init__(self, url: str | None, key: str | None) -> None:
        self._url = url
        self._key = key
        self._client: Any = None

    def _table(self, table: str) -> Any:
        if self._client is None:
            try:
                self._client = create_supabase_client(self._url, self._key)
            except SupabaseUnavailableError as exc:
                raise RecordStoreError(str(exc)) from exc
        return self._client.table(table)

    @staticmethod
    def _execute(builder: Any) -> list[Record]:
        try:
            response = builder.execute()
        except Exception as exc:  # pragma: no cover - provider exception surface
            raise RecordStoreError(getattr(exc, "message", None) or str(exc)) from exc
        return list(response.data or [])

    def select(self, table: str, query: RecordQuery | None = None) -> list[Record]:
        query = query or RecordQuery()
        builder = self._table(table).select("*")

        if query.search and query.search_columns:
            term = _quote_filter_value(f"%{query.search}%")
            builder = builder.or_(",".join(f"{column}.ilike.{term}" for column in query.search_columns))
        for column, value in query.filters.items():
            builder = builder.eq(column, value)
        if query.order_by:
            builder = builder.order(query.order_by, desc=query.descending)
        if query.offset is not None:
            end = query.offset + (query.limit or _DEFAULT_PAGE_SIZE) - 1
            builder = builder.range(query.offset, end)
        elif query.limit is not None:
            builder = builder.limit(query.limit)

        return self._execute(builder)

    def get(self, table: str, key: str, value: Any) -> Record | None:
        rows = self._execute(self._table(table).select("*").eq(key, value).limit(1))
        return rows[0] if rows else None

    def insert(self, table: str, values: Record) -> Record:
        rows = self._execute(self._table(table).insert(values))
        if not rows:
            raise RecordStoreError(f"Insert into {table} returned no record")
        return rows[0]

    def update(self, table: str, key: str, value: Any, values: Record) -> Record | None:
        rows = self._execute(self._table(table).update(values).eq(key, value))
        return rows[0] if rows else None

    def delete(self, table: str, key: str, value: Any) -> Record | None:
        rows = self._execute(self._table(table).delete().eq(key, value))
        return rows[0] if rows else None


__all__ = ["SupabaseRecordStore"]
