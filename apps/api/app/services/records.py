"""Shared helpers for table-backed services."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from app.adapters.records import Record, RecordQuery, RecordStore, RecordStoreError
from app.errors import ApiError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def not_found_error() -> ApiError:
    return ApiError(status_code=404, code="RESOURCE_NOT_FOUND", message="Resource not found")


def parse_order_by(value: str | None, *, default: str, allowed: frozenset[str]) -> tuple[str, bool]:
    """Parse ``"column"`` or ``"column asc|desc"`` into ``(column, descending)``."""
    column, _, direction = (value or default).strip().partition(" ")
    direction = direction.strip().lower()
    if column not in allowed or direction not in ("", "asc", "desc"):
        raise ApiError(
            status_code=400,
            code="VALIDATION_ERROR",
            message="Invalid order_by value",
            details={"allowed_columns": sorted(allowed)},
        )
    return column, direction == "desc"


class RecordService:
    """Base for services that read and write one table of the record store."""

    table: str = ""
    key: str = "id"

    def __init__(self, store: RecordStore) -> None:
        self._store = store

    def _run(self, operation: str, call: Callable[[], T], *, status_code: int = 500) -> T:
        try:
            return call()
        except RecordStoreError as exc:
            logger.error("store.error table=%s operation=%s error=%s", self.table, operation, exc)
            raise ApiError(
                status_code=status_code,
                code="STORE_ERROR",
                message=str(exc) or "Record store failure",
            ) from exc

    def _select(self, query: RecordQuery) -> list[Record]:
        return self._run("select", lambda: self._store.select(self.table, query))

    def _get(self, value: Any) -> Record:
        record = self._run("get", lambda: self._store.get(self.table, self.key, value))
        if record is None:
            raise not_found_error()
        return record

    def _insert(self, values: Record) -> Record:
        return self._run("insert", lambda: self._store.insert(self.table, values), status_code=400)

    def _update(self, value: Any, values: Record) -> Record:
        if not values:
            raise ApiError(status_code=400, code="VALIDATION_ERROR", message="No fields to update")
        record = self._run("update", lambda: self._store.update(self.table, self.key, value, values), status_code=400)
        if record is None:
            raise not_found_error()
        return record

    def _delete(self, value: Any) -> Record:
        record = self._run("delete", lambda: self._store.delete(self.table, self.key, value), status_code=400)
        if record is None:
            raise not_found_error()
        return record
