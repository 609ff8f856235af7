"""Record store interfaces."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

Record = dict[str, Any]


class RecordStoreError(Exception):
    """Raised when the backing database rejects or fails a query."""


@dataclass(frozen=True, slots=True)
class RecordQuery:
    """Filter, search, sort and pagination options for ``RecordStore.select``."""

    filters: dict[str, Any] = field(default_factory=dict)
    search: str | None = None
    search_columns: tuple[str, ...] = ()
    order_by: str | None = None
    descending: bool = False
    limit: int | None = None
    offset: int | None = None


class RecordStore(ABC):
    """Table-oriented persistence boundary."""

    @abstractmethod
    def select(self, table: str, query: RecordQuery | None = None) -> list[Record]:
        """Return records of ``table`` matching ``query``."""

    @abstractmethod
    def get(self, table: str, key: str, value: Any) -> Record | None:
        """Return the single record whose ``key`` column equals ``value``."""

    @abstractmethod
    def insert(self, table: str, values: Record) -> Record:
        """Insert and return the stored record."""

    @abstractmethod
    def update(self, table: str, key: str, value: Any, values: Record) -> Record | None:
        """Update the matching record and return it, or ``None`` if absent."""

    @abstractmethod
    def delete(self, table: str, key: str, value: Any) -> Record | None:
        """Delete the matching record and return it, or ``None`` if absent."""


__all__ = ["Record", "RecordQuery", "RecordStore", "RecordStoreError"]
