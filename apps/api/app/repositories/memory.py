"""In-memory backend used for local development and tests.

Implements the record store and object store boundaries and holds the
identity accounts and outbound email log consumed by the mock adapters.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from itertools import count
from typing import TYPE_CHECKING, Any
from uuid import uuid4

from app.adapters.records.base import Record, RecordQuery, RecordStore, RecordStoreError
from app.adapters.storage.base import ObjectStore, ObjectStoreError, StoredObject

if TYPE_CHECKING:
    from app.adapters.email.base import TemplateEmail

_SERIAL_ID_TABLES = frozenset({"categories"})
_NO_ID_TABLES = frozenset({"users", "admin_profiles"})
_PUBLIC_URL_BASE = "memory://storage"


@dataclass(slots=True)
class AccountRecord:
    user_id: str
    email: str
    password: str


@dataclass(slots=True)
class ObjectRecord:
    path: str
    content: bytes
    content_type: str | None
    created_at: datetime


@dataclass(slots=True)
class InMemoryStore(RecordStore, ObjectStore):
    """Simple, deterministic persistence layer for scaffolding and tests."""

    tables: dict[str, list[Record]] = field(default_factory=dict)
    objects: dict[str, ObjectRecord] = field(default_factory=dict)
    accounts: dict[str, AccountRecord] = field(default_factory=dict)
    sent_emails: list[TemplateEmail] = field(default_factory=list)
    clock: Callable[[], float] = time.time
    record_write_count: int = 0
    object_write_count: int = 0
    store_failure_message: str | None = None
    email_failure_message: str | None = None
    _serials: dict[str, count] = field(default_factory=dict)

    def register_account(self, *, email: str, password: str, user_id: str | None = None) -> AccountRecord:
        account = AccountRecord(user_id=user_id or str(uuid4()), email=email, password=password)
        self.accounts[account.user_id] = account
        return account

    def get_account_by_id(self, user_id: str) -> AccountRecord | None:
        return self.accounts.get(user_id)

    def get_account_by_email(self, email: str) -> AccountRecord | None:
        for account in self.accounts.values():
            if account.email == email:
                return account
        return None

    def _check_failpoint(self) -> None:
        if self.store_failure_message is not None:
            raise RecordStoreError(self.store_failure_message)

    def _rows(self, table: str) -> list[Record]:
        return self.tables.setdefault(table, [])

    def _next_id(self, table: str) -> Any:
        if table in _SERIAL_ID_TABLES:
            return next(self._serials.setdefault(table, count(1)))
        return str(uuid4())

    def select(self, table: str, query: RecordQuery | None = None) -> list[Record]:
        self._check_failpoint()
        query = query or RecordQuery()
        rows = [dict(row) for row in self._rows(table)]

        if query.search and query.search_columns:
            needle = query.search.lower()
            rows = [
                row
                for row in rows
                if any(needle in str(row.get(column) or "").lower() for column in query.search_columns)
            ]
        for column, value in query.filters.items():
            rows = [row for row in rows if row.get(column) == value]
        if query.order_by:
            present = [row for row in rows if row.get(query.order_by) is not None]
            missing = [row for row in rows if row.get(query.order_by) is None]
            present.sort(key=lambda row: row[query.order_by], reverse=query.descending)
            rows = present + missing

        offset = query.offset or 0
        if query.limit is not None:
            return rows[offset : offset + query.limit]
        return rows[offset:]

    def get(self, table: str, key: str, value: Any) -> Record | None:
        self._check_failpoint()
        for row in self._rows(table):
            if row.get(key) == value:
                return dict(row)
        return None

    def insert(self, table: str, values: Record) -> Record:
        self._check_failpoint()
        now = datetime.now(UTC)
        row = dict(values)
        if table not in _NO_ID_TABLES:
            row.setdefault("id", self._next_id(table))
        row.setdefault("created_at", now)
        row.setdefault("updated_at", now)
        self._rows(table).append(row)
        self.record_write_count += 1
        return dict(row)

    def update(self, table: str, key: str, value: Any, values: Record) -> Record | None:
        self._check_failpoint()
        for row in self._rows(table):
            if row.get(key) == value:
                row.update(values)
                row["updated_at"] = datetime.now(UTC)
                self.record_write_count += 1
                return dict(row)
        return None

    def delete(self, table: str, key: str, value: Any) -> Record | None:
        self._check_failpoint()
        rows = self._rows(table)
        for index, row in enumerate(rows):
            if row.get(key) == value:
                del rows[index]
                self.record_write_count += 1
                return dict(row)
        return None

    def upload(self, path: str, content: bytes, content_type: str | None) -> str:
        if path in self.objects:
            raise ObjectStoreError("The resource already exists")
        self.objects[path] = ObjectRecord(
            path=path,
            content=content,
            content_type=content_type,
            created_at=datetime.now(UTC),
        )
        self.object_write_count += 1
        return self.public_url(path)

    def list_objects(self, folder: str, *, limit: int, offset: int) -> list[StoredObject]:
        prefix = f"{folder.rstrip('/')}/"
        records = sorted(
            (record for path, record in self.objects.items() if path.startswith(prefix)),
            key=lambda record: record.created_at,
            reverse=True,
        )
        return [
            StoredObject(
                name=record.path[len(prefix) :],
                path=record.path,
                created_at=record.created_at,
                size=len(record.content),
            )
            for record in records[offset : offset + limit]
        ]

    def delete_object(self, path: str) -> bool:
        if self.objects.pop(path, None) is None:
            return False
        self.object_write_count += 1
        return True

    def public_url(self, path: str) -> str:
        return f"{_PUBLIC_URL_BASE}/{path}"
