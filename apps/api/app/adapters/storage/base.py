"""Object storage interfaces."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime


class ObjectStoreError(Exception):
    """Raised when the object store rejects or fails an operation."""


@dataclass(frozen=True, slots=True)
class StoredObject:
    name: str
    path: str
    created_at: datetime | None = None
    size: int | None = None


class ObjectStore(ABC):
    @abstractmethod
    def upload(self, path: str, content: bytes, content_type: str | None) -> str:
        """Store ``content`` at ``path`` without overwriting and return its public URL."""

    @abstractmethod
    def list_objects(self, folder: str, *, limit: int, offset: int) -> list[StoredObject]:
        """List objects in ``folder``, newest first."""

    @abstractmethod
    def delete_object(self, path: str) -> bool:
        """Delete the object at ``path``; return whether it existed."""

    @abstractmethod
    def public_url(self, path: str) -> str:
        """Return the public URL of ``path``."""


__all__ = ["ObjectStore", "ObjectStoreError", "StoredObject"]
