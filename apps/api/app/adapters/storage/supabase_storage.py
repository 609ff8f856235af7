"""Supabase Storage object store adapter."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from app.adapters.storage.base import ObjectStore, ObjectStoreError, StoredObject
from app.adapters.supabase_client import SupabaseUnavailableError, create_supabase_client


class SupabaseObjectStore(ObjectStore):
    def __init__(self, url: str | None, key: str | None, bucket: str) -> None:
        self._url = url
        self._key = key
        self._bucket = bucket
        self._client: Any = None

    def _storage(self) -> Any:
        if self._client is None:
            try:
                self._client = create_supabase_client(self._url, self._key)
            except SupabaseUnavailableError as exc:
                raise ObjectStoreError(str(exc)) from exc
        return self._client.storage.from_(self._bucket)

    def upload(self, path: str, content: bytes, content_type: str | None) -> str:
        options = {"upsert": "false"}
        if content_type:
            options["content-type"] = content_type
        try:
            self._storage().upload(path, content, options)
        except Exception as exc:  # pragma: no cover - provider exception surface
            raise ObjectStoreError(getattr(exc, "message", None) or str(exc)) from exc
        return self.public_url(path)

    def list_objects(self, folder: str, *, limit: int, offset: int) -> list[StoredObject]:
        options = {
            "limit": limit,
            "offset": offset,
            "sortBy": {"column": "created_at", "order": "desc"},
        }
        try:
            files = self._storage().list(folder, options)
        except Exception as exc:  # pragma: no cover - provider exception surface
            raise ObjectStoreError(getattr(exc, "message", None) or str(exc)) from exc

        objects: list[StoredObject] = []
        for item in files or []:
            created_at = item.get("created_at")
            metadata = item.get("metadata") or {}
            objects.append(
                StoredObject(
                    name=item["name"],
                    path=f"{folder}/{item['name']}",
                    created_at=datetime.fromisoformat(created_at.replace("Z", "+00:00")) if created_at else None,
                    size=metadata.get("size"),
                )
            )
        return objects

    def delete_object(self, path: str) -> bool:
        try:
            removed = self._storage().remove([path])
        except Exception as exc:  # pragma: no cover - provider exception surface
            raise ObjectStoreError(getattr(exc, "message", None) or str(exc)) from exc
        return bool(removed)

    def public_url(self, path: str) -> str:
        return str(self._storage().get_public_url(path)).rstrip("?")


__all__ = ["SupabaseObjectStore"]
