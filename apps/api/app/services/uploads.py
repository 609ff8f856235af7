"""Image upload service."""

from __future__ import annotations

import logging
import re

from app.adapters.storage import ObjectStore, ObjectStoreError
from app.errors import ApiError
from app.schemas.upload import DeletedImage, StoredImage, UploadedImage

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif", ".webp", ".svg")
_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9.-]")


def sanitize_filename(filename: str) -> str:
    return _UNSAFE_FILENAME_CHARS.sub("_", filename)


class UploadService:
    def __init__(self, storage: ObjectStore, *, folder: str) -> None:
        self._storage = storage
        self._folder = folder.strip("/")

    def upload_image(self, *, filename: str, content: bytes, content_type: str | None, now: float) -> UploadedImage:
        path = f"{self._folder}/{int(now * 1000)}-{sanitize_filename(filename)}"
        try:
            url = self._storage.upload(path, content, content_type)
        except ObjectStoreError as exc:
            logger.error("storage.error operation=upload error=%s", exc)
            raise ApiError(status_code=500, code="STORAGE_ERROR", message=str(exc) or "Upload failed") from exc
        return UploadedImage(url=url, path=path)

    def list_images(self, *, limit: int, offset: int) -> list[StoredImage]:
        try:
            objects = self._storage.list_objects(self._folder, limit=limit, offset=offset)
        except ObjectStoreError as exc:
            logger.error("storage.error operation=list error=%s", exc)
            raise ApiError(status_code=500, code="STORAGE_ERROR", message=str(exc) or "Listing failed") from exc

        return [
            StoredImage(
                name=item.name,
                url=self._storage.public_url(item.path),
                created_at=item.created_at,
                size=item.size,
            )
            for item in objects
            if item.name.lower().endswith(IMAGE_EXTENSIONS)
        ]

    def delete_image(self, path: str) -> DeletedImage:
        path = path.strip("/")
        if not path.startswith(f"{self._folder}/"):
            path = f"{self._folder}/{path}"
        try:
            deleted = self._storage.delete_object(path)
        except ObjectStoreError as exc:
            logger.error("storage.error operation=delete error=%s", exc)
            raise ApiError(status_code=500, code="STORAGE_ERROR", message=str(exc) or "Delete failed") from exc
        if not deleted:
            raise ApiError(status_code=404, code="RESOURCE_NOT_FOUND", message="Resource not found")
        return DeletedImage(path=path, message="Image deleted successfully")
