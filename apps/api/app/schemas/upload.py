"""Upload API schemas."""

from datetime import datetime

from pydantic import BaseModel


class UploadedImage(BaseModel):
    url: str
    path: str


class StoredImage(BaseModel):
    name: str
    url: str
    created_at: datetime | None = None
    size: int | None = None


class DeletedImage(BaseModel):
    path: str
    message: str
