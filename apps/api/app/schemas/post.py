"""Post API schemas."""

from datetime import datetime

from pydantic import BaseModel, Field


class CreatePostRequest(BaseModel):
    title: str = Field(min_length=1)
    content: str = Field(min_length=1)
    category_id: int
    author_id: str | None = None
    image_url: str | None = None


class UpdatePostRequest(BaseModel):
    title: str | None = Field(default=None, min_length=1)
    content: str | None = Field(default=None, min_length=1)
    category_id: int | None = None
    image_url: str | None = None


class Post(BaseModel):
    id: str
    title: str
    content: str
    author_id: str
    category_id: int
    image_url: str | None = None
    category_name: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
