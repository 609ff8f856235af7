"""Category API schemas."""

from datetime import datetime

from pydantic import BaseModel, Field


class CategoryWrite(BaseModel):
    name: str = Field(min_length=1)
    description: str | None = None


class Category(BaseModel):
    id: int
    name: str
    description: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
