"""User API schemas."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field


class CreateUserRequest(BaseModel):
    dni: str = Field(min_length=1)
    email: EmailStr
    name: str | None = None
    phone: str | None = None


class User(BaseModel):
    dni: str | None = None
    email: str | None = None
    name: str | None = None
    phone: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class Profile(BaseModel):
    """Row of ``admin_profiles`` linking an identity to its role."""

    user_id: str
    role: str
    username: str | None = None
    is_active: bool = True
