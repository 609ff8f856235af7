"""Authentication schemas."""

from pydantic import BaseModel, EmailStr, Field


class AuthPrincipal(BaseModel):
    """Normalized authenticated principal used by route guards and services."""

    user_id: str = Field(min_length=1)
    role: str = Field(min_length=1)
    email: str | None = None
    username: str | None = None


class IdentityUser(BaseModel):
    """Identity returned by the identity provider before profile resolution."""

    id: str = Field(min_length=1)
    email: str | None = None


class AuthSession(BaseModel):
    access_token: str
    refresh_token: str
    expires_at: int | None = None
    user: IdentityUser | None = None


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)


class SessionUser(BaseModel):
    id: str
    email: str | None = None
    username: str | None = None


class LoginResponse(BaseModel):
    token: str
    refresh_token: str
    expires_at: int | None = None
    user: SessionUser
    role: str


class RefreshResponse(BaseModel):
    token: str
    refresh_token: str
    expires_at: int | None = None


class MeResponse(BaseModel):
    user: SessionUser
    role: str
    is_active: bool
