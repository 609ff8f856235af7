"""Application configuration."""

from functools import lru_cache
from typing import Annotated, Any, Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables."""

    backend: Literal["memory", "supabase"] = "supabase"
    email_provider: Literal["memory", "sendgrid"] = "sendgrid"

    supabase_url: str | None = None
    supabase_anon_key: str | None = None
    supabase_service_role_key: str | None = None
    storage_bucket: str = "galilea-posts"
    storage_folder: str = "posts"

    sendgrid_api_key: str | None = None
    owner_email: str | None = None
    smtp_from: str | None = None
    smtp_reply_to: str | None = None
    owner_template_id: str = "d-51125060ad184d2a8ded541dca5256eb"
    confirmation_template_id: str = "d-64abcd8ced2a4a0bb87915faf89a2b31"

    rate_limit_requests: int = 100
    rate_limit_window: int = 60
    rate_limit_cleanup_interval: int = 300

    # Comma separated in the environment; "*" inside a host acts as a wildcard.
    cors_origins: Annotated[list[str], NoDecode] = [
        "http://localhost:3000",
        "http://localhost:3001",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:3001",
        "https://*.vercel.app",
    ]
    cors_credentials: bool = True
    cors_max_age: int = 600

    model_config = SettingsConfigDict(env_prefix="GALILEA_", extra="ignore")

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
