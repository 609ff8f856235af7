"""Route modules."""

from .auth import router as auth_router
from .categories import router as categories_router
from .consultations import router as consultations_router
from .email import router as email_router
from .posts import router as posts_router
from .uploads import router as uploads_router
from .users import router as users_router

__all__ = [
    "auth_router",
    "categories_router",
    "consultations_router",
    "email_router",
    "posts_router",
    "uploads_router",
    "users_router",
]
