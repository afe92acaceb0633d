"""FastAPI dependencies for injection."""
from functools import lru_cache

from core.auth import get_current_user, get_token_issuer
from core.config import get_settings
from core.security import Argon2PasswordHasher
from db.session import get_async_session


@lru_cache
def get_password_hasher() -> Argon2PasswordHasher:
    """Get the shared password hasher."""
    return Argon2PasswordHasher()


__all__ = [
    "get_async_session",
    "get_current_user",
    "get_password_hasher",
    "get_settings",
    "get_token_issuer",
]
