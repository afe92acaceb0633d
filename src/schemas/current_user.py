"""Authenticated user representation attached to each request."""
from dataclasses import dataclass
from datetime import datetime

from models.user import User


@dataclass(frozen=True)
class AuthenticatedUser:
    """
    Identity resolved by the auth guard.

    A projection of the User row that never carries the password hash. Handlers
    receive this instead of the ORM object, so the hash cannot leak into a
    response by accident.

    WARNING: Do NOT expect ORM relationships like .bookmarks here. Load them
    through the services using ``id``.
    """

    id: int
    email: str
    first_name: str | None
    last_name: str | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "AuthenticatedUser":
        """Project a User row, leaving out the password hash."""
        return cls(
            id=user.id,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
