"""Pydantic schemas for user profile endpoints."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator

from schemas.validators import validate_max_length

# Matches the users.first_name and users.last_name columns
MAX_NAME_LENGTH = 255


class UserUpdate(BaseModel):
    """
    Sparse profile update.

    Only the fields listed here can change. Anything else in the request body
    (id, email, password) is ignored.
    """

    first_name: str | None = None
    last_name: str | None = None

    @field_validator("first_name", "last_name")
    @classmethod
    def check_name_length(cls, v: str | None, info: ValidationInfo) -> str | None:
        """Names must fit their columns."""
        return validate_max_length(v, MAX_NAME_LENGTH, info.field_name)


class UserResponse(BaseModel):
    """Public view of a user. Has no password hash field."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    first_name: str | None
    last_name: str | None
    created_at: datetime
    updated_at: datetime
