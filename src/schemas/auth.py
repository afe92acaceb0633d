"""Pydantic schemas for signup and signin."""
from pydantic import BaseModel, EmailStr, field_validator

from schemas.validators import validate_non_empty


class AuthRequest(BaseModel):
    """Credentials submitted to signup and signin."""

    email: EmailStr
    password: str

    @field_validator("password")
    @classmethod
    def check_password(cls, v: str) -> str:
        """Password must be a non-empty string."""
        return validate_non_empty(v, "password")


class TokenResponse(BaseModel):
    """Access token returned after a successful signup or signin."""

    access_token: str
