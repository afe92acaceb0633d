"""Pydantic schemas for bookmark endpoints."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator

from schemas.validators import (
    validate_max_length,
    validate_non_empty,
    validate_not_null,
)

# Matches the bookmarks.title column
MAX_TITLE_LENGTH = 500


class BookmarkCreate(BaseModel):
    """Schema for creating a new bookmark."""

    title: str
    link: str
    description: str | None = None

    @field_validator("title", "link")
    @classmethod
    def check_required_text(cls, v: str, info: ValidationInfo) -> str:
        """Title and link must be non-empty."""
        return validate_non_empty(v, info.field_name)

    @field_validator("title")
    @classmethod
    def check_title_length(cls, v: str) -> str:
        """Title must fit the title column."""
        return validate_max_length(v, MAX_TITLE_LENGTH, "title")


class BookmarkUpdate(BaseModel):
    """
    Schema for updating an existing bookmark.

    All fields are optional; only fields present in the request are applied.
    Title and link may be omitted but not cleared.
    """

    title: str | None = None
    link: str | None = None
    description: str | None = None

    @field_validator("title", "link", mode="before")
    @classmethod
    def check_required_text(cls, v: str | None, info: ValidationInfo) -> str:
        """If provided, title and link must be non-empty strings."""
        validate_not_null(v, info.field_name)
        if not isinstance(v, str):
            raise ValueError(f"{info.field_name} must be a string")
        return validate_non_empty(v, info.field_name)

    @field_validator("title")
    @classmethod
    def check_title_length(cls, v: str | None) -> str | None:
        """If provided, title must fit the title column."""
        return validate_max_length(v, MAX_TITLE_LENGTH, "title")


class BookmarkResponse(BaseModel):
    """Schema for bookmark responses."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    link: str
    description: str | None
    created_at: datetime
    updated_at: datetime
