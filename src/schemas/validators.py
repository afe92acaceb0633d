"""Reusable validation helpers shared by request schemas."""


def validate_non_empty(value: str, field_name: str) -> str:
    """
    Reject empty and whitespace-only strings.

    The value is returned unchanged (not stripped) so stored text matches what
    the client sent.
    """
    if not value.strip():
        raise ValueError(f"{field_name} must not be empty")
    return value


def validate_not_null(value: object | None, field_name: str) -> object:
    """Reject an explicit null for a patch field whose column is required."""
    if value is None:
        raise ValueError(f"{field_name} cannot be null")
    return value


def validate_max_length(value: str | None, max_length: int, field_name: str) -> str | None:
    """Reject strings longer than the column that stores them."""
    if value is not None and len(value) > max_length:
        raise ValueError(
            f"{field_name} exceeds maximum length of {max_length:,} characters "
            f"(got {len(value):,} characters).",
        )
    return value
