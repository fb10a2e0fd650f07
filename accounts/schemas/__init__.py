"""Pydantic schemas for user input, validation outcomes and responses."""

from accounts.schemas.user import (
    FieldError,
    TokenResponse,
    UserInput,
    UserRead,
    ValidationOutcome,
    validate_update_user,
    validate_user,
)

__all__ = [
    "FieldError",
    "TokenResponse",
    "UserInput",
    "UserRead",
    "ValidationOutcome",
    "validate_update_user",
    "validate_user",
]
