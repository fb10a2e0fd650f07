"""Input rules and response schemas for the User record."""

from collections.abc import Mapping
from typing import Annotated, Any

from email_validator import EmailNotValidError, validate_email
from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    StringConstraints,
    ValidationError,
    field_validator,
)

from accounts.core.constants import (
    DEFAULT_ROLE,
    EMAIL_MAX_LEN,
    EMAIL_MIN_LEN,
    NAME_MAX_LEN,
    NAME_MIN_LEN,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    ROLE_MAX_LEN,
    ROLE_MIN_LEN,
    ROLE_VALUES,
    Role,
)

FirstName = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=NAME_MIN_LEN, max_length=NAME_MAX_LEN),
]
LastName = Annotated[str, StringConstraints(min_length=NAME_MIN_LEN, max_length=NAME_MAX_LEN)]
Email = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=EMAIL_MIN_LEN, max_length=EMAIL_MAX_LEN),
]
Password = Annotated[
    str, StringConstraints(min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)
]

# camelCase keys accepted from clients -> field names reported in errors.
FIELD_ALIASES = {"firstName": "first_name", "lastName": "last_name"}


def _validate_role(value: Any) -> Role:
    """Default absent role to USER; otherwise require a known role (case-insensitive)."""
    if value is None:
        return DEFAULT_ROLE
    if isinstance(value, Role):
        return value
    if not isinstance(value, str):
        raise ValueError("role must be a string")
    normalized = value.strip().upper()
    if not ROLE_MIN_LEN <= len(normalized) <= ROLE_MAX_LEN:
        raise ValueError(
            f"role must be between {ROLE_MIN_LEN} and {ROLE_MAX_LEN} characters"
        )
    if normalized not in ROLE_VALUES:
        raise ValueError(f"role must be one of {sorted(ROLE_VALUES)}, got {value!r}")
    return Role(normalized)


class UserInput(BaseModel):
    """Normalized user fields accepted on create and update."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    first_name: FirstName = Field(
        ..., validation_alias=AliasChoices("first_name", "firstName")
    )
    last_name: LastName = Field(
        ..., validation_alias=AliasChoices("last_name", "lastName")
    )
    email: Email
    password: Password
    role: Role = DEFAULT_ROLE

    @field_validator("email")
    @classmethod
    def validate_email_syntax(cls, v: str) -> str:
        try:
            return validate_email(v, check_deliverability=False).normalized
        except EmailNotValidError as e:
            raise ValueError(f"value is not a valid email address: {e}") from e

    @field_validator("role", mode="before")
    @classmethod
    def validate_role(cls, v: Any) -> Role:
        return _validate_role(v)


class FieldError(BaseModel):
    """One field-level rule violation."""

    field: str
    message: str


class ValidationOutcome(BaseModel):
    """Result of validate_user / validate_update_user. Never raised."""

    value: UserInput | None = None
    errors: list[FieldError] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def _field_errors(exc: ValidationError) -> list[FieldError]:
    errors = []
    for err in exc.errors():
        loc = err.get("loc") or ()
        field = str(loc[0]) if loc else "input"
        errors.append(
            FieldError(field=FIELD_ALIASES.get(field, field), message=err["msg"])
        )
    return errors


def validate_user(data: Mapping[str, Any]) -> ValidationOutcome:
    """Check candidate user fields; report violations instead of raising."""
    try:
        value = UserInput.model_validate(
            dict(data) if isinstance(data, Mapping) else data
        )
    except ValidationError as e:
        return ValidationOutcome(errors=_field_errors(e))
    return ValidationOutcome(value=value)


def validate_update_user(data: Mapping[str, Any]) -> ValidationOutcome:
    """Update payloads follow the same rule set as creation."""
    return validate_user(data)


class UserRead(BaseModel):
    """User as exposed to callers (no password)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str
    email: str
    role: Role


class TokenResponse(BaseModel):
    """JWT access token returned after successful login."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
