"""Create, update and authenticate users on top of a SQLAlchemy session."""

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from accounts.models import User
from accounts.schemas.user import (
    FieldError,
    TokenResponse,
    UserInput,
    validate_update_user,
    validate_user,
)

if TYPE_CHECKING:
    from accounts.core.config import Settings

logger = logging.getLogger(__name__)

# How the unique email index shows up in driver messages (postgres, sqlite).
EMAIL_CONSTRAINT_MARKERS = ("ix_users_email", "UNIQUE constraint failed: users.email")


class UserValidationError(Exception):
    """Raised by the service layer when input fails the user rule set."""

    def __init__(self, errors: list[FieldError]) -> None:
        self.errors = errors
        self.message = "; ".join(f"{e.field}: {e.message}" for e in errors)
        super().__init__(self.message)


class DuplicateEmailError(Exception):
    """Raised when the storage engine rejects a second user with the same email."""

    def __init__(self, email: str) -> None:
        self.email = email
        self.message = f"A user with email {email!r} already exists."
        super().__init__(self.message)


def _apply(user: User, value: UserInput) -> None:
    user.first_name = value.first_name
    user.last_name = value.last_name
    user.email = value.email
    user.password = value.password
    user.role = value.role


def _is_duplicate_email(exc: IntegrityError) -> bool:
    detail = str(exc.orig)
    return any(marker in detail for marker in EMAIL_CONSTRAINT_MARKERS)


def save_user(db: Session, user: User, settings: "Settings") -> User:
    """
    Hash a modified password, then write the record.

    If hashing fails nothing is added to the session. A unique-email
    violation is rolled back and raised as DuplicateEmailError; any other
    integrity failure is rolled back and re-raised.
    """
    user.prepare_for_persist(rounds=settings.BCRYPT_ROUNDS)
    email = user.email
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        if not _is_duplicate_email(e):
            raise
        logger.info("User save rejected by storage: email=%s", email)
        raise DuplicateEmailError(email) from e
    db.refresh(user)
    return user


def create_user(db: Session, data: Mapping[str, Any], settings: "Settings") -> User:
    """Validate data and persist a new user with a hashed password."""
    outcome = validate_user(data)
    if not outcome.ok:
        raise UserValidationError(outcome.errors)
    user = User()
    _apply(user, outcome.value)
    save_user(db, user, settings)
    logger.info("User created: id=%s role=%s", user.id, user.role)
    return user


def update_user(
    db: Session, user: User, data: Mapping[str, Any], settings: "Settings"
) -> User:
    """Validate data, assign it to user and persist; password is re-hashed because it was assigned."""
    outcome = validate_update_user(data)
    if not outcome.ok:
        raise UserValidationError(outcome.errors)
    _apply(user, outcome.value)
    save_user(db, user, settings)
    logger.info("User updated: id=%s role=%s", user.id, user.role)
    return user


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email.strip()).first()


def authenticate(
    db: Session, email: str, password: str, settings: "Settings"
) -> TokenResponse | None:
    """Return an access token for valid credentials, None otherwise."""
    user = get_user_by_email(db, email)
    if user is None or not user.is_password_valid(password):
        logger.info("Login failed: email=%s", email)
        return None
    return TokenResponse(access_token=user.generate_auth_token(settings))
