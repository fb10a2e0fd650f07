"""ORM model for application users: password hashing, verification and token issuance."""

import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy import Column, Integer, String, event, inspect
from sqlalchemy.orm import Session, validates

from accounts.core.constants import (
    DEFAULT_ROLE,
    EMAIL_MAX_LEN,
    NAME_MAX_LEN,
    PASSWORD_HASH_MAX_LEN,
    ROLE_MAX_LEN,
    ROLE_VALUES,
    Role,
)
from accounts.core.security import (
    DEFAULT_BCRYPT_ROUNDS,
    create_access_token,
    hash_password,
    verify_password,
)
from accounts.models.base import Base

if TYPE_CHECKING:
    from accounts.core.config import Settings

logger = logging.getLogger(__name__)


class PlaintextPasswordError(Exception):
    """Raised when a flush would write a password that was never hashed."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class User(Base):
    """
    User account with a hashed password and a role.

    password holds plaintext only between assignment and prepare_for_persist();
    once persisted it is always a bcrypt hash.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(NAME_MAX_LEN), nullable=False)
    last_name = Column(String(NAME_MAX_LEN), nullable=False)
    email = Column(String(EMAIL_MAX_LEN), nullable=False, unique=True, index=True)
    password = Column(String(PASSWORD_HASH_MAX_LEN), nullable=False)
    role = Column(String(ROLE_MAX_LEN), nullable=False, default=DEFAULT_ROLE.value)

    def __init__(self, **kwargs: Any) -> None:
        if kwargs.get("role") is None:
            kwargs["role"] = DEFAULT_ROLE
        super().__init__(**kwargs)

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r} role={self.role}>"

    @validates("role")
    def _validate_role(self, _key: str, value: Role | str) -> str:
        role = value.value if isinstance(value, Role) else value
        if role not in ROLE_VALUES:
            raise ValueError(f"role must be one of {sorted(ROLE_VALUES)}, got {value!r}")
        return role

    @staticmethod
    def encrypt_password(password: str, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
        """Return a salted bcrypt hash of password. Does not touch the record."""
        return hash_password(password, rounds=rounds)

    def is_password_valid(self, candidate: str) -> bool:
        """True iff candidate matches the stored hash."""
        if not self.password:
            return False
        return verify_password(candidate, self.password)

    def password_needs_hashing(self) -> bool:
        """True when password was assigned since load/creation and not yet hashed."""
        if not self.password:
            return False
        if self.password == getattr(self, "_hashed_password", None):
            return False
        return inspect(self).attrs.password.history.has_changes()

    def prepare_for_persist(self, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> None:
        """
        Hash a modified plaintext password in place before the record is written.

        No-op when the password is unchanged. Hashing errors propagate so the
        caller aborts the save.
        """
        if not self.password_needs_hashing():
            return
        hashed = self.encrypt_password(self.password, rounds=rounds)
        self.password = hashed
        self._hashed_password = hashed

    def generate_auth_token(self, settings: "Settings") -> str:
        """Signed JWT carrying this user's id (sub) and role, expiring per settings."""
        if self.id is None:
            raise ValueError("User must be persisted before issuing a token")
        return create_access_token(sub=self.id, role=self.role, settings=settings)


@event.listens_for(Session, "before_flush")
def _refuse_plaintext_passwords(session: Session, _flush_context: Any, _instances: Any) -> None:
    for obj in list(session.new) + list(session.dirty):
        if isinstance(obj, User) and obj.password_needs_hashing():
            logger.warning("Refusing to flush user with unhashed password: email=%s", obj.email)
            raise PlaintextPasswordError(
                "User password must be hashed (prepare_for_persist) before flush"
            )
