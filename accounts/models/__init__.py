"""SQLAlchemy ORM models."""

from accounts.models.base import Base
from accounts.models.user import PlaintextPasswordError, User

__all__ = ["Base", "PlaintextPasswordError", "User"]
