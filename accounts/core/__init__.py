"""Core app configuration, constants and security helpers."""

from accounts.core.config import get_settings, settings
from accounts.core.constants import DEFAULT_ROLE, Role

__all__ = ["DEFAULT_ROLE", "Role", "get_settings", "settings"]
