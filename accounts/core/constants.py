"""Roles and field bounds for the User record.

The ORM columns, the users migration and the input schema all read these
values so the persisted shape and the validation rules cannot drift apart.
"""

from enum import Enum


class Role(str, Enum):
    """Authorization tier attached to a user."""

    USER = "USER"
    ADMIN = "ADMIN"


DEFAULT_ROLE = Role.USER

ROLE_VALUES: frozenset[str] = frozenset(r.value for r in Role)

NAME_MIN_LEN = 3
NAME_MAX_LEN = 50
EMAIL_MIN_LEN = 3
EMAIL_MAX_LEN = 50
# Plaintext bounds; the stored bcrypt hash is always 60 chars.
PASSWORD_MIN_LEN = 3
PASSWORD_MAX_LEN = 50
ROLE_MIN_LEN = 3
ROLE_MAX_LEN = 10

# Column size for the stored hash.
PASSWORD_HASH_MAX_LEN = 255
