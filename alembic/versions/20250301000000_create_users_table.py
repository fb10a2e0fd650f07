"""Create users table with a unique email index.

Revision ID: 20250301000000
Revises:
Create Date: 2025-03-01

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from accounts.core.constants import (
    DEFAULT_ROLE,
    EMAIL_MAX_LEN,
    NAME_MAX_LEN,
    PASSWORD_HASH_MAX_LEN,
    ROLE_MAX_LEN,
)

revision: str = "20250301000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("first_name", sa.String(length=NAME_MAX_LEN), nullable=False),
        sa.Column("last_name", sa.String(length=NAME_MAX_LEN), nullable=False),
        sa.Column("email", sa.String(length=EMAIL_MAX_LEN), nullable=False),
        sa.Column("password", sa.String(length=PASSWORD_HASH_MAX_LEN), nullable=False),
        sa.Column(
            "role",
            sa.String(length=ROLE_MAX_LEN),
            nullable=False,
            server_default=DEFAULT_ROLE.value,
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_users")),
    )
    op.create_index(
        op.f("ix_users_email"),
        "users",
        ["email"],
        unique=True,
    )


def downgrade() -> None:
    op.drop_index(op.f("ix_users_email"), table_name="users")
    op.drop_table("users")
