"""Migration runner for the users schema; the database URL comes from accounts settings."""

from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine
from sqlalchemy.pool import NullPool

from accounts.core.config import get_settings
from accounts.models import Base

alembic_config = context.config
if alembic_config.config_file_name is not None and alembic_config.get_section("loggers"):
    fileConfig(alembic_config.config_file_name)

# Shared by offline and online runs so autogenerate sees column size changes.
COMMON_OPTIONS = {
    "target_metadata": Base.metadata,
    "compare_type": True,
}


def migrate(url: str, offline: bool) -> None:
    """Apply (or, offline, print) pending revisions against url."""
    if offline:
        context.configure(
            url=url,
            literal_binds=True,
            dialect_opts={"paramstyle": "named"},
            **COMMON_OPTIONS,
        )
        with context.begin_transaction():
            context.run_migrations()
        return

    engine = create_engine(url, poolclass=NullPool)
    with engine.connect() as connection:
        # sqlite can only ALTER via table copies.
        context.configure(
            connection=connection,
            render_as_batch=connection.dialect.name == "sqlite",
            **COMMON_OPTIONS,
        )
        with context.begin_transaction():
            context.run_migrations()


migrate(get_settings().DATABASE_URL, offline=context.is_offline_mode())
