"""Alembic environment for the signature template store (raw SQL migrations, no metadata)."""

from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine

from signature_builder.config import settings

config = context.config

if config.config_file_name is not None and config.file_config.has_section("formatters"):
    fileConfig(config.config_file_name)


def database_url() -> str:
    """settings.DATABASE_URL in the form sync SQLAlchemy accepts."""
    url = settings.DATABASE_URL or config.get_main_option("sqlalchemy.url") or ""
    # asyncpg accepts postgres://, SQLAlchemy only postgresql://
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql://", 1)
    return url


def run_migrations_offline() -> None:
    context.configure(url=database_url(), target_metadata=None, literal_binds=True)
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = create_engine(database_url())
    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=None)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
