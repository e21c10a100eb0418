import os
import sys
from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

# Project root on sys.path so `app.*` resolves when running the alembic CLI from a checkout
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from app.config import Settings  # noqa: E402
from app.models import Base  # noqa: E402

config = context.config

# Alembic's CLI is synchronous, so it uses DATABASE_URL_SYNC (psycopg2) rather
# than the asyncpg URL the application runs on. Read through Settings so .env applies.
config.set_main_option("sqlalchemy.url", Settings().DATABASE_URL_SYNC)

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Emit SQL for review instead of applying it."""
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        compare_type=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata, compare_type=True)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
