"""Alembic environment for the learners schema."""
# pylint: disable=no-member,invalid-name,wrong-import-order

from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine, pool

from learner_metrics.config import config_load_database_url

alembic_config = context.config

if alembic_config.config_file_name is not None:
    fileConfig(alembic_config.config_file_name)

MIGRATION_DATABASE_URL = config_load_database_url()


def migration_run_offline() -> None:
    """Emit migration SQL for the configured URL without connecting."""

    context.configure(
        url=MIGRATION_DATABASE_URL,
        target_metadata=None,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def migration_run_online() -> None:
    """Apply migrations over a short-lived unpooled connection."""

    migration_engine = create_engine(MIGRATION_DATABASE_URL, poolclass=pool.NullPool)
    try:
        with migration_engine.connect() as connection:
            context.configure(connection=connection, target_metadata=None, compare_type=True)
            with context.begin_transaction():
                context.run_migrations()
    finally:
        migration_engine.dispose()


if context.is_offline_mode():
    migration_run_offline()
else:
    migration_run_online()
