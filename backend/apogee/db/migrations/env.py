"""
Alembic migration environment — reads DATABASE_URL from app settings.

Migrates only the tables owned by the service named in SERVICE_NAME, so
each service's database carries its own schema and version table.  Each
service's revisions form one branch labelled with the service name; run
``alembic upgrade <service>@head`` (``manage.py migrate <service>``).

Uses a SYNC engine for migrations (psycopg2) even though the app
uses async (asyncpg) at runtime.
"""

from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine, pool

from apogee.core.config import settings
from apogee.db.models import SERVICE_METADATA

config = context.config

# Use sync URL for Alembic (psycopg2, not asyncpg)
sync_url = settings.DATABASE_URL_SYNC
config.set_main_option("sqlalchemy.url", sync_url)

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

try:
    target_metadata = SERVICE_METADATA[settings.SERVICE_NAME]
except KeyError:
    raise RuntimeError(f"Unknown SERVICE_NAME for migrations: {settings.SERVICE_NAME!r}") from None


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode."""
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode with sync engine."""
    connectable = create_engine(
        sync_url,
        poolclass=pool.NullPool,
    )
    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)
        with context.begin_transaction():
            context.run_migrations()
    connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
