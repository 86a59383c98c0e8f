import os
from logging.config import fileConfig

from sqlalchemy import create_engine, make_url, pool
from sqlmodel import SQLModel

from alembic import context
from src.app import models  # noqa: F401
from src.app.core.config import get_settings

# Async drivers the app runs on, mapped to the sync driver alembic needs
SYNC_DRIVERS = {
    "postgresql+asyncpg": "postgresql",
    "sqlite+aiosqlite": "sqlite",
}

config = context.config
if config.config_file_name is not None and os.path.exists(config.config_file_name):
    fileConfig(config.config_file_name)

target_metadata = SQLModel.metadata


def migration_url() -> str:
    """Sync URL for DDL: ``DATABASE_MIGRATIONS_URL`` wins over ``DATABASE_URL``."""
    settings = get_settings()
    url = make_url(settings.database_migrations_url or settings.database_url)
    driver = SYNC_DRIVERS.get(url.drivername, url.drivername)
    return url.set(drivername=driver).render_as_string(hide_password=False)


def configure(**kwargs) -> None:
    # SQLite cannot ALTER most constraints in place
    url = kwargs.get("url") or str(kwargs["connection"].engine.url)
    context.configure(
        target_metadata=target_metadata,
        compare_type=True,
        render_as_batch=url.startswith("sqlite"),
        **kwargs,
    )


def run_migrations_offline() -> None:
    configure(url=migration_url(), literal_binds=True, dialect_opts={"paramstyle": "named"})
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    engine = create_engine(migration_url(), poolclass=pool.NullPool)
    try:
        with engine.connect() as connection:
            configure(connection=connection)
            with context.begin_transaction():
                context.run_migrations()
    finally:
        engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
