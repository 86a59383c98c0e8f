"""Reusable migration runner for deployments and tooling."""

import asyncio
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from alembic.config import Config

from alembic import command

SCRIPT_LOCATION = Path(__file__).resolve().parents[2] / "alembic"


def get_alembic_config() -> Config:
    """Alembic config pointing at the bundled migration scripts."""
    alembic_cfg = Config()
    alembic_cfg.set_main_option("script_location", str(SCRIPT_LOCATION))
    return alembic_cfg


def run_migrations_sync(revision: str = "head") -> None:
    """Run Alembic migrations synchronously."""
    command.upgrade(get_alembic_config(), revision)


async def run_migrations_async(revision: str = "head") -> None:
    """Run Alembic migrations from async context.

    Uses ThreadPoolExecutor to avoid event loop conflicts with Alembic.
    """
    loop = asyncio.get_running_loop()
    with ThreadPoolExecutor() as pool:
        await loop.run_in_executor(pool, run_migrations_sync, revision)


if __name__ == "__main__":
    run_migrations_sync()
