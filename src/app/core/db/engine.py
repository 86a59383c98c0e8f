"""Process-wide async engine."""

import ssl
from typing import Any

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from src.app.core.config import Settings, get_settings

_engine: AsyncEngine | None = None


def ssl_context_for(mode: str) -> ssl.SSLContext | None:
    """Translate a libpq-style ``sslmode`` into an asyncpg SSL context."""
    if mode == "disable":
        return None
    context = ssl.create_default_context()
    if mode in ("verify-ca", "verify-full"):
        context.check_hostname = mode == "verify-full"
        context.verify_mode = ssl.CERT_REQUIRED
    else:
        # prefer / require: encrypt without checking the certificate
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    return context


def engine_options(settings: Settings) -> dict[str, Any]:
    if settings.is_sqlite:
        return {}
    options: dict[str, Any] = {
        "pool_size": settings.database_pool_size,
        "max_overflow": settings.database_max_overflow,
        "pool_pre_ping": True,
    }
    context = ssl_context_for(settings.database_ssl_mode)
    if context is not None:
        options["connect_args"] = {"ssl": context}
    return options


def get_engine() -> AsyncEngine:
    global _engine
    if _engine is None:
        settings = get_settings()
        _engine = create_async_engine(settings.database_url, **engine_options(settings))
    return _engine


async def dispose_engine() -> None:
    """Close pooled connections; the next ``get_engine`` call builds a fresh engine."""
    global _engine
    if _engine is not None:
        engine, _engine = _engine, None
        await engine.dispose()
