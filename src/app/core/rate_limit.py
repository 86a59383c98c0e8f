"""Per-IP rate limits for the public write endpoints (registration and applications).

Limits are counted in ``RATE_LIMIT_STORAGE_URI`` when set (e.g. Redis), so every
worker shares one budget; otherwise each process counts on its own.
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from src.app.core.config import get_settings
from src.app.core.exceptions import error_body
from src.app.core.logging import get_logger

logger = get_logger(__name__)

IN_MEMORY_STORAGE = "memory://"


def get_rate_limit_key(request: Request) -> str:
    # Client IP only: a header-derived key would let callers mint fresh buckets
    return get_remote_address(request) or "unknown"


def create_limiter() -> Limiter:
    settings = get_settings()
    enabled = settings.app_env != "testing"
    storage_uri = settings.rate_limit_storage_uri or IN_MEMORY_STORAGE
    logger.info(
        "Rate limiter configured",
        enabled=enabled,
        shared=storage_uri != IN_MEMORY_STORAGE,
    )
    return Limiter(key_func=get_rate_limit_key, storage_uri=storage_uri, enabled=enabled)


limiter = create_limiter()

limit_registration = limiter.limit(lambda: get_settings().registration_rate_limit)
limit_applications = limiter.limit(lambda: get_settings().apply_rate_limit)


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Render a 429 in the same envelope as every other error."""
    logger.warning(
        "Rate limit exceeded",
        client_ip=get_rate_limit_key(request),
        path=request.url.path,
        limit=exc.detail,
    )
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content=error_body(f"Rate limit exceeded: {exc.detail}", "RATE_LIMITED"),
        headers={"Retry-After": "60"},
    )
