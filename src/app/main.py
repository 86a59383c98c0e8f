import secrets
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from asgi_correlation_id import CorrelationIdMiddleware, correlation_id
from fastapi import Depends, FastAPI, HTTPException, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.security import APIKeyHeader
from prometheus_fastapi_instrumentator import Instrumentator
from slowapi.errors import RateLimitExceeded
from starlette.middleware.base import RequestResponseEndpoint

from src.app.api import health
from src.app.api.v1.router import api_router
from src.app.core.config import Settings, get_settings
from src.app.core.db import dispose_engine
from src.app.core.exceptions import setup_exception_handlers
from src.app.core.logging import (
    bind_request_context,
    clear_request_context,
    get_logger,
    setup_logging,
)
from src.app.core.rate_limit import limiter, rate_limit_exceeded_handler

logger = get_logger(__name__)

OPENAPI_TAGS = [
    {"name": "users", "description": "Account creation on login and the caller's capabilities"},
    {"name": "members", "description": "Member registration, drafts and profile"},
    {"name": "sellers", "description": "Seller applications"},
    {"name": "promoters", "description": "Promoter applications"},
    {"name": "stewards", "description": "Steward applications, listings and marketplace"},
    {"name": "products", "description": "Seller catalog writes"},
    {"name": "seller-setup", "description": "Invitation claim for approved applicants"},
    {"name": "admin", "description": "Review queues and approval decisions"},
    {"name": "audit", "description": "Audit history of lifecycle decisions"},
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    settings = get_settings()
    setup_logging(settings.debug)
    logger.info(
        "Identity API starting",
        app_env=settings.app_env,
        payments_configured=settings.payments_configured,
        email_configured=bool(settings.resend_api_key),
    )
    yield
    await dispose_engine()
    logger.info("Identity API stopped")


async def request_log_context(request: Request, call_next: RequestResponseEndpoint) -> Response:
    """Scope the structlog context to one request, keyed by its correlation id."""
    clear_request_context()
    bind_request_context(correlation_id.get())
    try:
        return await call_next(request)
    finally:
        clear_request_context()


def install_middleware(app: FastAPI, settings: Settings) -> None:
    # Innermost first: the correlation id is set before the log context reads it
    app.middleware("http")(request_log_context)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
    )
    app.add_middleware(CorrelationIdMiddleware)


def install_metrics(app: FastAPI, settings: Settings) -> None:
    """Expose Prometheus metrics, behind ``X-Metrics-Key`` when a key is configured."""
    instrumentator = Instrumentator().instrument(app)
    expected = settings.metrics_api_key
    if not expected:
        instrumentator.expose(app, endpoint="/metrics")
        return

    metrics_key = APIKeyHeader(name="X-Metrics-Key", auto_error=False)

    async def require_metrics_key(api_key: str | None = Depends(metrics_key)) -> None:
        if api_key is None or not secrets.compare_digest(api_key, expected):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid or missing metrics API key",
            )

    instrumentator.expose(app, endpoint="/metrics", dependencies=[Depends(require_metrics_key)])


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Identity and verification lifecycle for the fraternity marketplace",
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
        openapi_url="/openapi.json" if settings.enable_openapi else None,
        lifespan=lifespan,
    )

    setup_exception_handlers(app)
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)  # type: ignore[arg-type]

    install_middleware(app, settings)
    app.include_router(health.router)
    app.include_router(api_router)
    install_metrics(app, settings)

    return app


app = create_app()
