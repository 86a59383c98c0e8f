"""Liveness probe covering the database and the payment provider configuration."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import text

from src.app.core.config import get_settings
from src.app.core.db import get_session
from src.app.core.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


async def probe_database() -> str:
    try:
        async with get_session() as session:
            await session.execute(text("SELECT 1"))
    except Exception as e:
        logger.warning("Database probe failed", error=str(e))
        return f"unhealthy: {e}"
    return "healthy"


@router.get("/health", include_in_schema=False)
async def health() -> JSONResponse:
    """Report ``unhealthy`` with 503 when the database cannot be reached.

    Missing payment credentials are reported but never fail the probe: approvals
    still succeed with a payment warning in that case.
    """
    database = await probe_database()
    healthy = database == "healthy"
    body = {
        "status": "healthy" if healthy else "unhealthy",
        "database": database,
        "payments": "configured" if get_settings().payments_configured else "not_configured",
    }
    return JSONResponse(content=body, status_code=200 if healthy else 503)
