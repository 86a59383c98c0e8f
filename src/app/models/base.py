from datetime import UTC, datetime

from sqlalchemy import JSON
from sqlalchemy.dialects import postgresql

# JSONB on PostgreSQL, plain JSON on SQLite
JSONVariant = JSON().with_variant(postgresql.JSONB(), "postgresql")


def utc_now() -> datetime:
    """Naive UTC now; timestamp columns are stored without a zone."""
    return datetime.now(UTC).replace(tzinfo=None)
