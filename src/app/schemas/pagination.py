"""Keyset pagination shared by review queues, listings and audit history."""

import base64
import json
from datetime import datetime
from typing import Generic, TypeVar
from uuid import UUID

from pydantic import BaseModel, Field

T = TypeVar("T")


class PaginatedResponse(BaseModel, Generic[T]):
    """One page of results.

    ``next_cursor`` is opaque; pass it back unchanged to continue from the
    last item of this page.
    """

    items: list[T]
    next_cursor: str | None = Field(
        default=None,
        description="Cursor for the next page, None on the last page",
    )
    has_more: bool = False


def encode_cursor(created_at: datetime, id: UUID) -> str:
    payload = json.dumps([created_at.isoformat(), str(id)])
    return base64.urlsafe_b64encode(payload.encode()).decode()


def decode_cursor(cursor: str) -> tuple[datetime, UUID]:
    """Return the ``(created_at, id)`` position a cursor points at.

    Raises:
        ValueError: The cursor was not produced by ``encode_cursor``.
    """
    try:
        created_at, id = json.loads(base64.urlsafe_b64decode(cursor.encode()))
        return datetime.fromisoformat(created_at), UUID(id)
    except (TypeError, ValueError) as e:
        raise ValueError("Invalid cursor") from e
