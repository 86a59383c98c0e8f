from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class AuditLogRead(BaseModel):
    """One recorded status transition; ``account_id`` is None for automatic ones."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    account_id: UUID | None
    action: str
    entity_type: str
    entity_id: UUID
    changes: dict[str, Any]
    request_id: str | None
    created_at: datetime
