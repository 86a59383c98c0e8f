from uuid import UUID

from sqlmodel import select

from src.app.models import AuditLog, ProfileKind, audit_entity_type
from src.app.repositories.base import BaseRepository, Page


class AuditLogRepository(BaseRepository[AuditLog]):
    """Append-only: entries are never updated or deleted."""

    model = AuditLog

    async def list_for_entity(
        self,
        kind: ProfileKind,
        entity_id: UUID,
        cursor: str | None = None,
        limit: int = 50,
    ) -> Page[AuditLog]:
        query = select(AuditLog).where(
            AuditLog.entity_type == audit_entity_type(kind),
            AuditLog.entity_id == entity_id,
        )
        return await self.paginate(query, cursor, limit)
