"""Audit trail for admin decisions and automatic status flips.

Entries go through a session of their own: a failed audit write is logged and
dropped, and never undoes the decision it describes.
"""

import contextlib
from typing import Any
from uuid import UUID

from asgi_correlation_id import correlation_id
from sqlalchemy.ext.asyncio import AsyncSession

from src.app.core.logging import get_logger
from src.app.models import Account, AuditAction, AuditLog, ProfileKind, audit_entity_type
from src.app.repositories import AuditLogRepository
from src.app.repositories.base import Page

logger = get_logger(__name__)


class AuditService:
    def __init__(self, audit_repo: AuditLogRepository, session: AsyncSession):
        self.audit_repo = audit_repo
        self.session = session

    async def record_transition(
        self,
        action: AuditAction,
        kind: ProfileKind,
        entity_id: UUID,
        field: str,
        old: str | None,
        new: str | None,
        *,
        actor: Account | None = None,
        **details: Any,
    ) -> AuditLog | None:
        """Record ``field`` moving from ``old`` to ``new`` on one entity.

        ``details`` are stored next to the transition (notes, warnings,
        the product that triggered a flip). Returns None when the entry could
        not be written.
        """
        entry = AuditLog(
            account_id=actor.id if actor else None,
            action=action.value,
            entity_type=audit_entity_type(kind),
            entity_id=entity_id,
            changes={field: {"old": old, "new": new}, **details},
            request_id=correlation_id.get(),
        )
        try:
            self.audit_repo.add(entry)
            await self.session.commit()
        except Exception as e:
            logger.warning(
                "Audit entry dropped",
                action=entry.action,
                entity_type=entry.entity_type,
                entity_id=str(entity_id),
                error=str(e),
            )
            with contextlib.suppress(Exception):
                await self.session.rollback()
            return None

        logger.debug(
            "Audit entry recorded",
            action=entry.action,
            entity_type=entry.entity_type,
            entity_id=str(entity_id),
        )
        return entry

    async def history(
        self,
        kind: ProfileKind,
        entity_id: UUID,
        cursor: str | None = None,
        limit: int = 50,
    ) -> Page[AuditLog]:
        return await self.audit_repo.list_for_entity(kind, entity_id, cursor, limit)
