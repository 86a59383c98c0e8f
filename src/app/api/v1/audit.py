"""Audit history (admin only)."""

from enum import Enum
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query

from src.app.api.dependencies import AdminAccount, AuditServiceDep
from src.app.models import ProfileKind
from src.app.schemas.audit import AuditLogRead
from src.app.schemas.pagination import PaginatedResponse

router = APIRouter(prefix="/admin/audit", tags=["audit"])


class AuditedEntity(str, Enum):
    MEMBER = "member"
    SELLER = "seller"
    PROMOTER = "promoter"
    STEWARD = "steward"

    @property
    def kind(self) -> ProfileKind:
        return ProfileKind(self.name)


@router.get(
    "/{entity}/{entity_id}",
    response_model=PaginatedResponse[AuditLogRead],
    responses={
        200: {
            "description": "Status transitions for one member or profile, newest first",
            "content": {
                "application/json": {
                    "example": {
                        "items": [
                            {
                                "id": "01927f6c-3a8e-7d4b-9c2a-5e8f1b2c3d4e",
                                "account_id": None,
                                "action": "seller.reverification_required",
                                "entity_type": "seller",
                                "entity_id": "01927f6c-1111-7d4b-9c2a-5e8f1b2c3d4e",
                                "changes": {
                                    "verification_status": {"old": "VERIFIED", "new": "PENDING"},
                                    "product_id": "01927f6c-2222-7d4b-9c2a-5e8f1b2c3d4e",
                                },
                                "request_id": "4f2b9c0e8d1a4e6f",
                                "created_at": "2025-01-01T00:00:00",
                            }
                        ],
                        "next_cursor": None,
                        "has_more": False,
                    }
                }
            },
        },
        403: {"description": "ADMIN_REQUIRED"},
    },
)
async def get_entity_history(
    entity: AuditedEntity,
    entity_id: UUID,
    _admin: AdminAccount,
    audit_service: AuditServiceDep,
    cursor: Annotated[str | None, Query(description="Cursor for pagination")] = None,
    limit: Annotated[int, Query(ge=1, le=100)] = 50,
) -> PaginatedResponse[AuditLogRead]:
    logs, next_cursor, has_more = await audit_service.history(entity.kind, entity_id, cursor, limit)
    return PaginatedResponse(
        items=[AuditLogRead.model_validate(log) for log in logs],
        next_cursor=next_cursor,
        has_more=has_more,
    )
