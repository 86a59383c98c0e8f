"""Admin review endpoints (admin persona only)."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query

from src.app.api.dependencies import AdminAccount, AdminServiceDep
from src.app.models import ProfileKind
from src.app.schemas.admin import (
    ApplicationDecision,
    MemberVerificationUpdate,
    SellerVerificationUpdate,
)
from src.app.schemas.applications import PromoterRead, SellerRead, StewardRead
from src.app.schemas.member import MemberRead
from src.app.schemas.pagination import PaginatedResponse

router = APIRouter(prefix="/admin", tags=["admin"])

CursorQuery = Annotated[str | None, Query(description="Cursor for pagination")]
LimitQuery = Annotated[int, Query(ge=1, le=100, description="Number of items per page")]

DECISION_RESPONSES = {
    200: {
        "description": "Decision applied. `warning` is set when approval succeeded "
        "but payment provisioning needs a retry.",
        "content": {
            "application/json": {
                "example": {
                    "id": "01927f6c-3a8e-7d4b-9c2a-5e8f1b2c3d4e",
                    "status": "APPROVED",
                    "payment_account_id": None,
                    "warning": "Approved, but payment setup encountered an issue. "
                    "The payment account will need to be set up manually.",
                }
            }
        },
    },
    401: {"description": "Not authenticated"},
    403: {"description": "ADMIN_REQUIRED"},
    404: {"description": "PROFILE_NOT_FOUND"},
    409: {"description": "PERSONA_CONFLICT - the applicant's account already holds another role"},
}


@router.get("/sellers/pending", response_model=PaginatedResponse[SellerRead])
async def list_pending_sellers(
    _admin: AdminAccount,
    admin_service: AdminServiceDep,
    cursor: CursorQuery = None,
    limit: LimitQuery = 50,
) -> PaginatedResponse[SellerRead]:
    sellers, next_cursor, has_more = await admin_service.list_pending(
        ProfileKind.SELLER, cursor, limit
    )
    return PaginatedResponse(
        items=[SellerRead.model_validate(s) for s in sellers],
        next_cursor=next_cursor,
        has_more=has_more,
    )


@router.get("/promoters/pending", response_model=PaginatedResponse[PromoterRead])
async def list_pending_promoters(
    _admin: AdminAccount,
    admin_service: AdminServiceDep,
    cursor: CursorQuery = None,
    limit: LimitQuery = 50,
) -> PaginatedResponse[PromoterRead]:
    promoters, next_cursor, has_more = await admin_service.list_pending(
        ProfileKind.PROMOTER, cursor, limit
    )
    return PaginatedResponse(
        items=[PromoterRead.model_validate(p) for p in promoters],
        next_cursor=next_cursor,
        has_more=has_more,
    )


@router.get("/stewards/pending", response_model=PaginatedResponse[StewardRead])
async def list_pending_stewards(
    _admin: AdminAccount,
    admin_service: AdminServiceDep,
    cursor: CursorQuery = None,
    limit: LimitQuery = 50,
) -> PaginatedResponse[StewardRead]:
    stewards, next_cursor, has_more = await admin_service.list_pending(
        ProfileKind.STEWARD, cursor, limit
    )
    return PaginatedResponse(
        items=[StewardRead.model_validate(s) for s in stewards],
        next_cursor=next_cursor,
        has_more=has_more,
    )


@router.get("/members/pending", response_model=PaginatedResponse[MemberRead])
async def list_pending_members(
    _admin: AdminAccount,
    admin_service: AdminServiceDep,
    cursor: CursorQuery = None,
    limit: LimitQuery = 50,
) -> PaginatedResponse[MemberRead]:
    """Registered members awaiting verification (PENDING or MANUAL_REVIEW)."""
    members, next_cursor, has_more = await admin_service.list_pending_members(cursor, limit)
    return PaginatedResponse(
        items=[MemberRead.model_validate(m) for m in members],
        next_cursor=next_cursor,
        has_more=has_more,
    )


@router.put("/sellers/{seller_id}", response_model=SellerRead, responses=DECISION_RESPONSES)
async def decide_seller(
    seller_id: UUID,
    data: ApplicationDecision,
    admin: AdminAccount,
    admin_service: AdminServiceDep,
) -> SellerRead:
    """Approve or reject a seller application.

    Approval runs the same routine as auto-approval: account binding,
    payment account provisioning and the approval email.
    """
    result = await admin_service.decide(admin, ProfileKind.SELLER, seller_id, data.status)
    return SellerRead.model_validate(result.profile).model_copy(update={"warning": result.warning})


@router.put("/promoters/{promoter_id}", response_model=PromoterRead, responses=DECISION_RESPONSES)
async def decide_promoter(
    promoter_id: UUID,
    data: ApplicationDecision,
    admin: AdminAccount,
    admin_service: AdminServiceDep,
) -> PromoterRead:
    result = await admin_service.decide(admin, ProfileKind.PROMOTER, promoter_id, data.status)
    return PromoterRead.model_validate(result.profile).model_copy(
        update={"warning": result.warning}
    )


@router.put("/stewards/{steward_id}", response_model=StewardRead, responses=DECISION_RESPONSES)
async def decide_steward(
    steward_id: UUID,
    data: ApplicationDecision,
    admin: AdminAccount,
    admin_service: AdminServiceDep,
) -> StewardRead:
    result = await admin_service.decide(admin, ProfileKind.STEWARD, steward_id, data.status)
    return StewardRead.model_validate(result.profile).model_copy(
        update={"warning": result.warning}
    )


@router.put("/members/{member_id}/verification", response_model=MemberRead)
async def update_member_verification(
    member_id: UUID,
    data: MemberVerificationUpdate,
    admin: AdminAccount,
    admin_service: AdminServiceDep,
) -> MemberRead:
    """Record a member verification outcome."""
    member = await admin_service.update_member_verification(admin, member_id, data)
    return MemberRead.model_validate(member)


@router.put("/sellers/{seller_id}/verification", response_model=SellerRead)
async def update_seller_verification(
    seller_id: UUID,
    data: SellerVerificationUpdate,
    admin: AdminAccount,
    admin_service: AdminServiceDep,
) -> SellerRead:
    """Manual seller re-review. This is the only way back to VERIFIED."""
    seller = await admin_service.update_seller_verification(admin, seller_id, data)
    return SellerRead.model_validate(seller)
