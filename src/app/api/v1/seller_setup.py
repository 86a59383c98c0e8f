"""Invitation claim endpoints for approved applicants without an account."""

from fastapi import APIRouter, status

from src.app.api.dependencies import CurrentIdentity, InvitationServiceDep
from src.app.schemas.account import AccountRead
from src.app.schemas.seller_setup import InvitationClaim, InvitationInfo

router = APIRouter(prefix="/seller-setup", tags=["seller-setup"])


@router.get(
    "/validate/{token}",
    response_model=InvitationInfo,
    responses={404: {"description": "INVALID_TOKEN"}},
)
async def validate_invitation(token: str, service: InvitationServiceDep) -> InvitationInfo:
    return await service.validate(token)


@router.post(
    "/complete",
    response_model=AccountRead,
    status_code=status.HTTP_201_CREATED,
    responses={
        403: {"description": "Invitation was issued to a different email"},
        404: {"description": "INVALID_TOKEN"},
        409: {"description": "USER_ALREADY_EXISTS"},
    },
)
async def complete_setup(
    data: InvitationClaim,
    identity: CurrentIdentity,
    service: InvitationServiceDep,
) -> AccountRead:
    """Claim an invitation: create the caller's account bound to the approved profile."""
    account = await service.claim(identity.subject, identity.email, data.token)
    return AccountRead.model_validate(account)
