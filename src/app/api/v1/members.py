"""Member registration and profile endpoints."""

from fastapi import APIRouter, Request, status

from src.app.api.dependencies import CurrentAccount, CurrentIdentity, RegistrationServiceDep
from src.app.core.rate_limit import limit_registration
from src.app.schemas.member import (
    MemberDraft,
    MemberProfileUpdate,
    MemberRead,
    MemberRegistration,
)

router = APIRouter(prefix="/members", tags=["members"])


@router.post(
    "/draft",
    response_model=MemberRead,
    responses={
        200: {"description": "Current state of the caller's draft"},
        401: {"description": "Not authenticated"},
        409: {"description": "Registration already complete"},
    },
)
@limit_registration
async def save_draft(
    request: Request,
    data: MemberDraft,
    identity: CurrentIdentity,
    service: RegistrationServiceDep,
) -> MemberRead:
    """Save registration progress.

    Repeated saves patch the same draft; omitted fields are left untouched.
    """
    draft = await service.save_draft(identity.subject, data)
    return MemberRead.model_validate(draft)


@router.get(
    "/draft",
    response_model=MemberRead,
    responses={404: {"description": "No draft in progress"}},
)
async def get_draft(identity: CurrentIdentity, service: RegistrationServiceDep) -> MemberRead:
    draft = await service.get_draft(identity.subject)
    return MemberRead.model_validate(draft)


@router.post(
    "/register",
    response_model=MemberRead,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {"description": "Member registered and linked to the caller's account"},
        400: {"description": "DUPLICATE_REGISTRATION or validation error"},
        401: {"description": "Not authenticated"},
        500: {"description": "USER_LINKING_FAILED - nothing was persisted"},
    },
)
@limit_registration
async def register(
    request: Request,
    data: MemberRegistration,
    identity: CurrentIdentity,
    service: RegistrationServiceDep,
) -> MemberRead:
    """Complete member registration."""
    member = await service.register(identity.subject, identity.email, data)
    return MemberRead.model_validate(member)


@router.get(
    "/profile",
    response_model=MemberRead,
    responses={
        401: {"description": "Not authenticated"},
        403: {"description": "No account for this identity"},
        404: {"description": "MEMBER_NOT_FOUND - registration required"},
    },
)
async def get_profile(account: CurrentAccount, service: RegistrationServiceDep) -> MemberRead:
    member = await service.get_profile(account)
    return MemberRead.model_validate(member)


@router.put("/profile", response_model=MemberRead)
async def update_profile(
    data: MemberProfileUpdate,
    account: CurrentAccount,
    service: RegistrationServiceDep,
) -> MemberRead:
    """Update the caller's profile. Only the fields sent are changed."""
    member = await service.update_profile(account, data)
    return MemberRead.model_validate(member)
