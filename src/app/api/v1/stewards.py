"""Steward application, profile and marketplace endpoints."""

from typing import Annotated

from fastapi import APIRouter, Query, Request, status

from src.app.api.dependencies import (
    ApplicationServiceDep,
    CatalogServiceDep,
    CurrentAccount,
    CurrentSteward,
    StewardAccount,
    VerifiedMember,
)
from src.app.core.rate_limit import limit_applications
from src.app.schemas.applications import StewardApplication, StewardRead
from src.app.schemas.catalog import StewardListingCreate, StewardListingRead
from src.app.schemas.pagination import PaginatedResponse

router = APIRouter(prefix="/stewards", tags=["stewards"])


@router.post(
    "/apply",
    response_model=StewardRead,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {"description": "Steward application created (APPROVED when auto-approval succeeded)"},
        401: {"description": "Not authenticated"},
        403: {"description": "MEMBER_PROFILE_REQUIRED or VERIFICATION_REQUIRED"},
        404: {"description": "MEMBER_NOT_FOUND"},
        409: {"description": "APPLICATION_EXISTS"},
    },
)
@limit_applications
async def apply(
    request: Request,
    data: StewardApplication,
    account: CurrentAccount,
    service: ApplicationServiceDep,
) -> StewardRead:
    """Apply to become a steward. Only verified members may apply."""
    steward = await service.apply_steward(data, account)
    return StewardRead.model_validate(steward)


@router.get("/profile", response_model=StewardRead)
async def get_profile(_account: StewardAccount, steward: CurrentSteward) -> StewardRead:
    return StewardRead.model_validate(steward)


@router.post(
    "/listings",
    response_model=StewardListingRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_listing(
    data: StewardListingCreate,
    steward: CurrentSteward,
    service: CatalogServiceDep,
) -> StewardListingRead:
    listing = await service.create_listing(steward, data)
    return StewardListingRead.model_validate(listing)


@router.get("/listings", response_model=list[StewardListingRead])
async def list_own_listings(
    steward: CurrentSteward,
    service: CatalogServiceDep,
) -> list[StewardListingRead]:
    listings = await service.list_steward_listings(steward)
    return [StewardListingRead.model_validate(listing) for listing in listings]


@router.get(
    "/marketplace",
    response_model=PaginatedResponse[StewardListingRead],
    responses={
        401: {"description": "Not authenticated"},
        403: {"description": "MEMBER_PROFILE_REQUIRED or VERIFICATION_REQUIRED"},
    },
)
async def marketplace(
    _member: VerifiedMember,
    service: CatalogServiceDep,
    cursor: Annotated[str | None, Query(description="Cursor for pagination")] = None,
    limit: Annotated[int, Query(ge=1, le=100, description="Number of items per page")] = 50,
) -> PaginatedResponse[StewardListingRead]:
    """Active steward listings, visible to verified members only."""
    listings, next_cursor, has_more = await service.list_marketplace(cursor, limit)
    return PaginatedResponse(
        items=[StewardListingRead.model_validate(listing) for listing in listings],
        next_cursor=next_cursor,
        has_more=has_more,
    )
