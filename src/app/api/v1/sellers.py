"""Seller application endpoint."""

from fastapi import APIRouter, Request, status

from src.app.api.dependencies import ApplicationServiceDep, OptionalAccount
from src.app.core.rate_limit import limit_applications
from src.app.schemas.applications import SellerApplication, SellerRead

router = APIRouter(prefix="/sellers", tags=["sellers"])


@router.post(
    "/apply",
    response_model=SellerRead,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {"description": "Application received (PENDING) or auto-approved (APPROVED)"},
        400: {"description": "Validation error"},
        409: {"description": "APPLICATION_EXISTS"},
    },
)
@limit_applications
async def apply(
    request: Request,
    data: SellerApplication,
    account: OptionalAccount,
    service: ApplicationServiceDep,
) -> SellerRead:
    """Apply to become a seller.

    Login is optional. Applicants whose Member is already verified are
    approved immediately.
    """
    seller = await service.apply_seller(data, account)
    return SellerRead.model_validate(seller)
