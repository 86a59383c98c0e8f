"""Promoter application endpoint."""

from fastapi import APIRouter, Request, status

from src.app.api.dependencies import ApplicationServiceDep, OptionalAccount
from src.app.core.rate_limit import limit_applications
from src.app.schemas.applications import PromoterApplication, PromoterRead

router = APIRouter(prefix="/promoters", tags=["promoters"])


@router.post(
    "/apply",
    response_model=PromoterRead,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {"description": "Application received (PENDING) or auto-approved (APPROVED)"},
        409: {"description": "APPLICATION_EXISTS"},
    },
)
@limit_applications
async def apply(
    request: Request,
    data: PromoterApplication,
    account: OptionalAccount,
    service: ApplicationServiceDep,
) -> PromoterRead:
    promoter = await service.apply_promoter(data, account)
    return PromoterRead.model_validate(promoter)
