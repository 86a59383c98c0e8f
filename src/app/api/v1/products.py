"""Product creation - the catalog write that can trigger seller re-verification."""

from fastapi import APIRouter, status

from src.app.api.dependencies import CatalogServiceDep, SellerAccount
from src.app.schemas.catalog import ProductCreate, ProductRead

router = APIRouter(prefix="/products", tags=["products"])


@router.post(
    "",
    response_model=ProductRead,
    status_code=status.HTTP_201_CREATED,
    responses={
        403: {"description": "INSUFFICIENT_ROLE, SELLER_NOT_APPROVED or VERIFICATION_REQUIRED"},
    },
)
async def create_product(
    data: ProductCreate,
    account: SellerAccount,
    service: CatalogServiceDep,
) -> ProductRead:
    """Create a product for the caller's seller profile.

    Adding branded merchandise may send the seller back to PENDING
    verification.
    """
    product = await service.create_product(account, data)
    return ProductRead.model_validate(product)
