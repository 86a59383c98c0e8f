"""Catalog writes that participate in the verification lifecycle."""

from sqlalchemy.ext.asyncio import AsyncSession

from src.app.core.exceptions import (
    AuthorizationError,
    ProfileNotFoundError,
    VerificationRequiredError,
)
from src.app.core.logging import get_logger
from src.app.models import (
    Account,
    AuditAction,
    Product,
    ProfileKind,
    Seller,
    SellerVerificationStatus,
    Steward,
    StewardListing,
    utc_now,
)
from src.app.repositories import (
    ProductRepository,
    SellerRepository,
    StewardListingRepository,
)
from src.app.schemas import ProductCreate, StewardListingCreate
from src.app.services.audit_service import AuditService
from src.app.services.verification_service import VerificationService

logger = get_logger(__name__)

REVERIFICATION_NOTE = (
    "Verification status changed to PENDING after adding Kappa branded product. "
    "Requires review."
)


class CatalogService:
    def __init__(
        self,
        session: AsyncSession,
        seller_repo: SellerRepository,
        product_repo: ProductRepository,
        listing_repo: StewardListingRepository,
        verification_service: VerificationService,
        audit_service: AuditService,
    ):
        self.session = session
        self.seller_repo = seller_repo
        self.product_repo = product_repo
        self.listing_repo = listing_repo
        self.verification_service = verification_service
        self.audit_service = audit_service

    async def create_product(self, account: Account, data: ProductCreate) -> Product:
        """Create a product for the caller's seller profile.

        Branded merchandise runs the re-verification check: a VERIFIED seller
        whose Member (if any) is not itself VERIFIED goes back to PENDING. A
        seller with no Member at all may only list branded items once it is
        independently VERIFIED.
        """
        seller = await self._require_approved_seller(account)

        flipped = False
        if data.is_kappa_branded:
            flipped = await self._check_branded_listing(account, seller)

        product = Product(seller_id=seller.id, **data.model_dump())
        self.product_repo.add(product)
        await self.session.commit()

        logger.info(
            "Product created",
            product_id=str(product.id),
            seller_id=str(seller.id),
            is_kappa_branded=product.is_kappa_branded,
        )

        if flipped:
            logger.warning(
                "Seller requires re-verification",
                seller_id=str(seller.id),
                product_id=str(product.id),
            )
            await self.audit_service.record_transition(
                AuditAction.SELLER_REVERIFICATION_REQUIRED,
                ProfileKind.SELLER,
                seller.id,
                "verification_status",
                SellerVerificationStatus.VERIFIED.value,
                SellerVerificationStatus.PENDING.value,
                product_id=str(product.id),
                note=REVERIFICATION_NOTE,
            )

        return product

    async def create_listing(self, steward: Steward, data: StewardListingCreate) -> StewardListing:
        listing = StewardListing(steward_id=steward.id, **data.model_dump())
        self.listing_repo.add(listing)
        await self.session.commit()
        logger.info(
            "Steward listing created", listing_id=str(listing.id), steward_id=str(steward.id)
        )
        return listing

    async def list_steward_listings(self, steward: Steward) -> list[StewardListing]:
        return await self.listing_repo.list_by_steward(steward.id)

    async def list_marketplace(
        self, cursor: str | None, limit: int
    ) -> tuple[list[StewardListing], str | None, bool]:
        return await self.listing_repo.list_active(cursor, limit)

    async def _require_approved_seller(self, account: Account) -> Seller:
        if account.seller_ref is None:
            raise AuthorizationError("Seller profile required", code="INSUFFICIENT_ROLE")

        seller = await self.seller_repo.get_by_id(account.seller_ref)
        if seller is None:
            await self.verification_service.heal_orphan(account)
            raise ProfileNotFoundError("Seller profile not found")
        if not seller.is_approved:
            raise AuthorizationError(
                "Seller account is not approved yet",
                code="SELLER_NOT_APPROVED",
            )
        return seller

    async def _check_branded_listing(self, account: Account, seller: Seller) -> bool:
        """Apply the branded-merchandise rule. Returns True if the seller was flipped."""
        seller_verified = seller.verification_status == SellerVerificationStatus.VERIFIED.value

        if seller.member_id is None and not seller_verified:
            raise VerificationRequiredError(
                "Kappa branded products require a verified seller or a verified member"
            )

        resolution = await self.verification_service.resolve(account)
        if not seller_verified or resolution.is_verified:
            return False

        seller.verification_status = SellerVerificationStatus.PENDING.value
        seller.verification_notes = REVERIFICATION_NOTE
        seller.verification_date = None
        seller.updated_at = utc_now()
        return True
