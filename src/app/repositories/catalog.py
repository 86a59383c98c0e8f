"""Repositories for products and steward listings."""

from uuid import UUID

from sqlmodel import select

from src.app.models import ListingStatus, Product, StewardListing
from src.app.repositories.base import BaseRepository, Page


class ProductRepository(BaseRepository[Product]):
    model = Product

    async def list_by_seller(self, seller_id: UUID) -> list[Product]:
        result = await self.session.execute(
            select(Product).where(Product.seller_id == seller_id).order_by(Product.created_at)
        )
        return list(result.scalars().all())


class StewardListingRepository(BaseRepository[StewardListing]):
    model = StewardListing

    async def list_by_steward(self, steward_id: UUID) -> list[StewardListing]:
        result = await self.session.execute(
            select(StewardListing)
            .where(StewardListing.steward_id == steward_id)
            .order_by(StewardListing.created_at.desc())
        )
        return list(result.scalars().all())

    async def list_active(
        self, cursor: str | None, limit: int
    ) -> Page[StewardListing]:
        """Active listings for the steward marketplace."""
        query = select(StewardListing).where(
            StewardListing.status == ListingStatus.ACTIVE.value
        )
        return await self.paginate(query, cursor, limit)
