"""Catalog rows that participate in the verification lifecycle."""

from datetime import datetime
from uuid import UUID, uuid7

from sqlmodel import Field, SQLModel

from src.app.models.base import utc_now
from src.app.models.enums import ListingStatus


class Product(SQLModel, table=True):
    """Seller merchandise. ``is_kappa_branded`` drives seller re-verification."""

    __tablename__ = "products"

    id: UUID = Field(default_factory=uuid7, primary_key=True)
    seller_id: UUID = Field(foreign_key="sellers.id", index=True)
    name: str = Field(max_length=255)
    description: str | None = Field(default=None, max_length=5000)
    price_cents: int = Field(ge=0)
    is_kappa_branded: bool = Field(default=False)
    image_url: str | None = Field(default=None, max_length=1000)
    created_at: datetime = Field(default_factory=utc_now)


class StewardListing(SQLModel, table=True):
    """Heritage item offered by a steward to verified members."""

    __tablename__ = "steward_listings"

    id: UUID = Field(default_factory=uuid7, primary_key=True)
    steward_id: UUID = Field(foreign_key="stewards.id", index=True)
    name: str = Field(max_length=255)
    description: str | None = Field(default=None, max_length=5000)
    shipping_cost_cents: int = Field(default=0, ge=0)
    chapter_donation_cents: int = Field(default=0, ge=0)
    status: str = Field(default=ListingStatus.ACTIVE.value, max_length=20, index=True)
    created_at: datetime = Field(default_factory=utc_now)
