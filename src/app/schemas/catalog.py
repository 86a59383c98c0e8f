from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class ProductCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = Field(None, max_length=5000)
    price_cents: int = Field(ge=0)
    is_kappa_branded: bool = False
    image_url: str | None = Field(None, max_length=1000)


class ProductRead(BaseModel):
    id: UUID
    seller_id: UUID
    name: str
    description: str | None
    price_cents: int
    is_kappa_branded: bool
    image_url: str | None
    created_at: datetime

    model_config = {"from_attributes": True}


class StewardListingCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = Field(None, max_length=5000)
    shipping_cost_cents: int = Field(ge=0)
    chapter_donation_cents: int = Field(ge=0)


class StewardListingRead(BaseModel):
    id: UUID
    steward_id: UUID
    name: str
    description: str | None
    shipping_cost_cents: int
    chapter_donation_cents: int
    status: str
    created_at: datetime

    model_config = {"from_attributes": True}
