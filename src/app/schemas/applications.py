"""Seller, promoter and steward application schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from src.app.schemas.common import ChapterId, NormalizedEmail, SocialLinks


class SellerApplication(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    email: NormalizedEmail
    sponsoring_chapter_id: ChapterId
    business_name: str | None = Field(None, max_length=255)
    vendor_license_number: str = Field(min_length=1, max_length=100)
    social_links: SocialLinks = Field(default_factory=dict)
    store_logo_url: str = Field(min_length=1, max_length=1000)
    headshot_url: str | None = Field(None, max_length=1000)


class PromoterApplication(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    email: NormalizedEmail
    membership_number: str = Field(min_length=1, max_length=50)
    initiated_chapter_id: ChapterId
    sponsoring_chapter_id: ChapterId | None = None
    social_links: SocialLinks = Field(default_factory=dict)
    headshot_url: str | None = Field(None, max_length=1000)


class StewardApplication(BaseModel):
    sponsoring_chapter_id: ChapterId


class ProfileRead(BaseModel):
    """Fields common to every application-driven profile."""

    id: UUID
    sponsoring_chapter_id: int | None
    status: str
    payment_account_id: str | None
    created_at: datetime
    updated_at: datetime
    # Set when approval succeeded but a side effect needs manual follow-up
    warning: str | None = None

    model_config = {"from_attributes": True}


class SellerRead(ProfileRead):
    email: str
    name: str
    member_id: UUID | None
    business_name: str | None
    vendor_license_number: str
    social_links: dict[str, str]
    store_logo_url: str | None
    headshot_url: str | None
    verification_status: str
    verification_notes: str | None
    verification_date: datetime | None


class PromoterRead(ProfileRead):
    email: str
    name: str
    membership_number: str | None
    member_id: UUID | None
    initiated_chapter_id: int | None
    social_links: dict[str, str]
    headshot_url: str | None


class StewardRead(ProfileRead):
    member_id: UUID
