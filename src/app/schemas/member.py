"""Member registration and profile schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from src.app.schemas.common import ChapterId, NormalizedEmail, SocialLinks


class MemberProfileFields(BaseModel):
    """Optional profile fields accepted by every member write."""

    initiated_season: str | None = Field(None, max_length=20)
    initiated_year: int | None = Field(None, gt=0)
    ship_name: str | None = Field(None, max_length=255)
    line_name: str | None = Field(None, max_length=255)
    location: str | None = Field(None, max_length=255)
    address: str | None = Field(None, max_length=500)
    phone_number: str | None = Field(None, max_length=50)
    industry: str | None = Field(None, max_length=255)
    profession_id: int | None = Field(None, gt=0)
    job_title: str | None = Field(None, max_length=255)
    bio: str | None = Field(None, max_length=5000)
    headshot_url: str | None = Field(None, max_length=1000)


class MemberRegistration(MemberProfileFields):
    """Complete registration payload; every required field must be present."""

    name: str = Field(min_length=1, max_length=255)
    email: NormalizedEmail
    membership_number: str = Field(min_length=1, max_length=50)
    initiated_chapter_id: ChapterId
    address_is_private: bool = False
    phone_is_private: bool = False
    social_links: SocialLinks = Field(default_factory=dict)


class MemberDraft(MemberProfileFields):
    """Incremental save. Only the fields actually sent are written."""

    email: NormalizedEmail
    name: str | None = Field(None, min_length=1, max_length=255)
    membership_number: str | None = Field(None, min_length=1, max_length=50)
    initiated_chapter_id: ChapterId | None = None
    address_is_private: bool | None = None
    phone_is_private: bool | None = None
    social_links: SocialLinks | None = None


class MemberProfileUpdate(MemberProfileFields):
    """Self-service profile edit; identity and lifecycle fields are excluded."""

    name: str | None = Field(None, min_length=1, max_length=255)
    initiated_chapter_id: ChapterId | None = None
    address_is_private: bool | None = None
    phone_is_private: bool | None = None
    social_links: SocialLinks | None = None


class MemberRead(BaseModel):
    id: UUID
    email: str
    name: str | None
    membership_number: str | None
    initiated_chapter_id: int | None
    initiated_season: str | None
    initiated_year: int | None
    ship_name: str | None
    line_name: str | None
    location: str | None
    address: str | None
    address_is_private: bool
    phone_number: str | None
    phone_is_private: bool
    industry: str | None
    profession_id: int | None
    job_title: str | None
    bio: str | None
    social_links: dict[str, str]
    headshot_url: str | None
    registration_status: str
    verification_status: str
    verification_date: datetime | None
    verification_notes: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
