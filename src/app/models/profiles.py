"""Persona profiles - sellers, promoters and stewards."""

from datetime import datetime
from typing import Any, ClassVar
from uuid import UUID, uuid7

from sqlalchemy import Column, Index, text
from sqlmodel import Field, SQLModel

from src.app.models.base import JSONVariant, utc_now
from src.app.models.enums import ApplicationStatus, ProfileKind, SellerVerificationStatus

_ACTIVE = text("status <> 'REJECTED'")


class ApplicationProfile(SQLModel):
    """Fields shared by every application-driven profile (not a table)."""

    id: UUID = Field(default_factory=uuid7, primary_key=True)
    sponsoring_chapter_id: int | None = Field(default=None)
    status: str = Field(default=ApplicationStatus.PENDING.value, max_length=20)
    # Set once at approval time, immutable afterwards
    payment_account_id: str | None = Field(default=None, max_length=255)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def is_approved(self) -> bool:
        return self.status == ApplicationStatus.APPROVED.value


class Seller(ApplicationProfile, table=True):
    """Merchandise seller. May or may not also be a fraternity member."""

    __tablename__ = "sellers"
    __table_args__ = (
        Index(
            "uq_sellers_email_active",
            "email",
            unique=True,
            postgresql_where=_ACTIVE,
            sqlite_where=_ACTIVE,
        ),
        Index("ix_sellers_status_created", "status", "created_at"),
    )

    kind: ClassVar[ProfileKind] = ProfileKind.SELLER

    email: str = Field(max_length=255, index=True)
    name: str = Field(max_length=255)
    member_id: UUID | None = Field(default=None, foreign_key="members.id", index=True)
    business_name: str | None = Field(default=None, max_length=255)
    vendor_license_number: str = Field(max_length=100)
    social_links: dict[str, Any] = Field(
        default_factory=dict,
        sa_column=Column(JSONVariant, nullable=False),
    )
    store_logo_url: str | None = Field(default=None, max_length=1000)
    headshot_url: str | None = Field(default=None, max_length=1000)

    verification_status: str = Field(
        default=SellerVerificationStatus.PENDING.value, max_length=20
    )
    verification_notes: str | None = Field(default=None, max_length=2000)
    verification_date: datetime | None = Field(default=None)

    invitation_token_hash: str | None = Field(default=None, max_length=255, unique=True)
    invitation_expires_at: datetime | None = Field(default=None)


class Promoter(ApplicationProfile, table=True):
    """Event promoter."""

    __tablename__ = "promoters"
    __table_args__ = (
        Index(
            "uq_promoters_email_active",
            "email",
            unique=True,
            postgresql_where=_ACTIVE,
            sqlite_where=_ACTIVE,
        ),
        Index(
            "uq_promoters_membership_number_active",
            "membership_number",
            unique=True,
            postgresql_where=_ACTIVE,
            sqlite_where=_ACTIVE,
        ),
        Index("ix_promoters_status_created", "status", "created_at"),
    )

    kind: ClassVar[ProfileKind] = ProfileKind.PROMOTER

    email: str = Field(max_length=255, index=True)
    name: str = Field(max_length=255)
    membership_number: str | None = Field(default=None, max_length=50)
    member_id: UUID | None = Field(default=None, foreign_key="members.id", index=True)
    initiated_chapter_id: int | None = Field(default=None)
    social_links: dict[str, Any] = Field(
        default_factory=dict,
        sa_column=Column(JSONVariant, nullable=False),
    )
    headshot_url: str | None = Field(default=None, max_length=1000)

    invitation_token_hash: str | None = Field(default=None, max_length=255, unique=True)
    invitation_expires_at: datetime | None = Field(default=None)


class Steward(ApplicationProfile, table=True):
    """Custodian of donated heritage items. Member-only."""

    __tablename__ = "stewards"
    __table_args__ = (
        Index(
            "uq_stewards_member_active",
            "member_id",
            unique=True,
            postgresql_where=_ACTIVE,
            sqlite_where=_ACTIVE,
        ),
        Index("ix_stewards_status_created", "status", "created_at"),
    )

    kind: ClassVar[ProfileKind] = ProfileKind.STEWARD

    member_id: UUID = Field(foreign_key="members.id", index=True)
