"""Member model - the canonical fraternity membership record."""

from datetime import datetime
from typing import Any
from uuid import UUID, uuid7

from sqlalchemy import Column, Index, text
from sqlmodel import Field, SQLModel

from src.app.models.base import JSONVariant, utc_now
from src.app.models.enums import RegistrationStatus, VerificationStatus

_REGISTERED = text("registration_status <> 'DRAFT'")


class Member(SQLModel, table=True):
    """Fraternity member profile.

    Email and membership number are unique among registered (non-draft) rows.
    The partial unique indexes close the check-then-insert race between two
    concurrent registrations; drafts are exempt so a user can resume.
    """

    __tablename__ = "members"
    __table_args__ = (
        Index(
            "uq_members_email_registered",
            "email",
            unique=True,
            postgresql_where=_REGISTERED,
            sqlite_where=_REGISTERED,
        ),
        Index(
            "uq_members_membership_number_registered",
            "membership_number",
            unique=True,
            postgresql_where=_REGISTERED,
            sqlite_where=_REGISTERED,
        ),
        Index("ix_members_verification_created", "verification_status", "created_at"),
    )

    id: UUID = Field(default_factory=uuid7, primary_key=True)
    external_subject: str | None = Field(default=None, max_length=255, unique=True, index=True)
    email: str = Field(max_length=255, index=True)
    name: str | None = Field(default=None, max_length=255)
    membership_number: str | None = Field(default=None, max_length=50, index=True)

    # Initiation
    initiated_chapter_id: int | None = Field(default=None)
    initiated_season: str | None = Field(default=None, max_length=20)
    initiated_year: int | None = Field(default=None)
    ship_name: str | None = Field(default=None, max_length=255)
    line_name: str | None = Field(default=None, max_length=255)

    # Contact and profile
    location: str | None = Field(default=None, max_length=255)
    address: str | None = Field(default=None, max_length=500)
    address_is_private: bool = Field(default=True)
    phone_number: str | None = Field(default=None, max_length=50)
    phone_is_private: bool = Field(default=True)
    industry: str | None = Field(default=None, max_length=255)
    profession_id: int | None = Field(default=None)
    job_title: str | None = Field(default=None, max_length=255)
    bio: str | None = Field(default=None, max_length=5000)
    social_links: dict[str, Any] = Field(
        default_factory=dict,
        sa_column=Column(JSONVariant, nullable=False),
    )
    headshot_url: str | None = Field(default=None, max_length=1000)

    # Lifecycle
    registration_status: str = Field(default=RegistrationStatus.DRAFT.value, max_length=20)
    verification_status: str = Field(default=VerificationStatus.PENDING.value, max_length=20)
    verification_date: datetime | None = Field(default=None)
    verification_notes: str | None = Field(default=None, max_length=2000)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def is_draft(self) -> bool:
        return self.registration_status == RegistrationStatus.DRAFT.value

    @property
    def is_verified(self) -> bool:
        return self.verification_status == VerificationStatus.VERIFIED.value
