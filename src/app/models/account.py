"""Account model - one row per authenticated external identity."""

from datetime import datetime
from typing import Any
from uuid import UUID, uuid7

from sqlalchemy import CheckConstraint, Column
from sqlmodel import Field, SQLModel

from src.app.models.base import JSONVariant, utc_now
from src.app.models.enums import (
    PERSONA_FOR_PROFILE,
    OnboardingStatus,
    Persona,
    ProfileKind,
)


class Account(SQLModel, table=True):
    """An authenticated identity and the one profile it owns, if any.

    The profile binding is a tagged reference (``profile_kind``, ``profile_id``)
    instead of four nullable foreign keys, so "at most one profile" holds by
    construction. The check constraints pin the tag to the persona:

    - ADMIN owns nothing
    - GUEST owns nothing (onboarding incomplete) or a MEMBER profile
    - SELLER / PROMOTER / STEWARD own exactly the profile of their kind
    """

    __tablename__ = "accounts"
    __table_args__ = (
        CheckConstraint(
            "(profile_kind IS NULL) = (profile_id IS NULL)",
            name="ck_accounts_profile_ref_pair",
        ),
        CheckConstraint(
            "(persona = 'ADMIN' AND profile_kind IS NULL)"
            " OR (persona = 'GUEST' AND (profile_kind IS NULL OR profile_kind = 'MEMBER'))"
            " OR (persona IN ('SELLER', 'PROMOTER', 'STEWARD')"
            " AND profile_kind IS NOT NULL AND profile_kind = persona)",
            name="ck_accounts_persona_profile",
        ),
    )

    id: UUID = Field(default_factory=uuid7, primary_key=True)
    external_subject: str = Field(max_length=255, unique=True, index=True)
    email: str = Field(max_length=255, unique=True, index=True)
    persona: str = Field(default=Persona.GUEST.value, max_length=20)
    profile_kind: str | None = Field(default=None, max_length=20)
    profile_id: UUID | None = Field(default=None, index=True)
    onboarding_status: str = Field(default=OnboardingStatus.PRE_COGNITO.value, max_length=30)
    features: dict[str, Any] = Field(
        default_factory=dict,
        sa_column=Column(JSONVariant, nullable=False),
    )
    last_login: datetime | None = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    def _ref(self, kind: ProfileKind) -> UUID | None:
        return self.profile_id if self.profile_kind == kind.value else None

    @property
    def member_ref(self) -> UUID | None:
        return self._ref(ProfileKind.MEMBER)

    @property
    def seller_ref(self) -> UUID | None:
        return self._ref(ProfileKind.SELLER)

    @property
    def promoter_ref(self) -> UUID | None:
        return self._ref(ProfileKind.PROMOTER)

    @property
    def steward_ref(self) -> UUID | None:
        return self._ref(ProfileKind.STEWARD)

    @property
    def is_admin(self) -> bool:
        return self.persona == Persona.ADMIN.value

    def bind_profile(self, kind: ProfileKind, profile_id: UUID) -> None:
        """Point the account at a profile; the persona follows the profile kind."""
        self.profile_kind = kind.value
        self.profile_id = profile_id
        self.persona = PERSONA_FOR_PROFILE[kind].value
        self.updated_at = utc_now()

    def clear_profile(self) -> None:
        """Drop the profile reference and fall back to an unregistered guest."""
        self.profile_kind = None
        self.profile_id = None
        if not self.is_admin:
            self.persona = Persona.GUEST.value
        self.updated_at = utc_now()
