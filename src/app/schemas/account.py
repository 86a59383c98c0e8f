from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field

from src.app.schemas.common import NormalizedEmail


class AccountUpsertRequest(BaseModel):
    """Sent by the frontend after the identity provider confirms a login."""

    external_subject: str = Field(min_length=1, max_length=255)
    email: NormalizedEmail


class AccountRead(BaseModel):
    id: UUID
    external_subject: str
    email: str
    persona: str
    profile_kind: str | None
    profile_id: UUID | None
    onboarding_status: str
    features: dict[str, Any]
    last_login: datetime | None
    created_at: datetime

    model_config = {"from_attributes": True}


class AccountMeResponse(AccountRead):
    """The caller's account plus capabilities derived from its profiles."""

    member_id: UUID | None = None
    name: str | None = None
    is_fraternity_member: bool = False
    is_seller: bool = False
    is_promoter: bool = False
    is_steward: bool = False
