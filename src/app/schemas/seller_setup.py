"""Invitation claim schemas."""

from pydantic import BaseModel, Field


class InvitationInfo(BaseModel):
    """Public info about an invitation (for the setup page)."""

    valid: bool = True
    profile_kind: str
    email: str
    name: str


class InvitationClaim(BaseModel):
    token: str = Field(min_length=1, max_length=128)
