"""Admin decision schemas."""

from typing import Literal

from pydantic import BaseModel, Field

from src.app.models import SellerVerificationStatus, VerificationStatus


class ApplicationDecision(BaseModel):
    status: Literal["APPROVED", "REJECTED"]


class MemberVerificationUpdate(BaseModel):
    verification_status: VerificationStatus
    verification_notes: str | None = Field(None, max_length=2000)


class SellerVerificationUpdate(BaseModel):
    verification_status: SellerVerificationStatus
    verification_notes: str | None = Field(None, max_length=2000)
