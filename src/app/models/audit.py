"""Audit trail of lifecycle decisions on members and persona profiles."""

from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID, uuid7

from sqlalchemy import Column, Index
from sqlmodel import Field, SQLModel

from src.app.models.base import JSONVariant, utc_now
from src.app.models.enums import ProfileKind


class AuditAction(str, Enum):
    APPLICATION_APPROVE = "application.approve"
    APPLICATION_REJECT = "application.reject"
    MEMBER_VERIFICATION_UPDATE = "member.verification_update"
    SELLER_VERIFICATION_UPDATE = "seller.verification_update"
    SELLER_REVERIFICATION_REQUIRED = "seller.reverification_required"


def audit_entity_type(kind: ProfileKind) -> str:
    """Entity type stored on audit rows, e.g. ``"seller"``."""
    return kind.value.lower()


class AuditLog(SQLModel, table=True):
    """One status transition.

    ``account_id`` is the acting admin; it is None for transitions the system
    makes on its own, such as a re-verification flip.
    """

    __tablename__ = "audit_logs"
    __table_args__ = (
        Index("ix_audit_logs_entity_created", "entity_type", "entity_id", "created_at"),
        Index("ix_audit_logs_account_created", "account_id", "created_at"),
    )

    id: UUID = Field(default_factory=uuid7, primary_key=True)
    account_id: UUID | None = Field(default=None)
    action: str = Field(max_length=50)
    entity_type: str = Field(max_length=20)
    entity_id: UUID
    changes: dict[str, Any] = Field(
        default_factory=dict,
        sa_column=Column(JSONVariant, nullable=False),
    )
    request_id: str | None = Field(default=None, max_length=64)
    created_at: datetime = Field(default_factory=utc_now)
