"""Models package.

Re-exports every table model so importing ``src.app.models`` registers the
full metadata.
"""

from src.app.models.account import Account
from src.app.models.audit import AuditAction, AuditLog, audit_entity_type
from src.app.models.base import utc_now
from src.app.models.catalog import Product, StewardListing
from src.app.models.enums import (
    PERSONA_FOR_PROFILE,
    ApplicationStatus,
    ListingStatus,
    OnboardingStatus,
    Persona,
    ProfileKind,
    RegistrationStatus,
    SellerVerificationStatus,
    VerificationStatus,
)
from src.app.models.member import Member
from src.app.models.profiles import ApplicationProfile, Promoter, Seller, Steward

__all__ = [
    # Tables
    "Account",
    "AuditLog",
    "Member",
    "Product",
    "Promoter",
    "Seller",
    "Steward",
    "StewardListing",
    # Bases
    "ApplicationProfile",
    "audit_entity_type",
    "utc_now",
    # Enums
    "PERSONA_FOR_PROFILE",
    "ApplicationStatus",
    "AuditAction",
    "ListingStatus",
    "OnboardingStatus",
    "Persona",
    "ProfileKind",
    "RegistrationStatus",
    "SellerVerificationStatus",
    "VerificationStatus",
]
