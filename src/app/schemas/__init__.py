from src.app.schemas.account import AccountMeResponse, AccountRead, AccountUpsertRequest
from src.app.schemas.admin import (
    ApplicationDecision,
    MemberVerificationUpdate,
    SellerVerificationUpdate,
)
from src.app.schemas.applications import (
    PromoterApplication,
    PromoterRead,
    SellerApplication,
    SellerRead,
    StewardApplication,
    StewardRead,
)
from src.app.schemas.audit import AuditLogRead
from src.app.schemas.catalog import (
    ProductCreate,
    ProductRead,
    StewardListingCreate,
    StewardListingRead,
)
from src.app.schemas.member import (
    MemberDraft,
    MemberProfileUpdate,
    MemberRead,
    MemberRegistration,
)
from src.app.schemas.pagination import PaginatedResponse
from src.app.schemas.seller_setup import InvitationClaim, InvitationInfo

__all__ = [
    # Account
    "AccountMeResponse",
    "AccountRead",
    "AccountUpsertRequest",
    # Admin
    "ApplicationDecision",
    "MemberVerificationUpdate",
    "SellerVerificationUpdate",
    # Applications
    "PromoterApplication",
    "PromoterRead",
    "SellerApplication",
    "SellerRead",
    "StewardApplication",
    "StewardRead",
    # Audit
    "AuditLogRead",
    # Catalog
    "ProductCreate",
    "ProductRead",
    "StewardListingCreate",
    "StewardListingRead",
    # Member
    "MemberDraft",
    "MemberProfileUpdate",
    "MemberRead",
    "MemberRegistration",
    # Pagination
    "PaginatedResponse",
    # Seller setup
    "InvitationClaim",
    "InvitationInfo",
]
