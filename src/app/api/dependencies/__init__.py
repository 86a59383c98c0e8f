"""FastAPI dependency injection definitions.

Re-exports all dependencies so routers import from one place.
"""

# Auth
from src.app.api.dependencies.auth import (
    AdminAccount,
    CurrentAccount,
    CurrentIdentity,
    CurrentSteward,
    Identity,
    OptionalAccount,
    SellerAccount,
    StewardAccount,
    VerifiedMember,
    get_current_account,
    get_current_steward,
    get_identity,
    get_optional_account,
    require_admin,
    require_role,
    require_steward,
    require_verified_member,
)

# Database
from src.app.api.dependencies.db import DBSession, get_db_session

# Repositories
from src.app.api.dependencies.repositories import (
    AccountRepo,
    MemberRepo,
    ProductRepo,
    PromoterRepo,
    SellerRepo,
    StewardListingRepo,
    StewardRepo,
)

# Services
from src.app.api.dependencies.services import (
    AccountServiceDep,
    AdminServiceDep,
    ApplicationServiceDep,
    ApprovalServiceDep,
    AuditServiceDep,
    CatalogServiceDep,
    InvitationServiceDep,
    RegistrationServiceDep,
    VerificationServiceDep,
    get_audit_service,
)

__all__ = [
    # Database
    "DBSession",
    "get_db_session",
    # Auth
    "AdminAccount",
    "CurrentAccount",
    "CurrentIdentity",
    "CurrentSteward",
    "Identity",
    "OptionalAccount",
    "SellerAccount",
    "StewardAccount",
    "VerifiedMember",
    "get_current_account",
    "get_current_steward",
    "get_identity",
    "get_optional_account",
    "require_admin",
    "require_role",
    "require_steward",
    "require_verified_member",
    # Repositories
    "AccountRepo",
    "MemberRepo",
    "ProductRepo",
    "PromoterRepo",
    "SellerRepo",
    "StewardListingRepo",
    "StewardRepo",
    # Services
    "AccountServiceDep",
    "AdminServiceDep",
    "ApplicationServiceDep",
    "ApprovalServiceDep",
    "AuditServiceDep",
    "CatalogServiceDep",
    "InvitationServiceDep",
    "RegistrationServiceDep",
    "VerificationServiceDep",
    "get_audit_service",
]
