"""Service factory dependencies."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends

from src.app.api.dependencies.db import DBSession
from src.app.api.dependencies.repositories import (
    AccountRepo,
    MemberRepo,
    ProductRepo,
    PromoterRepo,
    SellerRepo,
    StewardListingRepo,
    StewardRepo,
)
from src.app.core.db import get_session
from src.app.repositories import AuditLogRepository
from src.app.services import (
    AccountService,
    AdminService,
    ApplicationService,
    ApprovalService,
    AuditService,
    CatalogService,
    InvitationService,
    RegistrationService,
    VerificationService,
)


def get_verification_service(
    session: DBSession,
    member_repo: MemberRepo,
    seller_repo: SellerRepo,
    promoter_repo: PromoterRepo,
    steward_repo: StewardRepo,
) -> VerificationService:
    return VerificationService(session, member_repo, seller_repo, promoter_repo, steward_repo)


VerificationServiceDep = Annotated[VerificationService, Depends(get_verification_service)]


async def get_audit_service() -> AsyncGenerator[AuditService]:
    """Audit entries commit on a session of their own, outside the request transaction."""
    async with get_session() as session:
        yield AuditService(AuditLogRepository(session), session)


AuditServiceDep = Annotated[AuditService, Depends(get_audit_service)]


def get_approval_service(
    session: DBSession,
    account_repo: AccountRepo,
    member_repo: MemberRepo,
) -> ApprovalService:
    return ApprovalService(session, account_repo, member_repo)


ApprovalServiceDep = Annotated[ApprovalService, Depends(get_approval_service)]


def get_registration_service(
    session: DBSession,
    account_repo: AccountRepo,
    member_repo: MemberRepo,
    seller_repo: SellerRepo,
    promoter_repo: PromoterRepo,
    verification_service: VerificationServiceDep,
) -> RegistrationService:
    return RegistrationService(
        session,
        account_repo,
        member_repo,
        seller_repo,
        promoter_repo,
        verification_service,
    )


def get_application_service(
    session: DBSession,
    member_repo: MemberRepo,
    seller_repo: SellerRepo,
    promoter_repo: PromoterRepo,
    steward_repo: StewardRepo,
    verification_service: VerificationServiceDep,
    approval_service: ApprovalServiceDep,
) -> ApplicationService:
    return ApplicationService(
        session,
        member_repo,
        seller_repo,
        promoter_repo,
        steward_repo,
        verification_service,
        approval_service,
    )


def get_admin_service(
    session: DBSession,
    member_repo: MemberRepo,
    seller_repo: SellerRepo,
    promoter_repo: PromoterRepo,
    steward_repo: StewardRepo,
    approval_service: ApprovalServiceDep,
    audit_service: AuditServiceDep,
) -> AdminService:
    return AdminService(
        session,
        member_repo,
        seller_repo,
        promoter_repo,
        steward_repo,
        approval_service,
        audit_service,
    )


def get_account_service(
    session: DBSession,
    account_repo: AccountRepo,
    seller_repo: SellerRepo,
    promoter_repo: PromoterRepo,
    steward_repo: StewardRepo,
    verification_service: VerificationServiceDep,
) -> AccountService:
    return AccountService(
        session,
        account_repo,
        seller_repo,
        promoter_repo,
        steward_repo,
        verification_service,
    )


def get_invitation_service(
    session: DBSession,
    account_repo: AccountRepo,
    seller_repo: SellerRepo,
    promoter_repo: PromoterRepo,
) -> InvitationService:
    return InvitationService(session, account_repo, seller_repo, promoter_repo)


def get_catalog_service(
    session: DBSession,
    seller_repo: SellerRepo,
    product_repo: ProductRepo,
    listing_repo: StewardListingRepo,
    verification_service: VerificationServiceDep,
    audit_service: AuditServiceDep,
) -> CatalogService:
    return CatalogService(
        session,
        seller_repo,
        product_repo,
        listing_repo,
        verification_service,
        audit_service,
    )


RegistrationServiceDep = Annotated[RegistrationService, Depends(get_registration_service)]
ApplicationServiceDep = Annotated[ApplicationService, Depends(get_application_service)]
AdminServiceDep = Annotated[AdminService, Depends(get_admin_service)]
AccountServiceDep = Annotated[AccountService, Depends(get_account_service)]
InvitationServiceDep = Annotated[InvitationService, Depends(get_invitation_service)]
CatalogServiceDep = Annotated[CatalogService, Depends(get_catalog_service)]
