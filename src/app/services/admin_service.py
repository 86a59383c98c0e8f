"""Admin service - review queues, approval decisions and verification outcomes."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.app.core.exceptions import MemberNotFoundError, ProfileNotFoundError
from src.app.core.logging import get_logger
from src.app.models import (
    Account,
    ApplicationStatus,
    AuditAction,
    Member,
    ProfileKind,
    Seller,
    utc_now,
)
from src.app.repositories import (
    MemberRepository,
    PromoterRepository,
    SellerRepository,
    StewardRepository,
)
from src.app.schemas import MemberVerificationUpdate, SellerVerificationUpdate
from src.app.services.approval_service import ApprovalResult, ApprovalService, Profile
from src.app.services.audit_service import AuditService

logger = get_logger(__name__)


class AdminService:
    """Manual review operations. Approval reuses the auto-approval routine."""

    def __init__(
        self,
        session: AsyncSession,
        member_repo: MemberRepository,
        seller_repo: SellerRepository,
        promoter_repo: PromoterRepository,
        steward_repo: StewardRepository,
        approval_service: ApprovalService,
        audit_service: AuditService,
    ):
        self.session = session
        self.member_repo = member_repo
        self.approval_service = approval_service
        self.audit_service = audit_service
        self.seller_repo = seller_repo
        self._profile_repos: dict[
            ProfileKind, SellerRepository | PromoterRepository | StewardRepository
        ] = {
            ProfileKind.SELLER: seller_repo,
            ProfileKind.PROMOTER: promoter_repo,
            ProfileKind.STEWARD: steward_repo,
        }

    async def list_pending(
        self, kind: ProfileKind, cursor: str | None, limit: int
    ) -> tuple[list[Profile], str | None, bool]:
        repo = self._profile_repos[kind]
        return await repo.list_pending(cursor, limit)  # type: ignore[return-value]

    async def list_pending_members(
        self, cursor: str | None, limit: int
    ) -> tuple[list[Member], str | None, bool]:
        return await self.member_repo.list_pending_verification(cursor, limit)

    async def decide(
        self,
        admin: Account,
        kind: ProfileKind,
        profile_id: UUID,
        status: str,
    ) -> ApprovalResult:
        """Approve or reject a profile.

        Approval persists APPROVED even when payment provisioning fails; the
        result then carries a warning. Retrying provisions only if no payment
        account id is recorded yet.
        """
        profile = await self._profile_repos[kind].get_by_id(profile_id)
        if profile is None:
            raise ProfileNotFoundError(f"{kind.value.title()} not found")

        old_status = profile.status
        if status == ApplicationStatus.APPROVED.value:
            result = await self.approval_service.approve(profile, require_payment_account=False)
            action = AuditAction.APPLICATION_APPROVE
        else:
            result = ApprovalResult(profile=await self.approval_service.reject(profile))
            action = AuditAction.APPLICATION_REJECT

        await self.audit_service.record_transition(
            action,
            kind,
            profile.id,
            "status",
            old_status,
            result.profile.status,
            actor=admin,
            payment_account_id=result.profile.payment_account_id,
            warning=result.warning,
        )
        return result

    async def update_member_verification(
        self, admin: Account, member_id: UUID, data: MemberVerificationUpdate
    ) -> Member:
        """Record a verification outcome on a Member."""
        member = await self.member_repo.get_by_id(member_id)
        if member is None:
            raise MemberNotFoundError()

        old_status = member.verification_status
        now = utc_now()
        member.verification_status = data.verification_status.value
        member.verification_notes = data.verification_notes
        member.verification_date = now
        member.updated_at = now
        await self.session.commit()

        logger.info(
            "Member verification updated",
            member_id=str(member.id),
            old_status=old_status,
            new_status=member.verification_status,
        )
        await self.audit_service.record_transition(
            AuditAction.MEMBER_VERIFICATION_UPDATE,
            ProfileKind.MEMBER,
            member.id,
            "verification_status",
            old_status,
            member.verification_status,
            actor=admin,
            verification_notes=data.verification_notes,
        )
        return member

    async def update_seller_verification(
        self, admin: Account, seller_id: UUID, data: SellerVerificationUpdate
    ) -> Seller:
        """Manual seller review - the only way back to VERIFIED."""
        seller = await self.seller_repo.get_by_id(seller_id)
        if seller is None:
            raise ProfileNotFoundError("Seller not found")

        old_status = seller.verification_status
        now = utc_now()
        seller.verification_status = data.verification_status.value
        seller.verification_notes = data.verification_notes
        seller.verification_date = now
        seller.updated_at = now
        await self.session.commit()

        await self.audit_service.record_transition(
            AuditAction.SELLER_VERIFICATION_UPDATE,
            ProfileKind.SELLER,
            seller.id,
            "verification_status",
            old_status,
            seller.verification_status,
            actor=admin,
            verification_notes=data.verification_notes,
        )
        return seller
