"""Seller, promoter and steward applications with auto-approval."""

import contextlib

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.app.core.exceptions import ApplicationExistsError
from src.app.core.logging import get_logger
from src.app.core.notifications import send_application_received_email
from src.app.models import Account, Member, Promoter, Seller, Steward
from src.app.repositories import (
    MemberRepository,
    PromoterRepository,
    SellerRepository,
    StewardRepository,
)
from src.app.schemas import PromoterApplication, SellerApplication, StewardApplication
from src.app.services.approval_service import ApprovalService, Profile
from src.app.services.verification_service import VerificationService

logger = get_logger(__name__)


class ApplicationService:
    """Creates PENDING profiles and auto-approves applicants who are verified members.

    Auto-approval is an optimization: any failure leaves the profile PENDING
    for manual review and the application itself still succeeds.
    """

    def __init__(
        self,
        session: AsyncSession,
        member_repo: MemberRepository,
        seller_repo: SellerRepository,
        promoter_repo: PromoterRepository,
        steward_repo: StewardRepository,
        verification_service: VerificationService,
        approval_service: ApprovalService,
    ):
        self.session = session
        self.member_repo = member_repo
        self.seller_repo = seller_repo
        self.promoter_repo = promoter_repo
        self.steward_repo = steward_repo
        self.verification_service = verification_service
        self.approval_service = approval_service

    async def apply_seller(self, data: SellerApplication, account: Account | None) -> Seller:
        """Apply to become a seller. Sellers need not be members or logged in."""
        if await self.seller_repo.get_by_active_email(data.email) is not None:
            raise ApplicationExistsError("A seller application already exists for this email")

        member = await self._find_member(account, data.email)
        seller = Seller(
            **data.model_dump(),
            member_id=member.id if member else None,
        )
        await self._create(seller)

        send_application_received_email(seller.email, seller.name, seller.kind.value)

        if member is not None and member.is_verified:
            await self._auto_approve(seller, account)
        return seller

    async def apply_promoter(
        self, data: PromoterApplication, account: Account | None
    ) -> Promoter:
        if await self.promoter_repo.get_by_active_email(data.email) is not None:
            raise ApplicationExistsError("A promoter application already exists for this email")
        if (
            await self.promoter_repo.get_active_by_membership_number(data.membership_number)
            is not None
        ):
            raise ApplicationExistsError(
                "A promoter application already exists for this membership number"
            )

        member = await self._find_member(account, data.email)
        promoter = Promoter(
            **data.model_dump(),
            member_id=member.id if member else None,
        )
        await self._create(promoter)

        send_application_received_email(promoter.email, promoter.name, promoter.kind.value)

        if member is not None and member.is_verified:
            await self._auto_approve(promoter, account)
        return promoter

    async def apply_steward(self, data: StewardApplication, account: Account) -> Steward:
        """Apply to become a steward.

        Stewardship is member-only: the caller's Member must be VERIFIED, and the
        account must be free to take the steward persona, before any row is created.
        """
        member = await self.verification_service.require_verified_member(account)

        if await self.steward_repo.get_active_by_member(member.id) is not None:
            raise ApplicationExistsError("A steward application already exists for this member")

        steward = Steward(member_id=member.id, sponsoring_chapter_id=data.sponsoring_chapter_id)
        # An application the approval routine would refuse is never stored
        ApprovalService.check_persona(account, steward)
        await self._create(steward)

        await self._auto_approve(steward, account)
        return steward

    async def _find_member(self, account: Account | None, email: str) -> Member | None:
        """Resolve the applicant's Member via their account, else by email."""
        if account is not None:
            resolution = await self.verification_service.resolve(account)
            if resolution.member is not None:
                return resolution.member
        return await self.member_repo.get_registered_by_email(email)

    async def _create(self, profile: Profile) -> None:
        self.session.add(profile)
        try:
            await self.session.commit()
        except IntegrityError as e:
            # Lost a race with a concurrent application
            await self.session.rollback()
            raise ApplicationExistsError() from e

        logger.info(
            "Application received",
            profile_kind=profile.kind.value,
            profile_id=str(profile.id),
            member_id=str(profile.member_id) if profile.member_id else None,
        )

    async def _auto_approve(self, profile: Profile, account: Account | None) -> None:
        try:
            await self.approval_service.approve(
                profile,
                account=account,
                require_payment_account=True,
            )
            logger.info(
                "Application auto-approved",
                profile_kind=profile.kind.value,
                profile_id=str(profile.id),
            )
        except Exception as e:
            logger.warning(
                "Auto-approval failed, left pending for manual review",
                profile_kind=profile.kind.value,
                profile_id=str(profile.id),
                error=str(e),
            )
            with contextlib.suppress(Exception):
                await self.session.rollback()
                await self.session.refresh(profile)
                if account is not None:
                    await self.session.refresh(account)
