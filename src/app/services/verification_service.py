"""Verification resolver - finds the Member behind an account.

An account owns at most one profile. Only a GUEST account owns its Member
directly; seller, promoter and steward profiles carry their own back-reference
to a Member, so "is the person behind this account a verified member" has to
follow whichever profile the account owns.
"""

import contextlib
from dataclasses import dataclass
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.app.core.exceptions import (
    MemberNotFoundError,
    MemberProfileRequiredError,
    VerificationRequiredError,
)
from src.app.core.logging import get_logger
from src.app.models import (
    Account,
    Member,
    OnboardingStatus,
    ProfileKind,
    Promoter,
    Seller,
    Steward,
    utc_now,
)
from src.app.repositories import (
    MemberRepository,
    PromoterRepository,
    SellerRepository,
    StewardRepository,
)

logger = get_logger(__name__)


@dataclass
class MemberResolution:
    """Outcome of resolving an account's Member identity.

    ``member_id`` is the reference that was followed, ``member`` the row it
    points at. ``healed`` is set when the account's own profile reference was
    dangling and has been cleared.
    """

    member_id: UUID | None = None
    member: Member | None = None
    healed: bool = False

    @property
    def dangling(self) -> bool:
        return self.healed or (self.member_id is not None and self.member is None)

    @property
    def is_verified(self) -> bool:
        return self.member is not None and self.member.is_verified


class VerificationService:
    """Resolves accounts to Members and heals orphaned profile references."""

    def __init__(
        self,
        session: AsyncSession,
        member_repo: MemberRepository,
        seller_repo: SellerRepository,
        promoter_repo: PromoterRepository,
        steward_repo: StewardRepository,
    ):
        self.session = session
        self.member_repo = member_repo
        self.seller_repo = seller_repo
        self.promoter_repo = promoter_repo
        self.steward_repo = steward_repo

    async def resolve(self, account: Account) -> MemberResolution:
        """Resolve the Member identity behind ``account``.

        Never raises for a missing reference. A dangling reference owned by
        the account itself is healed; a dangling back-reference on a persona
        profile is reported without touching anything.
        """
        if account.profile_kind is None or account.profile_id is None:
            return MemberResolution()

        if account.profile_kind == ProfileKind.MEMBER.value:
            member = await self.member_repo.get_by_id(account.profile_id)
            if member is None:
                await self.heal_orphan(account)
                return MemberResolution(member_id=account.profile_id, healed=True)
            return MemberResolution(member_id=member.id, member=member)

        profile = await self._get_profile(ProfileKind(account.profile_kind), account.profile_id)
        if profile is None:
            await self.heal_orphan(account)
            return MemberResolution(healed=True)

        if profile.member_id is None:
            return MemberResolution()

        member = await self.member_repo.get_by_id(profile.member_id)
        if member is None:
            logger.warning(
                "Profile references a missing member",
                profile_kind=account.profile_kind,
                profile_id=str(profile.id),
                member_id=str(profile.member_id),
            )
        return MemberResolution(member_id=profile.member_id, member=member)

    async def require_verified_member(self, account: Account) -> Member:
        """Return the account's Member, which must exist and be VERIFIED.

        Raises:
            MemberProfileRequiredError: No Member is associated with the account.
            MemberNotFoundError: The reference points at a missing row.
            VerificationRequiredError: The Member is not VERIFIED.
        """
        resolution = await self.resolve(account)
        if resolution.dangling:
            raise MemberNotFoundError()
        if resolution.member is None:
            raise MemberProfileRequiredError()
        if not resolution.member.is_verified:
            raise VerificationRequiredError()
        return resolution.member

    async def heal_orphan(self, account: Account) -> None:
        """Clear a dangling profile reference so the account can register again.

        Failures are logged and swallowed; the caller still reports not-found.
        """
        logger.warning(
            "Clearing orphaned profile reference",
            account_id=str(account.id),
            profile_kind=account.profile_kind,
            profile_id=str(account.profile_id),
        )
        try:
            account.clear_profile()
            account.onboarding_status = OnboardingStatus.ONBOARDING_STARTED.value
            account.updated_at = utc_now()
            await self.session.commit()
        except Exception as e:
            logger.error(
                "Failed to heal orphaned profile reference",
                account_id=str(account.id),
                error=str(e),
            )
            with contextlib.suppress(Exception):
                await self.session.rollback()
                await self.session.refresh(account)

    async def _get_profile(
        self, kind: ProfileKind, profile_id: UUID
    ) -> Seller | Promoter | Steward | None:
        if kind == ProfileKind.SELLER:
            return await self.seller_repo.get_by_id(profile_id)
        if kind == ProfileKind.PROMOTER:
            return await self.promoter_repo.get_by_id(profile_id)
        return await self.steward_repo.get_by_id(profile_id)
