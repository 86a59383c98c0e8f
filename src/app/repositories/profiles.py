"""Repositories for application-driven profiles (seller, promoter, steward)."""

from datetime import datetime
from uuid import UUID

from sqlmodel import select

from src.app.models import ApplicationStatus, Promoter, Seller, Steward, utc_now
from src.app.repositories.base import BaseRepository, Page


class ProfileRepository[ProfileType: (Seller, Promoter, Steward)](BaseRepository[ProfileType]):
    """Queries shared by every profile kind."""

    async def list_pending(
        self, cursor: str | None, limit: int
    ) -> Page[ProfileType]:
        query = select(self.model).where(self.model.status == ApplicationStatus.PENDING.value)
        return await self.paginate(query, cursor, limit, newest_first=False)


class InvitableRepository[ProfileType: (Seller, Promoter)](ProfileRepository[ProfileType]):
    """Profiles that can be claimed through an invitation token."""

    async def get_by_active_email(self, email: str) -> ProfileType | None:
        """Get the non-rejected profile registered under an email."""
        result = await self.session.execute(
            select(self.model).where(
                self.model.email == email,
                self.model.status != ApplicationStatus.REJECTED.value,
            )
        )
        return result.scalars().first()

    async def get_by_valid_invitation(
        self, token_hash: str, now: datetime | None = None
    ) -> ProfileType | None:
        """Get an approved profile whose invitation is unclaimed and unexpired."""
        now = now or utc_now()
        result = await self.session.execute(
            select(self.model).where(
                self.model.invitation_token_hash == token_hash,
                self.model.invitation_expires_at > now,  # type: ignore[operator]
                self.model.status == ApplicationStatus.APPROVED.value,
            )
        )
        return result.scalar_one_or_none()


class SellerRepository(InvitableRepository[Seller]):
    model = Seller

    async def get_by_email(self, email: str) -> Seller | None:
        """Any seller with this email, regardless of status."""
        result = await self.session.execute(
            select(Seller).where(Seller.email == email).order_by(Seller.created_at.desc())
        )
        return result.scalars().first()


class PromoterRepository(InvitableRepository[Promoter]):
    model = Promoter

    async def get_active_by_membership_number(self, membership_number: str) -> Promoter | None:
        result = await self.session.execute(
            select(Promoter).where(
                Promoter.membership_number == membership_number,
                Promoter.status != ApplicationStatus.REJECTED.value,
            )
        )
        return result.scalars().first()

    async def registration_conflict_exists(self, email: str, membership_number: str) -> bool:
        """Whether a promoter already claims this email or membership number."""
        if await self.get_by_active_email(email) is not None:
            return True
        return await self.get_active_by_membership_number(membership_number) is not None


class StewardRepository(ProfileRepository[Steward]):
    model = Steward

    async def get_active_by_member(self, member_id: UUID) -> Steward | None:
        result = await self.session.execute(
            select(Steward).where(
                Steward.member_id == member_id,
                Steward.status != ApplicationStatus.REJECTED.value,
            )
        )
        return result.scalars().first()

    async def get_approved_by_member(self, member_id: UUID) -> Steward | None:
        result = await self.session.execute(
            select(Steward).where(
                Steward.member_id == member_id,
                Steward.status == ApplicationStatus.APPROVED.value,
            )
        )
        return result.scalars().first()
