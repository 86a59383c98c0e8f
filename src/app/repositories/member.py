"""Repository for Member entity."""

from sqlalchemy import or_
from sqlmodel import select

from src.app.models import Member, RegistrationStatus, VerificationStatus
from src.app.repositories.base import BaseRepository, Page


class MemberRepository(BaseRepository[Member]):
    model = Member

    async def get_by_subject(self, external_subject: str) -> Member | None:
        result = await self.session.execute(
            select(Member).where(Member.external_subject == external_subject)
        )
        return result.scalar_one_or_none()

    async def get_draft(self, external_subject: str, email: str | None = None) -> Member | None:
        """Find the caller's in-progress draft.

        Matched by identity subject first, then by email among drafts that are
        not yet bound to a different subject.
        """
        result = await self.session.execute(
            select(Member).where(
                Member.external_subject == external_subject,
                Member.registration_status == RegistrationStatus.DRAFT.value,
            )
        )
        draft = result.scalar_one_or_none()
        if draft is not None or email is None:
            return draft

        result = await self.session.execute(
            select(Member)
            .where(
                Member.email == email,
                Member.registration_status == RegistrationStatus.DRAFT.value,
                Member.external_subject.is_(None),  # type: ignore[union-attr]
            )
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def get_registered_by_email(self, email: str) -> Member | None:
        result = await self.session.execute(
            select(Member).where(
                Member.email == email,
                Member.registration_status != RegistrationStatus.DRAFT.value,
            )
        )
        return result.scalar_one_or_none()

    async def registered_conflict_exists(self, email: str, membership_number: str) -> bool:
        """Whether a registered member already uses this email or membership number.

        Drafts never conflict, so the caller's own in-progress row is excluded.
        """
        query = select(Member.id).where(
            or_(Member.email == email, Member.membership_number == membership_number),
            Member.registration_status != RegistrationStatus.DRAFT.value,
        )
        result = await self.session.execute(query.limit(1))
        return result.first() is not None

    async def list_pending_verification(
        self, cursor: str | None, limit: int
    ) -> Page[Member]:
        """Registered members still awaiting a verification outcome."""
        query = select(Member).where(
            Member.registration_status == RegistrationStatus.COMPLETE.value,
            Member.verification_status.in_(  # type: ignore[attr-defined]
                [VerificationStatus.PENDING.value, VerificationStatus.MANUAL_REVIEW.value]
            ),
        )
        # Oldest first: the queue is worked in arrival order
        return await self.paginate(query, cursor, limit, newest_first=False)
