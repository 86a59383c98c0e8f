"""Repository for Account entity."""

from uuid import UUID

from sqlmodel import select

from src.app.models import Account, ProfileKind
from src.app.repositories.base import BaseRepository


class AccountRepository(BaseRepository[Account]):
    model = Account

    async def get_by_subject(self, external_subject: str) -> Account | None:
        """Get the account bound to an external identity subject."""
        result = await self.session.execute(
            select(Account).where(Account.external_subject == external_subject)
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Account | None:
        result = await self.session.execute(
            select(Account).where(Account.email == email.strip().lower())
        )
        return result.scalar_one_or_none()

    async def get_by_profile(self, kind: ProfileKind, profile_id: UUID) -> Account | None:
        """Get the account that owns a given profile, if any."""
        result = await self.session.execute(
            select(Account).where(
                Account.profile_kind == kind.value,
                Account.profile_id == profile_id,
            )
        )
        return result.scalar_one_or_none()
