"""Invitation claim - an approved applicant without an account claims their profile."""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.app.core.exceptions import (
    AccountExistsError,
    AuthorizationError,
    InvalidInvitationError,
)
from src.app.core.logging import get_logger
from src.app.core.security import hash_token
from src.app.models import Account, OnboardingStatus, Promoter, Seller, utc_now
from src.app.repositories import AccountRepository, PromoterRepository, SellerRepository
from src.app.schemas import InvitationInfo

logger = get_logger(__name__)


class InvitationService:
    """Resolves invitation tokens issued at approval time.

    Only the SHA-256 hash of a token is stored; a token is usable once and
    only until it expires.
    """

    def __init__(
        self,
        session: AsyncSession,
        account_repo: AccountRepository,
        seller_repo: SellerRepository,
        promoter_repo: PromoterRepository,
    ):
        self.session = session
        self.account_repo = account_repo
        self.seller_repo = seller_repo
        self.promoter_repo = promoter_repo

    async def validate(self, token: str) -> InvitationInfo:
        profile = await self._get_profile(token)
        return InvitationInfo(
            profile_kind=profile.kind.value,
            email=profile.email,
            name=profile.name,
        )

    async def claim(self, external_subject: str, identity_email: str, token: str) -> Account:
        """Create the caller's account bound to the invited profile.

        Raises:
            InvalidInvitationError: Unknown, used or expired token.
            AuthorizationError: The identity's email differs from the invitation's.
            AccountExistsError: An account already exists for the identity or email.
        """
        profile = await self._get_profile(token)

        if identity_email.strip().lower() != profile.email:
            raise AuthorizationError(
                "This invitation was issued to a different email address",
                code="INVITATION_EMAIL_MISMATCH",
            )

        if (
            await self.account_repo.get_by_subject(external_subject) is not None
            or await self.account_repo.get_by_email(profile.email) is not None
        ):
            raise AccountExistsError()

        account = Account(
            external_subject=external_subject,
            email=profile.email,
            onboarding_status=OnboardingStatus.ONBOARDING_FINISHED.value,
            last_login=utc_now(),
        )
        account.bind_profile(profile.kind, profile.id)
        self.account_repo.add(account)

        profile.invitation_token_hash = None
        profile.invitation_expires_at = None
        profile.updated_at = utc_now()

        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise AccountExistsError() from e

        logger.info(
            "Invitation claimed",
            account_id=str(account.id),
            profile_kind=profile.kind.value,
            profile_id=str(profile.id),
        )
        return account

    async def _get_profile(self, token: str) -> Seller | Promoter:
        token_hash = hash_token(token)
        profile: Seller | Promoter | None = await self.seller_repo.get_by_valid_invitation(
            token_hash
        )
        if profile is None:
            profile = await self.promoter_repo.get_by_valid_invitation(token_hash)
        if profile is None:
            raise InvalidInvitationError()
        return profile
