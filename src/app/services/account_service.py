"""Account service - login upsert and the caller's capability flags."""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.app.core.exceptions import AccountExistsError, AuthorizationError
from src.app.core.logging import get_logger
from src.app.models import Account, OnboardingStatus, Persona, utc_now
from src.app.repositories import (
    AccountRepository,
    PromoterRepository,
    SellerRepository,
    StewardRepository,
)
from src.app.schemas import AccountMeResponse, AccountUpsertRequest
from src.app.services.verification_service import VerificationService

logger = get_logger(__name__)


class AccountService:
    def __init__(
        self,
        session: AsyncSession,
        account_repo: AccountRepository,
        seller_repo: SellerRepository,
        promoter_repo: PromoterRepository,
        steward_repo: StewardRepository,
        verification_service: VerificationService,
    ):
        self.session = session
        self.account_repo = account_repo
        self.seller_repo = seller_repo
        self.promoter_repo = promoter_repo
        self.steward_repo = steward_repo
        self.verification_service = verification_service

    async def upsert_on_login(
        self, identity_subject: str, data: AccountUpsertRequest
    ) -> tuple[Account, bool]:
        """Create the minimal account on first confirmed login, else touch it.

        Returns (account, created).
        """
        if data.external_subject != identity_subject:
            raise AuthorizationError("Subject does not match the authenticated identity")

        now = utc_now()
        account = await self.account_repo.get_by_subject(identity_subject)
        created = account is None
        if account is None:
            account = Account(
                external_subject=identity_subject,
                email=data.email,
                persona=Persona.GUEST.value,
                onboarding_status=OnboardingStatus.COGNITO_CONFIRMED.value,
                last_login=now,
            )
            self.account_repo.add(account)
        else:
            account.email = data.email
            account.last_login = now
            account.updated_at = now

        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise AccountExistsError() from e

        logger.info("Account login recorded", account_id=str(account.id), created=created)
        return account, created

    async def describe(self, account: Account) -> AccountMeResponse:
        """Build the caller's view: account fields plus derived capabilities."""
        resolution = await self.verification_service.resolve(account)
        member = resolution.member

        is_seller = False
        is_promoter = False
        is_steward = False
        name = member.name if member else None

        if account.seller_ref is not None:
            seller = await self.seller_repo.get_by_id(account.seller_ref)
            is_seller = seller is not None and seller.is_approved
            name = name or (seller.name if seller else None)
        elif account.promoter_ref is not None:
            promoter = await self.promoter_repo.get_by_id(account.promoter_ref)
            is_promoter = promoter is not None and promoter.is_approved
            name = name or (promoter.name if promoter else None)
        elif account.steward_ref is not None:
            steward = await self.steward_repo.get_by_id(account.steward_ref)
            is_steward = steward is not None and steward.is_approved

        if not is_steward and member is not None:
            is_steward = await self.steward_repo.get_approved_by_member(member.id) is not None

        response = AccountMeResponse.model_validate(account)
        return response.model_copy(
            update={
                "member_id": member.id if member else None,
                "name": name,
                "is_fraternity_member": resolution.is_verified,
                "is_seller": is_seller,
                "is_promoter": is_promoter,
                "is_steward": is_steward,
            }
        )
