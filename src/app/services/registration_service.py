"""Member registration - draft saves, complete registration and profile edits."""

from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.app.core.exceptions import (
    ConflictError,
    DuplicateRegistrationError,
    MemberNotFoundError,
    NotFoundError,
    PersonaConflictError,
    UserLinkingFailedError,
)
from src.app.core.logging import get_logger
from src.app.models import (
    Account,
    Member,
    OnboardingStatus,
    Persona,
    ProfileKind,
    RegistrationStatus,
    Seller,
    utc_now,
)
from src.app.repositories import (
    AccountRepository,
    MemberRepository,
    PromoterRepository,
    SellerRepository,
)
from src.app.schemas import MemberDraft, MemberProfileUpdate, MemberRegistration
from src.app.services.verification_service import VerificationService

logger = get_logger(__name__)

_ONBOARDING_ORDER = [status.value for status in OnboardingStatus]

# Columns that cannot hold NULL; an explicit null in a patch leaves them as they are
_NOT_NULL_FIELDS = {"address_is_private", "phone_is_private", "social_links"}


def _patch_fields(data: MemberDraft | MemberProfileUpdate) -> dict[str, Any]:
    return {
        name: value
        for name, value in data.model_dump(exclude_unset=True).items()
        if value is not None or name not in _NOT_NULL_FIELDS
    }


def _apply_fields(member: Member, fields: dict[str, Any]) -> None:
    for name, value in fields.items():
        setattr(member, name, value)
    member.updated_at = utc_now()


class RegistrationService:
    """Turns draft submissions into COMPLETE Member profiles bound to an account.

    The Member write and the account link share one transaction: if linking
    fails, rolling back removes the just-written Member, so a Member without a
    reachable account never blocks its email or membership number.
    """

    def __init__(
        self,
        session: AsyncSession,
        account_repo: AccountRepository,
        member_repo: MemberRepository,
        seller_repo: SellerRepository,
        promoter_repo: PromoterRepository,
        verification_service: VerificationService,
    ):
        self.session = session
        self.account_repo = account_repo
        self.member_repo = member_repo
        self.seller_repo = seller_repo
        self.promoter_repo = promoter_repo
        self.verification_service = verification_service

    async def save_draft(self, external_subject: str, data: MemberDraft) -> Member:
        """Create or patch the caller's DRAFT.

        Only the fields present in the request are written; repeated saves
        always patch the same row.
        """
        registered = await self.member_repo.get_by_subject(external_subject)
        if registered is not None and not registered.is_draft:
            raise ConflictError("Registration is already complete")

        fields = _patch_fields(data)
        draft = registered or await self.member_repo.get_draft(external_subject, data.email)

        if draft is None:
            draft = Member(
                external_subject=external_subject,
                registration_status=RegistrationStatus.DRAFT.value,
                **fields,
            )
            self.member_repo.add(draft)
            created = True
        else:
            draft.external_subject = external_subject
            _apply_fields(draft, fields)
            created = False

        account = await self.account_repo.get_by_subject(external_subject)
        if account is not None:
            self._advance_onboarding(account, OnboardingStatus.ONBOARDING_STARTED)

        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise ConflictError("This information is already in use") from e

        logger.info(
            "Member draft saved",
            member_id=str(draft.id),
            created=created,
            fields=sorted(fields),
        )
        return draft

    async def get_draft(self, external_subject: str) -> Member:
        draft = await self.member_repo.get_draft(external_subject)
        if draft is None:
            raise NotFoundError("Draft not found")
        return draft

    async def register(
        self,
        external_subject: str,
        identity_email: str,
        data: MemberRegistration,
    ) -> Member:
        """Complete a member registration.

        1. Reject duplicates across members, promoters and sellers (no writes).
        2. Promote the caller's draft to COMPLETE, or insert a new row.
        3. Link the caller's account to the Member and commit both together.

        Raises:
            DuplicateRegistrationError: Email or membership number already registered.
            PersonaConflictError: The caller's account cannot own a Member.
            UserLinkingFailedError: Linking failed; nothing was persisted.
        """
        account = await self.account_repo.get_by_subject(external_subject)
        if account is not None and account.persona not in (
            Persona.GUEST.value,
            Persona.SELLER.value,
        ):
            raise PersonaConflictError(
                f"Accounts with the {account.persona} persona cannot register as a member"
            )

        seller = await self._check_duplicates(data.email, data.membership_number)

        fields = data.model_dump()
        member = await self.member_repo.get_draft(external_subject, data.email)
        if member is None:
            member = Member(external_subject=external_subject, **fields)
            self.member_repo.add(member)
        else:
            member.external_subject = external_subject
            _apply_fields(member, fields)
        member.registration_status = RegistrationStatus.COMPLETE.value

        try:
            await self.session.flush()
        except IntegrityError as e:
            # A concurrent registration won the race for this email/number
            await self.session.rollback()
            raise DuplicateRegistrationError() from e

        try:
            if seller is not None:
                seller.member_id = member.id
                seller.updated_at = utc_now()
            await self._link_account(account, external_subject, identity_email, member, seller)
            await self.session.commit()
        except Exception as e:
            await self._compensate(member, external_subject, e)
            raise UserLinkingFailedError() from e

        logger.info(
            "Member registered",
            member_id=str(member.id),
            linked_seller_id=str(seller.id) if seller else None,
        )
        return member

    async def get_profile(self, account: Account) -> Member:
        """Return the caller's Member; a dangling reference is healed first."""
        resolution = await self.verification_service.resolve(account)
        if resolution.member is None:
            raise MemberNotFoundError()
        return resolution.member

    async def update_profile(self, account: Account, data: MemberProfileUpdate) -> Member:
        member = await self.get_profile(account)
        _apply_fields(member, _patch_fields(data))
        await self.session.commit()
        logger.info("Member profile updated", member_id=str(member.id))
        return member

    async def _check_duplicates(self, email: str, membership_number: str) -> Seller | None:
        """Enforce cross-table uniqueness for a registration.

        Returns a seller with the same email that has no Member yet; the new
        Member will be attached to it.
        """
        if await self.promoter_repo.registration_conflict_exists(email, membership_number):
            raise DuplicateRegistrationError()
        if await self.member_repo.registered_conflict_exists(email, membership_number):
            raise DuplicateRegistrationError()

        seller = await self.seller_repo.get_by_active_email(email)
        if seller is not None and seller.member_id is not None:
            raise DuplicateRegistrationError()
        return seller

    async def _link_account(
        self,
        account: Account | None,
        external_subject: str,
        identity_email: str,
        member: Member,
        seller: Seller | None = None,
    ) -> None:
        if account is None:
            account = Account(
                external_subject=external_subject,
                email=identity_email,
                onboarding_status=OnboardingStatus.ONBOARDING_FINISHED.value,
            )
            if seller is not None and (
                await self.account_repo.get_by_profile(ProfileKind.SELLER, seller.id) is None
            ):
                # The new account claims the seller profile, so its invitation is spent
                account.bind_profile(ProfileKind.SELLER, seller.id)
                seller.invitation_token_hash = None
                seller.invitation_expires_at = None
            else:
                account.bind_profile(ProfileKind.MEMBER, member.id)
            self.account_repo.add(account)
        elif account.persona == Persona.SELLER.value:
            # A seller account keeps its persona; the Member hangs off the seller
            seller = await self.seller_repo.get_by_id(account.seller_ref)  # type: ignore[arg-type]
            if seller is None:
                raise NotFoundError("Seller profile not found")
            seller.member_id = member.id
            seller.updated_at = utc_now()
        else:
            account.bind_profile(ProfileKind.MEMBER, member.id)
            self._advance_onboarding(account, OnboardingStatus.ONBOARDING_FINISHED)

        await self.session.flush()

    async def _compensate(self, member: Member, external_subject: str, error: Exception) -> None:
        member_id = str(member.id)
        logger.error(
            "Account linking failed, discarding registration",
            member_id=member_id,
            external_subject=external_subject,
            error=str(error),
        )
        try:
            await self.session.rollback()
        except Exception as rollback_error:
            logger.critical(
                "Registration compensation failed - manual remediation required",
                member_id=member_id,
                external_subject=external_subject,
                error=str(rollback_error),
            )

    @staticmethod
    def _advance_onboarding(account: Account, status: OnboardingStatus) -> None:
        if _ONBOARDING_ORDER.index(account.onboarding_status) < _ONBOARDING_ORDER.index(
            status.value
        ):
            account.onboarding_status = status.value
            account.updated_at = utc_now()
