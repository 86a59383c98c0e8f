"""Approval routine shared by auto-approval and admin decisions.

Approving a profile happens in three phases so that no transaction is open
while the payment provider is called:

1. Plan (reads only): find the applicant's account, check it can take the
   profile's persona, and mint an invitation token when there is no account
   and no unexpired invitation is outstanding.
2. Provision: create the connected payment account, unless one is recorded.
3. Persist: link the account, store the token hash, and write APPROVED
   together with the payment account id in a single commit.
"""

import contextlib
from dataclasses import dataclass
from datetime import timedelta

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.app.core.config import get_settings
from src.app.core.exceptions import (
    ApplicationExistsError,
    NotFoundError,
    PaymentProviderError,
    PersonaConflictError,
)
from src.app.core.logging import get_logger
from src.app.core.notifications import send_application_approved_email
from src.app.core.payments import create_connect_account
from src.app.core.security import generate_invitation_token, hash_token
from src.app.models import (
    Account,
    ApplicationStatus,
    OnboardingStatus,
    Persona,
    ProfileKind,
    Promoter,
    Seller,
    Steward,
    utc_now,
)
from src.app.repositories import AccountRepository, MemberRepository

logger = get_logger(__name__)

Profile = Seller | Promoter | Steward

PAYMENT_WARNING_NOT_CONFIGURED = (
    "Approved, but payments are not configured. "
    "The payment account will need to be set up manually."
)
PAYMENT_WARNING_FAILED = (
    "Approved, but payment setup encountered an issue. "
    "The payment account will need to be set up manually."
)


@dataclass
class ApprovalPlan:
    """Everything decided before the payment provider is called."""

    contact_email: str
    contact_name: str
    account: Account | None = None
    invitation_token: str | None = None
    # An unexpired invitation from an earlier approval stays valid and is not re-sent
    invitation_outstanding: bool = False


@dataclass
class ApprovalResult:
    profile: Profile
    invitation_token: str | None = None
    warning: str | None = None


class ApprovalService:
    """Approves and rejects seller, promoter and steward profiles."""

    def __init__(
        self,
        session: AsyncSession,
        account_repo: AccountRepository,
        member_repo: MemberRepository,
    ):
        self.session = session
        self.account_repo = account_repo
        self.member_repo = member_repo

    async def approve(
        self,
        profile: Profile,
        *,
        account: Account | None = None,
        require_payment_account: bool = True,
    ) -> ApprovalResult:
        """Approve ``profile``, provisioning its payment account.

        Args:
            profile: A persisted profile.
            account: The applicant's account when already known (authenticated
                applicant); otherwise it is looked up.
            require_payment_account: When True a provisioning failure aborts the
                approval and leaves the profile untouched. When False the profile
                is approved anyway and the result carries a warning.

        Raises:
            PersonaConflictError: The applicant's account holds another persona.
            PaymentProviderError: Provisioning failed and was required.
        """
        if profile.is_approved and profile.payment_account_id:
            logger.info(
                "Profile already approved",
                profile_kind=profile.kind.value,
                profile_id=str(profile.id),
            )
            return ApprovalResult(profile=profile)

        plan = await self._plan(profile, account)
        # Nothing is held open while the payment provider is called
        await self.session.commit()

        payment_account_id = profile.payment_account_id
        warning = None
        if payment_account_id is None:
            try:
                payment_account_id = await create_connect_account(plan.contact_email)
            except PaymentProviderError as e:
                if require_payment_account:
                    raise
                warning = (
                    PAYMENT_WARNING_NOT_CONFIGURED
                    if not get_settings().payments_configured
                    else PAYMENT_WARNING_FAILED
                )
                logger.warning(
                    "Approving without payment account",
                    profile_kind=profile.kind.value,
                    profile_id=str(profile.id),
                    error=e.message,
                )

        self._apply(profile, plan, payment_account_id)
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self._discard(profile)
            raise ApplicationExistsError(
                "Another active application already uses these details"
            ) from e
        except Exception:
            await self._discard(profile)
            raise

        logger.info(
            "Profile approved",
            profile_kind=profile.kind.value,
            profile_id=str(profile.id),
            linked_account_id=str(plan.account.id) if plan.account else None,
            invitation_issued=plan.invitation_token is not None,
            payment_account_provisioned=payment_account_id is not None,
        )

        if not plan.invitation_outstanding:
            send_application_approved_email(
                plan.contact_email,
                plan.contact_name,
                profile.kind.value,
                plan.invitation_token,
            )

        return ApprovalResult(
            profile=profile,
            invitation_token=plan.invitation_token,
            warning=warning,
        )

    async def reject(self, profile: Profile) -> Profile:
        """Reject ``profile``.

        An account bound to the profile falls back to its Member (when the
        profile carries one) or to an unregistered guest.
        """
        account = await self.account_repo.get_by_profile(profile.kind, profile.id)
        if account is not None:
            account.clear_profile()
            if profile.member_id is not None:
                account.bind_profile(ProfileKind.MEMBER, profile.member_id)

        profile.status = ApplicationStatus.REJECTED.value
        if isinstance(profile, Seller | Promoter):
            profile.invitation_token_hash = None
            profile.invitation_expires_at = None
        profile.updated_at = utc_now()

        try:
            await self.session.commit()
        except Exception:
            await self._discard(profile)
            raise

        logger.info(
            "Profile rejected",
            profile_kind=profile.kind.value,
            profile_id=str(profile.id),
            unlinked_account_id=str(account.id) if account else None,
        )
        return profile

    async def _plan(self, profile: Profile, account: Account | None) -> ApprovalPlan:
        if isinstance(profile, Steward):
            member = await self.member_repo.get_by_id(profile.member_id)
            if member is None:
                raise NotFoundError("Steward's member profile not found")
            plan = ApprovalPlan(contact_email=member.email, contact_name=member.name or "")
            if account is None:
                account = await self.account_repo.get_by_profile(ProfileKind.MEMBER, member.id)
        else:
            plan = ApprovalPlan(contact_email=profile.email, contact_name=profile.name)

        if account is None:
            account = await self.account_repo.get_by_email(plan.contact_email)

        if account is not None:
            self.check_persona(account, profile)
            plan.account = account
        elif isinstance(profile, Seller | Promoter):
            if self._has_outstanding_invitation(profile):
                plan.invitation_outstanding = True
            else:
                plan.invitation_token = generate_invitation_token()
        else:
            logger.warning(
                "No account found for steward approval",
                steward_id=str(profile.id),
                member_id=str(profile.member_id),
            )

        return plan

    @staticmethod
    def _has_outstanding_invitation(profile: Seller | Promoter) -> bool:
        return (
            profile.invitation_token_hash is not None
            and profile.invitation_expires_at is not None
            and profile.invitation_expires_at > utc_now()
        )

    @staticmethod
    def check_persona(account: Account, profile: Profile) -> None:
        """Raise PersonaConflictError unless ``account`` may own ``profile``."""
        if account.is_admin or account.persona == Persona.GUEST.value:
            return
        if account.profile_kind == profile.kind.value:
            return
        raise PersonaConflictError(
            f"Account already holds the {account.persona} persona",
        )

    def _apply(
        self,
        profile: Profile,
        plan: ApprovalPlan,
        payment_account_id: str | None,
    ) -> None:
        settings = get_settings()
        now = utc_now()
        account = plan.account

        if account is not None and not account.is_admin:
            member_ref = account.member_ref
            if member_ref is not None and isinstance(profile, Seller | Promoter):
                # The Member stays reachable through the profile's back-reference
                profile.member_id = profile.member_id or member_ref
            account.bind_profile(profile.kind, profile.id)
            account.onboarding_status = OnboardingStatus.ONBOARDING_FINISHED.value

        if plan.invitation_token is not None and isinstance(profile, Seller | Promoter):
            profile.invitation_token_hash = hash_token(plan.invitation_token)
            profile.invitation_expires_at = now + timedelta(days=settings.invitation_expire_days)

        profile.status = ApplicationStatus.APPROVED.value
        profile.payment_account_id = payment_account_id
        profile.updated_at = now

    async def _discard(self, profile: Profile) -> None:
        """Roll back a failed write and reload ``profile`` from the database."""
        await self.session.rollback()
        with contextlib.suppress(Exception):
            await self.session.refresh(profile)

