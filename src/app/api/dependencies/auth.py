"""Authentication and authorization dependencies.

Every guard returns what it resolved (identity, account, member, steward)
so handlers receive it explicitly.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Header

from src.app.api.dependencies.repositories import AccountRepo, StewardRepo
from src.app.api.dependencies.services import VerificationServiceDep
from src.app.core.exceptions import AuthenticationError, AuthorizationError, UserNotRegisteredError
from src.app.core.logging import bind_account_context
from src.app.core.security import decode_identity_token
from src.app.models import Account, Member, Persona, Steward


@dataclass(frozen=True)
class Identity:
    """A verified external identity: stable subject plus email."""

    subject: str
    email: str


def _parse_identity(authorization: str | None) -> Identity | None:
    if not authorization or not authorization.startswith("Bearer "):
        return None

    payload = decode_identity_token(authorization[7:])
    if payload is None:
        return None

    subject = payload.get("sub")
    email = payload.get("email")
    if not subject or not email:
        return None

    return Identity(subject=str(subject), email=str(email).strip().lower())


async def get_identity(
    authorization: Annotated[str | None, Header()] = None,
) -> Identity:
    """Validate the bearer identity token. No account is required."""
    if not authorization or not authorization.startswith("Bearer "):
        raise AuthenticationError()

    identity = _parse_identity(authorization)
    if identity is None:
        raise AuthenticationError("Invalid or expired token")
    return identity


CurrentIdentity = Annotated[Identity, Depends(get_identity)]


async def get_current_account(identity: CurrentIdentity, account_repo: AccountRepo) -> Account:
    """Resolve the account bound to the caller's identity."""
    account = await account_repo.get_by_subject(identity.subject)
    if account is None:
        raise UserNotRegisteredError()

    bind_account_context(account.id, account.persona, account.profile_kind, account.email)
    return account


CurrentAccount = Annotated[Account, Depends(get_current_account)]


async def get_optional_account(
    account_repo: AccountRepo,
    authorization: Annotated[str | None, Header()] = None,
) -> Account | None:
    """Like get_current_account, but anonymous callers get None instead of an error."""
    identity = _parse_identity(authorization)
    if identity is None:
        return None

    account = await account_repo.get_by_subject(identity.subject)
    if account is not None:
        bind_account_context(account.id, account.persona, account.profile_kind, account.email)
    return account


OptionalAccount = Annotated[Account | None, Depends(get_optional_account)]


async def require_admin(account: CurrentAccount) -> Account:
    if not account.is_admin:
        raise AuthorizationError("Admin access required", code="ADMIN_REQUIRED")
    return account


AdminAccount = Annotated[Account, Depends(require_admin)]


def require_role(*personas: Persona) -> Callable[[Account], Awaitable[Account]]:
    """Build a guard that admits only the given personas."""
    allowed = {persona.value for persona in personas}

    async def guard(account: CurrentAccount) -> Account:
        if account.persona not in allowed:
            raise AuthorizationError(
                f"Requires one of: {', '.join(sorted(allowed))}",
                code="INSUFFICIENT_ROLE",
            )
        return account

    return guard


SellerAccount = Annotated[Account, Depends(require_role(Persona.SELLER))]


async def require_steward(account: CurrentAccount, steward_repo: StewardRepo) -> Account:
    """Admit admins and stewards whose steward profile actually exists.

    A STEWARD persona without a resolvable profile is refused, not treated
    as an error.
    """
    if account.is_admin:
        return account

    if account.persona == Persona.STEWARD.value and account.steward_ref is not None:
        steward = await steward_repo.get_by_id(account.steward_ref)
        if steward is not None:
            return account

    raise AuthorizationError("Steward access required", code="STEWARD_REQUIRED")


StewardAccount = Annotated[Account, Depends(require_steward)]


async def get_current_steward(account: StewardAccount, steward_repo: StewardRepo) -> Steward:
    """The caller's own steward profile (admins without one are refused)."""
    steward = None
    if account.steward_ref is not None:
        steward = await steward_repo.get_by_id(account.steward_ref)
    if steward is None:
        raise AuthorizationError("Steward profile required", code="STEWARD_REQUIRED")
    return steward


CurrentSteward = Annotated[Steward, Depends(get_current_steward)]


async def require_verified_member(
    account: CurrentAccount,
    verification_service: VerificationServiceDep,
) -> Member:
    """The caller's Member, which must exist and be VERIFIED."""
    return await verification_service.require_verified_member(account)


VerifiedMember = Annotated[Member, Depends(require_verified_member)]
