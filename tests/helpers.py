"""Test helper functions for common data creation patterns."""

from sqlalchemy.ext.asyncio import AsyncSession

from src.app.core.security import create_identity_token
from src.app.models import Account, Member, ProfileKind, Seller, Steward
from tests.factories import AccountFactory, MemberFactory, SellerFactory, StewardFactory


def auth_headers(subject: str, email: str) -> dict[str, str]:
    """Bearer headers carrying an identity token for ``subject``."""
    return {"Authorization": f"Bearer {create_identity_token(subject, email)}"}


def account_headers(account: Account) -> dict[str, str]:
    return auth_headers(account.external_subject, account.email)


async def create_member_account(
    session: AsyncSession,
    verified: bool = True,
    **member_kwargs,
) -> tuple[Account, Member]:
    """Create a registered Member and the GUEST account that owns it."""
    build = MemberFactory.verified if verified else MemberFactory.build
    member = build(**member_kwargs)
    session.add(member)
    await session.flush()

    account = AccountFactory.bound_to(
        ProfileKind.MEMBER,
        member.id,
        external_subject=member.external_subject,
        email=member.email,
    )
    session.add(account)
    await session.commit()
    return account, member


async def create_seller_account(
    session: AsyncSession,
    member: Member | None = None,
    **seller_kwargs,
) -> tuple[Account, Seller]:
    """Create an APPROVED seller and the SELLER account that owns it."""
    seller = SellerFactory.approved(member_id=member.id if member else None, **seller_kwargs)
    session.add(seller)
    await session.flush()

    account = AccountFactory.bound_to(ProfileKind.SELLER, seller.id, email=seller.email)
    session.add(account)
    await session.commit()
    return account, seller


async def create_steward_account(session: AsyncSession) -> tuple[Account, Steward, Member]:
    """Create a verified Member with an APPROVED steward profile and its account."""
    member = MemberFactory.verified()
    session.add(member)
    await session.flush()

    steward = StewardFactory.build(member_id=member.id, status="APPROVED")
    session.add(steward)
    await session.flush()

    account = AccountFactory.bound_to(
        ProfileKind.STEWARD,
        steward.id,
        external_subject=member.external_subject,
        email=member.email,
    )
    session.add(account)
    await session.commit()
    return account, steward, member


async def create_admin(session: AsyncSession) -> Account:
    admin = AccountFactory.admin()
    session.add(admin)
    await session.commit()
    return admin
