"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.app.api.dependencies.db import DBSession
from src.app.repositories import (
    AccountRepository,
    MemberRepository,
    ProductRepository,
    PromoterRepository,
    SellerRepository,
    StewardListingRepository,
    StewardRepository,
)


def get_account_repository(session: DBSession) -> AccountRepository:
    return AccountRepository(session)


def get_member_repository(session: DBSession) -> MemberRepository:
    return MemberRepository(session)


def get_seller_repository(session: DBSession) -> SellerRepository:
    return SellerRepository(session)


def get_promoter_repository(session: DBSession) -> PromoterRepository:
    return PromoterRepository(session)


def get_steward_repository(session: DBSession) -> StewardRepository:
    return StewardRepository(session)


def get_product_repository(session: DBSession) -> ProductRepository:
    return ProductRepository(session)


def get_steward_listing_repository(session: DBSession) -> StewardListingRepository:
    return StewardListingRepository(session)


AccountRepo = Annotated[AccountRepository, Depends(get_account_repository)]
MemberRepo = Annotated[MemberRepository, Depends(get_member_repository)]
SellerRepo = Annotated[SellerRepository, Depends(get_seller_repository)]
PromoterRepo = Annotated[PromoterRepository, Depends(get_promoter_repository)]
StewardRepo = Annotated[StewardRepository, Depends(get_steward_repository)]
ProductRepo = Annotated[ProductRepository, Depends(get_product_repository)]
StewardListingRepo = Annotated[StewardListingRepository, Depends(get_steward_listing_repository)]
