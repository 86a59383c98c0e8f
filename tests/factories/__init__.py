"""Test factories for generating test data.

Re-exports all factories for convenient imports:
    from tests.factories import AccountFactory, MemberFactory, ...
"""

from tests.factories.account import AccountFactory
from tests.factories.base import (
    BaseFactory,
    generate_uuid7,
    unique_email,
    unique_suffix,
    utc_now,
)
from tests.factories.member import MemberFactory
from tests.factories.profiles import PromoterFactory, SellerFactory, StewardFactory

__all__ = [
    # Base
    "BaseFactory",
    "generate_uuid7",
    "unique_email",
    "unique_suffix",
    "utc_now",
    # Account
    "AccountFactory",
    # Member
    "MemberFactory",
    # Profiles
    "PromoterFactory",
    "SellerFactory",
    "StewardFactory",
]
