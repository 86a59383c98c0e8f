"""Repository layer - data access abstraction."""

from src.app.repositories.account import AccountRepository
from src.app.repositories.audit import AuditLogRepository
from src.app.repositories.base import BaseRepository
from src.app.repositories.catalog import ProductRepository, StewardListingRepository
from src.app.repositories.member import MemberRepository
from src.app.repositories.profiles import (
    PromoterRepository,
    SellerRepository,
    StewardRepository,
)

__all__ = [
    "AccountRepository",
    "AuditLogRepository",
    "BaseRepository",
    "MemberRepository",
    "ProductRepository",
    "PromoterRepository",
    "SellerRepository",
    "StewardListingRepository",
    "StewardRepository",
]
