"""Seller, promoter and steward factories for test data generation."""

from polyfactory import Use

from src.app.models import (
    ApplicationStatus,
    Promoter,
    Seller,
    SellerVerificationStatus,
    Steward,
)
from tests.factories.base import BaseFactory, generate_uuid7, unique_email, unique_suffix, utc_now


class SellerFactory(BaseFactory):
    """Factory for generating PENDING Seller test data."""

    __model__ = Seller

    id = Use(generate_uuid7)
    email = Use(unique_email, "seller")
    name = "Test Seller"
    member_id = None
    sponsoring_chapter_id = 1
    business_name = "Heritage Goods"
    vendor_license_number = Use(lambda: f"VL-{unique_suffix()}")
    social_links = Use(dict)
    store_logo_url = "https://cdn.example.com/logo.png"
    headshot_url = None
    status = ApplicationStatus.PENDING.value
    payment_account_id = None
    verification_status = SellerVerificationStatus.PENDING.value
    verification_notes = None
    verification_date = None
    invitation_token_hash = None
    invitation_expires_at = None
    created_at = Use(utc_now)
    updated_at = Use(utc_now)

    @classmethod
    def approved(cls, **kwargs):
        kwargs.setdefault("status", ApplicationStatus.APPROVED.value)
        kwargs.setdefault("payment_account_id", f"acct_{unique_suffix()}")
        return cls.build(**kwargs)


class PromoterFactory(BaseFactory):
    """Factory for generating PENDING Promoter test data."""

    __model__ = Promoter

    id = Use(generate_uuid7)
    email = Use(unique_email, "promoter")
    name = "Test Promoter"
    membership_number = Use(lambda: f"KAP-{unique_suffix()}")
    member_id = None
    initiated_chapter_id = 1
    sponsoring_chapter_id = None
    social_links = Use(dict)
    headshot_url = None
    status = ApplicationStatus.PENDING.value
    payment_account_id = None
    invitation_token_hash = None
    invitation_expires_at = None
    created_at = Use(utc_now)
    updated_at = Use(utc_now)


class StewardFactory(BaseFactory):
    """Factory for generating PENDING Steward test data. ``member_id`` is required."""

    __model__ = Steward

    id = Use(generate_uuid7)
    member_id = None
    sponsoring_chapter_id = 1
    status = ApplicationStatus.PENDING.value
    payment_account_id = None
    created_at = Use(utc_now)
    updated_at = Use(utc_now)
