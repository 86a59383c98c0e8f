"""Shared enums for models."""

from enum import Enum


class Persona(str, Enum):
    """The mutually exclusive role an account currently plays."""

    GUEST = "GUEST"
    SELLER = "SELLER"
    PROMOTER = "PROMOTER"
    STEWARD = "STEWARD"
    ADMIN = "ADMIN"


class ProfileKind(str, Enum):
    """Tag of the single profile an account may own."""

    MEMBER = "MEMBER"
    SELLER = "SELLER"
    PROMOTER = "PROMOTER"
    STEWARD = "STEWARD"


class OnboardingStatus(str, Enum):
    PRE_COGNITO = "PRE_COGNITO"
    COGNITO_CONFIRMED = "COGNITO_CONFIRMED"
    ONBOARDING_STARTED = "ONBOARDING_STARTED"
    ONBOARDING_FINISHED = "ONBOARDING_FINISHED"


class RegistrationStatus(str, Enum):
    DRAFT = "DRAFT"
    COMPLETE = "COMPLETE"


class VerificationStatus(str, Enum):
    """Outcome of membership verification on a Member."""

    PENDING = "PENDING"
    VERIFIED = "VERIFIED"
    FAILED = "FAILED"
    MANUAL_REVIEW = "MANUAL_REVIEW"


class SellerVerificationStatus(str, Enum):
    """Platform verification of a Seller, independent of membership."""

    PENDING = "PENDING"
    VERIFIED = "VERIFIED"


class ApplicationStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class ListingStatus(str, Enum):
    ACTIVE = "ACTIVE"
    CLAIMED = "CLAIMED"
    REMOVED = "REMOVED"


# Persona an account takes on when it owns a profile of the given kind
PERSONA_FOR_PROFILE: dict[ProfileKind, Persona] = {
    ProfileKind.MEMBER: Persona.GUEST,
    ProfileKind.SELLER: Persona.SELLER,
    ProfileKind.PROMOTER: Persona.PROMOTER,
    ProfileKind.STEWARD: Persona.STEWARD,
}
