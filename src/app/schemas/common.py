"""Field helpers shared by request schemas."""

from typing import Annotated

from pydantic import AfterValidator, EmailStr, Field


def _normalize_email(value: str) -> str:
    return value.strip().lower()


# Emails are compared case-insensitively everywhere, so store them lowercased
NormalizedEmail = Annotated[EmailStr, AfterValidator(_normalize_email)]

ChapterId = Annotated[int, Field(gt=0)]

SocialLinks = dict[str, str]
