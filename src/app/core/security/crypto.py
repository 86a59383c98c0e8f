"""Token utilities - external identity JWTs and invitation tokens."""

import secrets
from datetime import UTC, datetime, timedelta
from hashlib import sha256
from typing import Any

from jose import JWTError, jwt

from src.app.core.config import get_settings


def hash_token(token: str) -> str:
    """Hash a token using SHA256 for secure storage."""
    return sha256(token.encode()).hexdigest()


def generate_invitation_token() -> str:
    """Generate a one-time invitation token (64 hex characters)."""
    return secrets.token_hex(32)


def create_identity_token(
    subject: str,
    email: str,
    expires_delta: timedelta | None = None,
) -> str:
    """Mint an identity token in the provider's format.

    Used for local development and tests; production tokens come from the
    external identity provider and are only ever decoded here.
    """
    settings = get_settings()
    expire = datetime.now(UTC) + (
        expires_delta or timedelta(minutes=settings.identity_token_expire_minutes)
    )

    to_encode: dict[str, Any] = {
        "sub": subject,
        "email": email,
        "exp": expire,
        "token_use": "id",
    }
    if settings.identity_token_issuer:
        to_encode["iss"] = settings.identity_token_issuer
    if settings.identity_token_audience:
        to_encode["aud"] = settings.identity_token_audience

    return jwt.encode(  # type: ignore[no-any-return]
        to_encode,
        settings.identity_token_secret,
        algorithm=settings.identity_token_algorithm,
    )


def decode_identity_token(token: str) -> dict[str, Any] | None:
    """Decode and validate an identity token. Returns None on any error."""
    settings = get_settings()
    options = {"verify_aud": settings.identity_token_audience is not None}
    try:
        return jwt.decode(  # type: ignore[no-any-return]
            token,
            settings.identity_token_secret,
            algorithms=[settings.identity_token_algorithm],
            audience=settings.identity_token_audience,
            issuer=settings.identity_token_issuer,
            options=options,
        )
    except JWTError:
        return None
