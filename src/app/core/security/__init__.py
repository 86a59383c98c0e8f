"""Security utilities - identity tokens and invitation tokens."""

from src.app.core.security.crypto import (
    create_identity_token,
    decode_identity_token,
    generate_invitation_token,
    hash_token,
)

__all__ = [
    "create_identity_token",
    "decode_identity_token",
    "generate_invitation_token",
    "hash_token",
]
