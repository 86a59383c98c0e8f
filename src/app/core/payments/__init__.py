"""Payment provider integration - Stripe Connect."""

from src.app.core.payments.stripe_connect import (
    connect_account_idempotency_key,
    create_connect_account,
)

__all__ = [
    "connect_account_idempotency_key",
    "create_connect_account",
]
