"""Stripe Connect account provisioning."""

import asyncio
from concurrent.futures import ThreadPoolExecutor

import stripe

from src.app.core.config import get_settings
from src.app.core.exceptions import PaymentProviderError
from src.app.core.logging import get_logger

logger = get_logger(__name__)

# stripe-python is synchronous; keep its network I/O off the event loop
_stripe_executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="stripe_client")


def connect_account_idempotency_key(email: str) -> str:
    """Deterministic idempotency key for one applicant's connected account."""
    return f"connect-account-{email.strip().lower()}"


def _create_express_account(email: str) -> str:
    settings = get_settings()
    account = stripe.Account.create(
        type="express",
        country=settings.stripe_connect_country,
        email=email,
        capabilities={
            "card_payments": {"requested": True},
            "transfers": {"requested": True},
        },
        api_key=settings.stripe_secret_key,
        idempotency_key=connect_account_idempotency_key(email),
    )
    return str(account.id)


async def create_connect_account(email: str) -> str:
    """Create (or fetch, on retry) the Express connected account for ``email``.

    Idempotency: Stripe caches the result of a POST per idempotency key for
    24 hours, so a retried approval for the same applicant returns the same
    account instead of creating a second one. Callers still skip this call
    entirely when a payment account id is already recorded.

    Raises:
        PaymentProviderError: Stripe is not configured, timed out, or rejected the call.
    """
    settings = get_settings()
    if not settings.payments_configured:
        raise PaymentProviderError("Stripe is not configured")

    loop = asyncio.get_running_loop()
    try:
        account_id = await asyncio.wait_for(
            loop.run_in_executor(_stripe_executor, _create_express_account, email),
            timeout=settings.stripe_request_timeout_seconds,
        )
    except TimeoutError as e:
        logger.error("Stripe account creation timed out", email=email)
        raise PaymentProviderError("Stripe account creation timed out") from e
    except stripe.StripeError as e:
        logger.error("Stripe account creation failed", email=email, error=str(e))
        raise PaymentProviderError(f"Stripe account creation failed: {e}") from e

    logger.info("Stripe connected account created", account_id=account_id)
    return account_id
