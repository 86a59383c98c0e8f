"""Applicant notifications sent through Resend.

Delivery is best-effort: a sender returns False when Resend fails or times out
and never raises, so an approval is never undone by a mail outage. Without
``RESEND_API_KEY`` messages are only logged.
"""

import html
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError
from dataclasses import dataclass
from urllib.parse import urlencode

import resend

from src.app.core.config import get_settings
from src.app.core.logging import get_logger

logger = get_logger(__name__)

# resend is synchronous; the pool lets a send be abandoned after the timeout
_sender_pool = ThreadPoolExecutor(max_workers=4, thread_name_prefix="resend")

BRAND_COLOR = "#8b0000"

PAGE_TEMPLATE = """<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><meta name="viewport" content="width=device-width, initial-scale=1.0"></head>
<body style="font-family: -apple-system, 'Segoe UI', Roboto, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;">
    <h1 style="color: {color};">{title}</h1>
    <p>Hi {name},</p>
    {paragraphs}
</body>
</html>"""

BUTTON_TEMPLATE = (
    '<p style="margin: 32px 0;"><a href="{href}" style="background-color: {color}; '
    "color: white; padding: 12px 24px; text-decoration: none; border-radius: 6px; "
    'display: inline-block;">{label}</a></p>'
)


@dataclass(frozen=True)
class Notification:
    kind: str
    to: str
    subject: str
    html: str


def persona_label(profile_kind: str) -> str:
    return profile_kind.lower() if profile_kind in ("SELLER", "PROMOTER", "STEWARD") else "member"


def render(title: str, name: str, *paragraphs: str) -> str:
    return PAGE_TEMPLATE.format(
        color=BRAND_COLOR,
        title=html.escape(title),
        name=html.escape(name),
        paragraphs="\n    ".join(paragraphs),
    )


def button(href: str, label: str) -> str:
    return BUTTON_TEMPLATE.format(href=html.escape(href), color=BRAND_COLOR, label=label)


def dispatch(notification: Notification) -> bool:
    settings = get_settings()
    if not settings.resend_api_key:
        logger.warning(
            "Email not sent, RESEND_API_KEY unset",
            email_type=notification.kind,
            to=notification.to,
        )
        return True

    resend.api_key = settings.resend_api_key
    params: resend.Emails.SendParams = {
        "from": settings.email_from,
        "to": [notification.to],
        "subject": notification.subject,
        "html": notification.html,
    }
    timeout = settings.email_send_timeout_seconds
    try:
        _sender_pool.submit(resend.Emails.send, params).result(timeout=timeout)
    except FuturesTimeoutError:
        logger.error("Email send timed out", email_type=notification.kind, timeout=timeout)
        return False
    except Exception as e:
        logger.error("Email send failed", email_type=notification.kind, error=str(e))
        return False

    logger.info("Email sent", email_type=notification.kind, to=notification.to)
    return True


def send_application_received_email(to: str, name: str, profile_kind: str) -> bool:
    label = persona_label(profile_kind)
    body = render(
        "Application received",
        name,
        f"<p>Thanks for applying to become a {label}. We will email you once an "
        "admin has reviewed your application.</p>",
    )
    return dispatch(
        Notification("application_received", to, f"We received your {label} application", body)
    )


def send_application_approved_email(
    to: str,
    name: str,
    profile_kind: str,
    invitation_token: str | None = None,
) -> bool:
    """Tell an applicant they were approved.

    With an invitation token the email links to account setup, where the token
    is claimed. Applicants who already had an account get a login link instead.
    """
    settings = get_settings()
    label = persona_label(profile_kind)

    if invitation_token:
        setup_url = f"{settings.app_url}/seller-setup?{urlencode({'token': invitation_token})}"
        next_steps = [
            "<p>Finish setting up your account to get started:</p>",
            button(setup_url, "Set up your account"),
            f'<p style="color: #666; font-size: 14px;">This link expires in '
            f"{settings.invitation_expire_days} days.</p>",
        ]
    else:
        next_steps = [
            "<p>Log in with your existing account to get started:</p>",
            button(f"{settings.app_url}/login", "Log in"),
        ]

    body = render(
        "You're approved!",
        name,
        f"<p>Your {label} application has been approved.</p>",
        *next_steps,
    )
    return dispatch(
        Notification("application_approved", to, f"Your {label} application was approved", body)
    )
