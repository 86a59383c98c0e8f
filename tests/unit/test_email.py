"""Tests for the Resend email senders."""

from unittest.mock import MagicMock, patch

import pytest

from src.app.core.notifications import email
from src.app.core.notifications.email import (
    send_application_approved_email,
    send_application_received_email,
)

pytestmark = pytest.mark.unit


@pytest.fixture
def resend_settings() -> MagicMock:
    settings = MagicMock()
    settings.resend_api_key = "re_test_123"
    settings.email_from = "noreply@example.com"
    settings.email_send_timeout_seconds = 5
    settings.app_url = "https://app.example.com"
    settings.invitation_expire_days = 14
    return settings


def test_without_api_key_logs_and_succeeds():
    with patch.object(email.resend.Emails, "send") as send:
        assert send_application_received_email("a@example.com", "Avery", "SELLER") is True

    send.assert_not_called()


def test_sends_through_resend(resend_settings):
    with (
        patch("src.app.core.notifications.email.get_settings", return_value=resend_settings),
        patch.object(email.resend.Emails, "send") as send,
    ):
        assert send_application_received_email("a@example.com", "Avery", "PROMOTER") is True

    params = send.call_args.args[0]
    assert params["to"] == ["a@example.com"]
    assert params["from"] == "noreply@example.com"
    assert "promoter" in params["subject"]


def test_failure_returns_false(resend_settings):
    with (
        patch("src.app.core.notifications.email.get_settings", return_value=resend_settings),
        patch.object(email.resend.Emails, "send", side_effect=RuntimeError("boom")),
    ):
        assert send_application_received_email("a@example.com", "Avery", "SELLER") is False


def test_approval_with_invitation_links_to_setup(resend_settings):
    with (
        patch("src.app.core.notifications.email.get_settings", return_value=resend_settings),
        patch.object(email.resend.Emails, "send") as send,
    ):
        send_application_approved_email("a@example.com", "Avery", "SELLER", "tok123")

    body = send.call_args.args[0]["html"]
    assert "https://app.example.com/seller-setup?token=tok123" in body
    assert "14 days" in body


def test_approval_without_invitation_links_to_login(resend_settings):
    with (
        patch("src.app.core.notifications.email.get_settings", return_value=resend_settings),
        patch.object(email.resend.Emails, "send") as send,
    ):
        send_application_approved_email("a@example.com", "Avery", "STEWARD")

    body = send.call_args.args[0]["html"]
    assert "https://app.example.com/login" in body
    assert "seller-setup" not in body


def test_name_is_escaped(resend_settings):
    with (
        patch("src.app.core.notifications.email.get_settings", return_value=resend_settings),
        patch.object(email.resend.Emails, "send") as send,
    ):
        send_application_received_email("a@example.com", "<script>", "SELLER")

    assert "<script>" not in send.call_args.args[0]["html"]
    assert "&lt;script&gt;" in send.call_args.args[0]["html"]
