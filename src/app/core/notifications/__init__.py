"""Notification utilities - email."""

from src.app.core.notifications.email import (
    send_application_approved_email,
    send_application_received_email,
)

__all__ = [
    "send_application_approved_email",
    "send_application_received_email",
]
