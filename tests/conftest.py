"""Root test fixtures shared across all test types.

This conftest contains fixtures that can be used by both unit and integration tests.
Database-specific fixtures are in tests/integration/conftest.py.
"""

import os
import tempfile
from pathlib import Path

# Set APP_ENV to testing before any app imports to disable rate limiting
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault(
    "DATABASE_URL",
    f"sqlite+aiosqlite:///{Path(tempfile.gettempdir()) / 'identity_api_test.db'}",
)
os.environ.setdefault("IDENTITY_TOKEN_SECRET", "test-identity-secret-0123456789abcdef0123")
# Tests never reach the real providers
os.environ["STRIPE_SECRET_KEY"] = ""
os.environ["RESEND_API_KEY"] = ""

# ruff: noqa: E402 - Imports must be after env var setup
from collections.abc import Iterator

import pytest

from src.app.core.config import get_settings

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()


@pytest.fixture
def settings_override() -> Iterator:
    """Clear the settings cache before and after a test that patches env vars."""
    get_settings.cache_clear()
    yield get_settings
    get_settings.cache_clear()
