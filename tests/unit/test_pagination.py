"""Unit tests for keyset cursors."""

import base64
from datetime import datetime
from uuid import uuid7

import pytest

from src.app.schemas.pagination import decode_cursor, encode_cursor

pytestmark = pytest.mark.unit


def test_cursor_points_at_created_at_and_id():
    created_at = datetime(2025, 3, 1, 12, 30, 15, 250000)
    id = uuid7()

    assert decode_cursor(encode_cursor(created_at, id)) == (created_at, id)


def test_cursor_is_url_safe():
    cursor = encode_cursor(datetime(2025, 3, 1), uuid7())

    assert all(c.isalnum() or c in "-_=" for c in cursor)


@pytest.mark.parametrize(
    "cursor",
    [
        "not-base64!",
        base64.urlsafe_b64encode(b"plain text").decode(),
        base64.urlsafe_b64encode(b'["2025-03-01T00:00:00"]').decode(),
        base64.urlsafe_b64encode(b'["yesterday", "not-a-uuid"]').decode(),
        base64.urlsafe_b64encode(b"42").decode(),
    ],
)
def test_malformed_cursor_rejected(cursor: str):
    with pytest.raises(ValueError, match="Invalid cursor"):
        decode_cursor(cursor)
