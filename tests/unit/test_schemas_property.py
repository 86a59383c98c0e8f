"""Property-based tests for request schemas and lifecycle helpers using hypothesis."""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st
from pydantic import ValidationError

from src.app.core.security import hash_token
from src.app.models import OnboardingStatus
from src.app.schemas import MemberDraft, StewardApplication
from src.app.services.registration_service import RegistrationService
from tests.factories import AccountFactory

pytestmark = pytest.mark.unit


local_part = st.from_regex(r"^[a-z][a-z0-9]{0,15}$", fullmatch=True)


@given(chapter_id=st.integers(min_value=1, max_value=2**31 - 1))
def test_positive_chapter_ids_accepted(chapter_id: int):
    assert StewardApplication(sponsoring_chapter_id=chapter_id).sponsoring_chapter_id == chapter_id


@given(chapter_id=st.integers(max_value=0))
def test_non_positive_chapter_ids_rejected(chapter_id: int):
    with pytest.raises(ValidationError) as exc_info:
        StewardApplication(sponsoring_chapter_id=chapter_id)
    errors = exc_info.value.errors()
    assert any(error["loc"] == ("sponsoring_chapter_id",) for error in errors)


@given(name=local_part)
@settings(max_examples=50)
def test_emails_are_lowercased(name: str):
    """Mixed-case input is stored in one canonical form."""
    draft = MemberDraft(email=f"{name.upper()}@Example.COM")
    assert draft.email == f"{name}@example.com"


@given(token=st.text(max_size=128))
def test_token_hash_is_stable_hex(token: str):
    digest = hash_token(token)
    assert digest == hash_token(token)
    assert len(digest) == 64
    assert all(c in "0123456789abcdef" for c in digest)


@given(steps=st.lists(st.sampled_from(list(OnboardingStatus)), max_size=10))
def test_onboarding_never_moves_backwards(steps: list[OnboardingStatus]):
    order = list(OnboardingStatus)
    account = AccountFactory.build(onboarding_status=OnboardingStatus.PRE_COGNITO.value)
    highest = 0

    for status in steps:
        RegistrationService._advance_onboarding(account, status)
        highest = max(highest, order.index(status))
        assert account.onboarding_status == order[highest].value
