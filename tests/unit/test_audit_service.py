"""Unit tests for AuditService."""

from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4

import pytest

from src.app.models import AuditAction, ProfileKind
from src.app.services.audit_service import AuditService
from tests.factories import AccountFactory

pytestmark = pytest.mark.unit


@pytest.fixture
def audit_repo() -> MagicMock:
    repo = MagicMock()
    repo.list_for_entity = AsyncMock(return_value=([], None, False))
    return repo


@pytest.fixture
def session() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def audit_service(audit_repo, session) -> AuditService:
    return AuditService(audit_repo, session)


def recorded(audit_repo: MagicMock):
    return audit_repo.add.call_args[0][0]


class TestRecordTransition:
    async def test_admin_decision(self, audit_service, audit_repo, session):
        admin = AccountFactory.admin()
        seller_id = uuid4()

        entry = await audit_service.record_transition(
            AuditAction.APPLICATION_APPROVE,
            ProfileKind.SELLER,
            seller_id,
            "status",
            "PENDING",
            "APPROVED",
            actor=admin,
            warning=None,
        )

        assert entry is recorded(audit_repo)
        assert entry.account_id == admin.id
        assert entry.action == "application.approve"
        assert entry.entity_type == "seller"
        assert entry.entity_id == seller_id
        assert entry.changes == {"status": {"old": "PENDING", "new": "APPROVED"}, "warning": None}
        session.commit.assert_awaited_once()

    async def test_automatic_transition_has_no_actor(self, audit_service, audit_repo):
        await audit_service.record_transition(
            AuditAction.SELLER_REVERIFICATION_REQUIRED,
            ProfileKind.SELLER,
            uuid4(),
            "verification_status",
            "VERIFIED",
            "PENDING",
            note="Requires review",
        )

        entry = recorded(audit_repo)
        assert entry.account_id is None
        assert entry.changes["note"] == "Requires review"

    async def test_member_entries_use_member_entity_type(self, audit_service, audit_repo):
        await audit_service.record_transition(
            AuditAction.MEMBER_VERIFICATION_UPDATE,
            ProfileKind.MEMBER,
            uuid4(),
            "verification_status",
            "PENDING",
            "VERIFIED",
        )

        assert recorded(audit_repo).entity_type == "member"

    async def test_captures_request_id(self, audit_service, audit_repo):
        with patch("src.app.services.audit_service.correlation_id") as mock_correlation_id:
            mock_correlation_id.get.return_value = "req-123"

            await audit_service.record_transition(
                AuditAction.APPLICATION_REJECT,
                ProfileKind.PROMOTER,
                uuid4(),
                "status",
                "PENDING",
                "REJECTED",
            )

        assert recorded(audit_repo).request_id == "req-123"

    async def test_write_failure_is_swallowed(self, audit_service, session):
        session.commit.side_effect = Exception("database unavailable")

        entry = await audit_service.record_transition(
            AuditAction.APPLICATION_REJECT,
            ProfileKind.STEWARD,
            uuid4(),
            "status",
            "PENDING",
            "REJECTED",
        )

        assert entry is None
        session.rollback.assert_awaited_once()

    async def test_rollback_failure_is_swallowed(self, audit_service, session):
        session.commit.side_effect = Exception("database unavailable")
        session.rollback.side_effect = Exception("connection lost")

        entry = await audit_service.record_transition(
            AuditAction.APPLICATION_REJECT,
            ProfileKind.SELLER,
            uuid4(),
            "status",
            "PENDING",
            "REJECTED",
        )

        assert entry is None


class TestHistory:
    async def test_delegates_to_repository(self, audit_service, audit_repo):
        member_id = uuid4()

        result = await audit_service.history(ProfileKind.MEMBER, member_id, cursor="abc", limit=10)

        audit_repo.list_for_entity.assert_awaited_once_with(
            ProfileKind.MEMBER, member_id, "abc", 10
        )
        assert result == ([], None, False)
