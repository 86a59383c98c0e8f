"""Integration tests for admin review queues and decisions."""

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from src.app.models import Account, Member, Persona, ProfileKind, Seller, Steward
from src.app.services.approval_service import PAYMENT_WARNING_NOT_CONFIGURED
from tests.factories import (
    AccountFactory,
    MemberFactory,
    PromoterFactory,
    SellerFactory,
    StewardFactory,
)
from tests.helpers import (
    account_headers,
    create_admin,
    create_member_account,
    create_seller_account,
)

pytestmark = pytest.mark.integration


async def load(engine: AsyncEngine, model, row_id):
    async with AsyncSession(engine, expire_on_commit=False) as session:
        return await session.get(model, row_id)


class TestAdminGuard:
    async def test_non_admin_is_refused(self, client: AsyncClient, db_session: AsyncSession):
        account, _ = await create_member_account(db_session, verified=True)

        response = await client.get(
            "/api/v1/admin/sellers/pending", headers=account_headers(account)
        )

        assert response.status_code == 403
        assert response.json()["code"] == "ADMIN_REQUIRED"


class TestPendingQueues:
    async def test_pending_sellers_exclude_decided(
        self, client: AsyncClient, db_session: AsyncSession
    ):
        admin = await create_admin(db_session)
        pending = SellerFactory.build()
        approved = SellerFactory.approved()
        db_session.add_all([pending, approved])
        await db_session.commit()

        response = await client.get(
            "/api/v1/admin/sellers/pending", headers=account_headers(admin)
        )

        assert response.status_code == 200
        assert [item["id"] for item in response.json()["items"]] == [str(pending.id)]

    async def test_pending_members_include_manual_review(
        self, client: AsyncClient, db_session: AsyncSession
    ):
        admin = await create_admin(db_session)
        pending = MemberFactory.build()
        manual = MemberFactory.build(verification_status="MANUAL_REVIEW")
        verified = MemberFactory.verified()
        draft = MemberFactory.draft()
        db_session.add_all([pending, manual, verified, draft])
        await db_session.commit()

        response = await client.get(
            "/api/v1/admin/members/pending", headers=account_headers(admin)
        )

        assert response.status_code == 200
        ids = {item["id"] for item in response.json()["items"]}
        assert ids == {str(pending.id), str(manual.id)}

    async def test_pending_promoters_and_stewards(
        self, client: AsyncClient, db_session: AsyncSession
    ):
        admin = await create_admin(db_session)
        member = MemberFactory.verified()
        db_session.add(member)
        await db_session.flush()
        promoter = PromoterFactory.build()
        steward = StewardFactory.build(member_id=member.id)
        db_session.add_all([promoter, steward])
        await db_session.commit()

        promoters = await client.get(
            "/api/v1/admin/promoters/pending", headers=account_headers(admin)
        )
        stewards = await client.get(
            "/api/v1/admin/stewards/pending", headers=account_headers(admin)
        )

        assert [item["id"] for item in promoters.json()["items"]] == [str(promoter.id)]
        assert [item["id"] for item in stewards.json()["items"]] == [str(steward.id)]


class TestApprovalDecisions:
    async def test_approval_without_payments_persists_with_warning(
        self,
        client: AsyncClient,
        db_session: AsyncSession,
        engine: AsyncEngine,
        stripe_down,
        approved_email,
    ):
        admin = await create_admin(db_session)
        seller = SellerFactory.build()
        db_session.add(seller)
        await db_session.commit()

        response = await client.put(
            f"/api/v1/admin/sellers/{seller.id}",
            json={"status": "APPROVED"},
            headers=account_headers(admin),
        )

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "APPROVED"
        assert data["payment_account_id"] is None
        assert data["warning"] == PAYMENT_WARNING_NOT_CONFIGURED
        approved_email.assert_called_once()

    async def test_retry_provisions_missing_payment_account(
        self,
        client: AsyncClient,
        db_session: AsyncSession,
        engine: AsyncEngine,
        approved_email,
    ):
        from unittest.mock import AsyncMock, patch

        admin = await create_admin(db_session)
        seller = SellerFactory.approved(payment_account_id=None)
        db_session.add(seller)
        await db_session.commit()

        with patch(
            "src.app.services.approval_service.create_connect_account",
            new=AsyncMock(return_value="acct_retry"),
        ) as provision:
            response = await client.put(
                f"/api/v1/admin/sellers/{seller.id}",
                json={"status": "APPROVED"},
                headers=account_headers(admin),
            )

        assert response.status_code == 200
        assert response.json()["payment_account_id"] == "acct_retry"
        assert response.json()["warning"] is None
        provision.assert_awaited_once_with(seller.email)
        refreshed = await load(engine, Seller, seller.id)
        assert refreshed.payment_account_id == "acct_retry"

    async def test_already_provisioned_approval_is_a_no_op(
        self,
        client: AsyncClient,
        db_session: AsyncSession,
        stripe_connect,
        approved_email,
    ):
        admin = await create_admin(db_session)
        seller = SellerFactory.approved(payment_account_id="acct_existing")
        db_session.add(seller)
        await db_session.commit()

        response = await client.put(
            f"/api/v1/admin/sellers/{seller.id}",
            json={"status": "APPROVED"},
            headers=account_headers(admin),
        )

        assert response.status_code == 200
        assert response.json()["payment_account_id"] == "acct_existing"
        stripe_connect.assert_not_awaited()
        approved_email.assert_not_called()

    async def test_approval_binds_existing_account_by_email(
        self,
        client: AsyncClient,
        db_session: AsyncSession,
        engine: AsyncEngine,
        stripe_connect,
        approved_email,
    ):
        admin = await create_admin(db_session)
        account = AccountFactory.build()
        promoter = PromoterFactory.build(email=account.email)
        db_session.add_all([account, promoter])
        await db_session.commit()

        response = await client.put(
            f"/api/v1/admin/promoters/{promoter.id}",
            json={"status": "APPROVED"},
            headers=account_headers(admin),
        )

        assert response.status_code == 200
        refreshed = await load(engine, Account, account.id)
        assert refreshed.persona == Persona.PROMOTER.value
        assert refreshed.promoter_ref == promoter.id
        assert approved_email.call_args.args[3] is None

    async def test_persona_conflict_on_manual_approval(
        self,
        client: AsyncClient,
        db_session: AsyncSession,
        engine: AsyncEngine,
        stripe_connect,
    ):
        admin = await create_admin(db_session)
        seller_account, _ = await create_seller_account(db_session)
        promoter = PromoterFactory.build(email=seller_account.email)
        db_session.add(promoter)
        await db_session.commit()

        response = await client.put(
            f"/api/v1/admin/promoters/{promoter.id}",
            json={"status": "APPROVED"},
            headers=account_headers(admin),
        )

        assert response.status_code == 409
        assert response.json()["code"] == "PERSONA_CONFLICT"
        stripe_connect.assert_not_awaited()
        refreshed = await load(engine, Account, seller_account.id)
        assert refreshed.persona == Persona.SELLER.value

    async def test_steward_approval_links_member_account(
        self,
        client: AsyncClient,
        db_session: AsyncSession,
        engine: AsyncEngine,
        stripe_connect,
        approved_email,
    ):
        admin = await create_admin(db_session)
        account, member = await create_member_account(db_session, verified=True)
        steward = StewardFactory.build(member_id=member.id)
        db_session.add(steward)
        await db_session.commit()

        response = await client.put(
            f"/api/v1/admin/stewards/{steward.id}",
            json={"status": "APPROVED"},
            headers=account_headers(admin),
        )

        assert response.status_code == 200
        assert response.json()["payment_account_id"] == "acct_test123"
        refreshed = await load(engine, Account, account.id)
        assert refreshed.steward_ref == steward.id
        stripe_connect.assert_awaited_once_with(member.email)

    async def test_unknown_profile(self, client: AsyncClient, db_session: AsyncSession):
        admin = await create_admin(db_session)

        response = await client.put(
            f"/api/v1/admin/sellers/{SellerFactory.build().id}",
            json={"status": "APPROVED"},
            headers=account_headers(admin),
        )

        assert response.status_code == 404
        assert response.json()["code"] == "PROFILE_NOT_FOUND"

    async def test_invalid_decision_value(self, client: AsyncClient, db_session: AsyncSession):
        admin = await create_admin(db_session)
        seller = SellerFactory.build()
        db_session.add(seller)
        await db_session.commit()

        response = await client.put(
            f"/api/v1/admin/sellers/{seller.id}",
            json={"status": "PENDING"},
            headers=account_headers(admin),
        )

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"


class TestRejection:
    async def test_rejecting_member_backed_profile_restores_member_binding(
        self, client: AsyncClient, db_session: AsyncSession, engine: AsyncEngine
    ):
        admin = await create_admin(db_session)
        member = MemberFactory.verified()
        db_session.add(member)
        await db_session.flush()
        account, seller = await create_seller_account(db_session, member=member)

        response = await client.put(
            f"/api/v1/admin/sellers/{seller.id}",
            json={"status": "REJECTED"},
            headers=account_headers(admin),
        )

        assert response.status_code == 200
        assert response.json()["status"] == "REJECTED"
        refreshed = await load(engine, Account, account.id)
        assert refreshed.persona == Persona.GUEST.value
        assert refreshed.member_ref == member.id

    async def test_rejecting_memberless_profile_clears_binding(
        self, client: AsyncClient, db_session: AsyncSession, engine: AsyncEngine
    ):
        admin = await create_admin(db_session)
        account, seller = await create_seller_account(db_session)

        await client.put(
            f"/api/v1/admin/sellers/{seller.id}",
            json={"status": "REJECTED"},
            headers=account_headers(admin),
        )

        refreshed = await load(engine, Account, account.id)
        assert refreshed.persona == Persona.GUEST.value
        assert refreshed.profile_kind is None
        assert refreshed.profile_id is None

    async def test_rejection_revokes_outstanding_invitation(
        self, client: AsyncClient, db_session: AsyncSession, engine: AsyncEngine
    ):
        admin = await create_admin(db_session)
        seller = SellerFactory.approved(invitation_token_hash="a" * 64)
        db_session.add(seller)
        await db_session.commit()

        await client.put(
            f"/api/v1/admin/sellers/{seller.id}",
            json={"status": "REJECTED"},
            headers=account_headers(admin),
        )

        refreshed = await load(engine, Seller, seller.id)
        assert refreshed.status == "REJECTED"
        assert refreshed.invitation_token_hash is None

    async def test_rejecting_steward(
        self, client: AsyncClient, db_session: AsyncSession, engine: AsyncEngine
    ):
        admin = await create_admin(db_session)
        account, member = await create_member_account(db_session, verified=True)
        steward = StewardFactory.build(member_id=member.id, status="APPROVED")
        db_session.add(steward)
        await db_session.flush()
        account.bind_profile(ProfileKind.STEWARD, steward.id)
        db_session.add(account)
        await db_session.commit()

        response = await client.put(
            f"/api/v1/admin/stewards/{steward.id}",
            json={"status": "REJECTED"},
            headers=account_headers(admin),
        )

        assert response.status_code == 200
        refreshed = await load(engine, Account, account.id)
        assert refreshed.member_ref == member.id
        assert (await load(engine, Steward, steward.id)).status == "REJECTED"


class TestVerificationUpdates:
    async def test_member_verification_update_is_audited(
        self, client: AsyncClient, db_session: AsyncSession, engine: AsyncEngine
    ):
        admin = await create_admin(db_session)
        _, member = await create_member_account(db_session, verified=False)
        headers = account_headers(admin)

        response = await client.put(
            f"/api/v1/admin/members/{member.id}/verification",
            json={"verification_status": "VERIFIED", "verification_notes": "Roster match"},
            headers=headers,
        )

        assert response.status_code == 200
        refreshed = await load(engine, Member, member.id)
        assert refreshed.verification_status == "VERIFIED"
        assert refreshed.verification_date is not None

        history = await client.get(f"/api/v1/admin/audit/member/{member.id}", headers=headers)
        assert history.status_code == 200
        items = history.json()["items"]
        assert len(items) == 1
        assert items[0]["action"] == "member.verification_update"
        assert items[0]["account_id"] == str(admin.id)
        assert items[0]["changes"]["verification_status"] == {"old": "PENDING", "new": "VERIFIED"}

    async def test_verified_member_can_then_apply_as_steward(
        self,
        client: AsyncClient,
        db_session: AsyncSession,
        stripe_connect,
    ):
        admin = await create_admin(db_session)
        account, member = await create_member_account(db_session, verified=False)

        await client.put(
            f"/api/v1/admin/members/{member.id}/verification",
            json={"verification_status": "VERIFIED"},
            headers=account_headers(admin),
        )
        response = await client.post(
            "/api/v1/stewards/apply",
            json={"sponsoring_chapter_id": 2},
            headers=account_headers(account),
        )

        assert response.status_code == 201
        assert response.json()["status"] == "APPROVED"

    async def test_unknown_member(self, client: AsyncClient, db_session: AsyncSession):
        admin = await create_admin(db_session)

        response = await client.put(
            f"/api/v1/admin/members/{MemberFactory.build().id}/verification",
            json={"verification_status": "FAILED"},
            headers=account_headers(admin),
        )

        assert response.status_code == 404
        assert response.json()["code"] == "MEMBER_NOT_FOUND"

    async def test_decision_history_is_recorded(
        self, client: AsyncClient, db_session: AsyncSession, stripe_down
    ):
        admin = await create_admin(db_session)
        seller = SellerFactory.build()
        db_session.add(seller)
        await db_session.commit()
        headers = account_headers(admin)

        await client.put(
            f"/api/v1/admin/sellers/{seller.id}", json={"status": "APPROVED"}, headers=headers
        )
        history = await client.get(f"/api/v1/admin/audit/seller/{seller.id}", headers=headers)

        items = history.json()["items"]
        assert [item["action"] for item in items] == ["application.approve"]
        assert items[0]["changes"]["status"] == {"old": "PENDING", "new": "APPROVED"}
        assert items[0]["changes"]["warning"] == PAYMENT_WARNING_NOT_CONFIGURED
