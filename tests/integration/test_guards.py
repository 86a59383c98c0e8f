"""Integration tests for the route guards: identity, role, steward and verified-member."""

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from src.app.models import ProfileKind
from tests.factories import AccountFactory, StewardFactory
from tests.helpers import (
    account_headers,
    auth_headers,
    create_admin,
    create_member_account,
    create_seller_account,
    create_steward_account,
)

pytestmark = pytest.mark.integration


class TestMarketplaceGuard:
    async def test_anonymous_caller(self, client: AsyncClient):
        response = await client.get("/api/v1/stewards/marketplace")

        assert response.status_code == 401
        assert response.json()["code"] == "UNAUTHENTICATED"

    async def test_malformed_token(self, client: AsyncClient):
        response = await client.get(
            "/api/v1/stewards/marketplace", headers={"Authorization": "Bearer garbage"}
        )

        assert response.status_code == 401

    async def test_account_without_member(self, client: AsyncClient, db_session: AsyncSession):
        account = AccountFactory.build()
        db_session.add(account)
        await db_session.commit()

        response = await client.get(
            "/api/v1/stewards/marketplace", headers=account_headers(account)
        )

        assert response.status_code == 403
        assert response.json()["code"] == "MEMBER_PROFILE_REQUIRED"

    async def test_unverified_member(self, client: AsyncClient, db_session: AsyncSession):
        account, _ = await create_member_account(db_session, verified=False)

        response = await client.get(
            "/api/v1/stewards/marketplace", headers=account_headers(account)
        )

        assert response.status_code == 403
        assert response.json()["code"] == "VERIFICATION_REQUIRED"

    async def test_seller_without_member(self, client: AsyncClient, db_session: AsyncSession):
        account, _ = await create_seller_account(db_session)

        response = await client.get(
            "/api/v1/stewards/marketplace", headers=account_headers(account)
        )

        assert response.status_code == 403
        assert response.json()["code"] == "MEMBER_PROFILE_REQUIRED"

    async def test_verified_member(self, client: AsyncClient, db_session: AsyncSession):
        account, _ = await create_member_account(db_session, verified=True)

        response = await client.get(
            "/api/v1/stewards/marketplace", headers=account_headers(account)
        )

        assert response.status_code == 200
        assert response.json() == {"items": [], "next_cursor": None, "has_more": False}


class TestStewardGuard:
    async def test_member_is_not_a_steward(self, client: AsyncClient, db_session: AsyncSession):
        account, _ = await create_member_account(db_session, verified=True)

        response = await client.get("/api/v1/stewards/listings", headers=account_headers(account))

        assert response.status_code == 403
        assert response.json()["code"] == "STEWARD_REQUIRED"

    async def test_steward_persona_with_missing_profile(
        self, client: AsyncClient, db_session: AsyncSession
    ):
        account = AccountFactory.bound_to(ProfileKind.STEWARD, StewardFactory.build().id)
        db_session.add(account)
        await db_session.commit()

        response = await client.get("/api/v1/stewards/profile", headers=account_headers(account))

        assert response.status_code == 403
        assert response.json()["code"] == "STEWARD_REQUIRED"

    async def test_admin_without_steward_profile(
        self, client: AsyncClient, db_session: AsyncSession
    ):
        admin = await create_admin(db_session)

        response = await client.get("/api/v1/stewards/profile", headers=account_headers(admin))

        assert response.status_code == 403
        assert response.json()["code"] == "STEWARD_REQUIRED"

    async def test_steward(self, client: AsyncClient, db_session: AsyncSession):
        account, _, _ = await create_steward_account(db_session)

        response = await client.get("/api/v1/stewards/listings", headers=account_headers(account))

        assert response.status_code == 200
        assert response.json() == []


class TestRoleGuard:
    async def test_products_require_seller_persona(
        self, client: AsyncClient, db_session: AsyncSession
    ):
        account, _ = await create_member_account(db_session, verified=True)

        response = await client.post(
            "/api/v1/products",
            json={"name": "Mug", "price_cents": 1200},
            headers=account_headers(account),
        )

        assert response.status_code == 403
        assert response.json()["code"] == "INSUFFICIENT_ROLE"

    async def test_unregistered_identity_on_guarded_route(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/products",
            json={"name": "Mug", "price_cents": 1200},
            headers=auth_headers("sub-unknown", "unknown@example.com"),
        )

        assert response.status_code == 403
        assert response.json()["code"] == "USER_NOT_REGISTERED"

    async def test_admin_routes_refuse_stewards(
        self, client: AsyncClient, db_session: AsyncSession
    ):
        account, _, _ = await create_steward_account(db_session)

        response = await client.get(
            "/api/v1/admin/members/pending", headers=account_headers(account)
        )

        assert response.status_code == 403
        assert response.json()["code"] == "ADMIN_REQUIRED"
