"""Initial identity and verification schema

Revision ID: 001
Revises:
Create Date: 2026-09-01 00:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB

from alembic import op

revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

REGISTERED = sa.text("registration_status <> 'DRAFT'")
ACTIVE = sa.text("status <> 'REJECTED'")


def _profile_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("sponsoring_chapter_id", sa.Integer(), nullable=True),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="PENDING"),
        sa.Column("payment_account_id", sa.String(length=255), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "accounts",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("external_subject", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("persona", sa.String(length=20), nullable=False, server_default="GUEST"),
        sa.Column("profile_kind", sa.String(length=20), nullable=True),
        sa.Column("profile_id", sa.Uuid(), nullable=True),
        sa.Column(
            "onboarding_status",
            sa.String(length=30),
            nullable=False,
            server_default="PRE_COGNITO",
        ),
        sa.Column("features", JSONB(), nullable=False, server_default="{}"),
        sa.Column("last_login", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "(profile_kind IS NULL) = (profile_id IS NULL)",
            name="ck_accounts_profile_ref_pair",
        ),
        sa.CheckConstraint(
            "(persona = 'ADMIN' AND profile_kind IS NULL)"
            " OR (persona = 'GUEST' AND (profile_kind IS NULL OR profile_kind = 'MEMBER'))"
            " OR (persona IN ('SELLER', 'PROMOTER', 'STEWARD')"
            " AND profile_kind IS NOT NULL AND profile_kind = persona)",
            name="ck_accounts_persona_profile",
        ),
    )
    op.create_index("ix_accounts_external_subject", "accounts", ["external_subject"], unique=True)
    op.create_index("ix_accounts_email", "accounts", ["email"], unique=True)
    op.create_index("ix_accounts_profile_id", "accounts", ["profile_id"])

    op.create_table(
        "members",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("external_subject", sa.String(length=255), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("membership_number", sa.String(length=50), nullable=True),
        sa.Column("initiated_chapter_id", sa.Integer(), nullable=True),
        sa.Column("initiated_season", sa.String(length=20), nullable=True),
        sa.Column("initiated_year", sa.Integer(), nullable=True),
        sa.Column("ship_name", sa.String(length=255), nullable=True),
        sa.Column("line_name", sa.String(length=255), nullable=True),
        sa.Column("location", sa.String(length=255), nullable=True),
        sa.Column("address", sa.String(length=500), nullable=True),
        sa.Column("address_is_private", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("phone_number", sa.String(length=50), nullable=True),
        sa.Column("phone_is_private", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("industry", sa.String(length=255), nullable=True),
        sa.Column("profession_id", sa.Integer(), nullable=True),
        sa.Column("job_title", sa.String(length=255), nullable=True),
        sa.Column("bio", sa.String(length=5000), nullable=True),
        sa.Column("social_links", JSONB(), nullable=False, server_default="{}"),
        sa.Column("headshot_url", sa.String(length=1000), nullable=True),
        sa.Column(
            "registration_status", sa.String(length=20), nullable=False, server_default="DRAFT"
        ),
        sa.Column(
            "verification_status", sa.String(length=20), nullable=False, server_default="PENDING"
        ),
        sa.Column("verification_date", sa.DateTime(), nullable=True),
        sa.Column("verification_notes", sa.String(length=2000), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_members_external_subject", "members", ["external_subject"], unique=True)
    op.create_index("ix_members_email", "members", ["email"])
    op.create_index("ix_members_membership_number", "members", ["membership_number"])
    # Uniqueness applies to registered rows only; drafts are resumable
    op.create_index(
        "uq_members_email_registered",
        "members",
        ["email"],
        unique=True,
        postgresql_where=REGISTERED,
    )
    op.create_index(
        "uq_members_membership_number_registered",
        "members",
        ["membership_number"],
        unique=True,
        postgresql_where=REGISTERED,
    )
    op.create_index(
        "ix_members_verification_created", "members", ["verification_status", "created_at"]
    )

    op.create_table(
        "sellers",
        *_profile_columns(),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("member_id", sa.Uuid(), nullable=True),
        sa.Column("business_name", sa.String(length=255), nullable=True),
        sa.Column("vendor_license_number", sa.String(length=100), nullable=False),
        sa.Column("social_links", JSONB(), nullable=False, server_default="{}"),
        sa.Column("store_logo_url", sa.String(length=1000), nullable=True),
        sa.Column("headshot_url", sa.String(length=1000), nullable=True),
        sa.Column(
            "verification_status", sa.String(length=20), nullable=False, server_default="PENDING"
        ),
        sa.Column("verification_notes", sa.String(length=2000), nullable=True),
        sa.Column("verification_date", sa.DateTime(), nullable=True),
        sa.Column("invitation_token_hash", sa.String(length=255), nullable=True),
        sa.Column("invitation_expires_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["member_id"], ["members.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("invitation_token_hash"),
    )
    op.create_index("ix_sellers_email", "sellers", ["email"])
    op.create_index("ix_sellers_member_id", "sellers", ["member_id"])
    op.create_index(
        "uq_sellers_email_active", "sellers", ["email"], unique=True, postgresql_where=ACTIVE
    )
    op.create_index("ix_sellers_status_created", "sellers", ["status", "created_at"])

    op.create_table(
        "promoters",
        *_profile_columns(),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("membership_number", sa.String(length=50), nullable=True),
        sa.Column("member_id", sa.Uuid(), nullable=True),
        sa.Column("initiated_chapter_id", sa.Integer(), nullable=True),
        sa.Column("social_links", JSONB(), nullable=False, server_default="{}"),
        sa.Column("headshot_url", sa.String(length=1000), nullable=True),
        sa.Column("invitation_token_hash", sa.String(length=255), nullable=True),
        sa.Column("invitation_expires_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["member_id"], ["members.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("invitation_token_hash"),
    )
    op.create_index("ix_promoters_email", "promoters", ["email"])
    op.create_index("ix_promoters_member_id", "promoters", ["member_id"])
    op.create_index(
        "uq_promoters_email_active", "promoters", ["email"], unique=True, postgresql_where=ACTIVE
    )
    op.create_index(
        "uq_promoters_membership_number_active",
        "promoters",
        ["membership_number"],
        unique=True,
        postgresql_where=ACTIVE,
    )
    op.create_index("ix_promoters_status_created", "promoters", ["status", "created_at"])

    op.create_table(
        "stewards",
        *_profile_columns(),
        sa.Column("member_id", sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(["member_id"], ["members.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_stewards_member_id", "stewards", ["member_id"])
    op.create_index(
        "uq_stewards_member_active", "stewards", ["member_id"], unique=True, postgresql_where=ACTIVE
    )
    op.create_index("ix_stewards_status_created", "stewards", ["status", "created_at"])

    op.create_table(
        "products",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("seller_id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.String(length=5000), nullable=True),
        sa.Column("price_cents", sa.Integer(), nullable=False),
        sa.Column("is_kappa_branded", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("image_url", sa.String(length=1000), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["seller_id"], ["sellers.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_products_seller_id", "products", ["seller_id"])

    op.create_table(
        "steward_listings",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("steward_id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.String(length=5000), nullable=True),
        sa.Column("shipping_cost_cents", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("chapter_donation_cents", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="ACTIVE"),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["steward_id"], ["stewards.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_steward_listings_steward_id", "steward_listings", ["steward_id"])
    op.create_index("ix_steward_listings_status", "steward_listings", ["status"])

    op.create_table(
        "audit_logs",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("account_id", sa.Uuid(), nullable=True),
        sa.Column("action", sa.String(length=50), nullable=False),
        sa.Column("entity_type", sa.String(length=20), nullable=False),
        sa.Column("entity_id", sa.Uuid(), nullable=False),
        sa.Column("changes", JSONB(), nullable=False, server_default="{}"),
        sa.Column("request_id", sa.String(length=64), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_audit_logs_entity_created",
        "audit_logs",
        ["entity_type", "entity_id", sa.text("created_at DESC")],
    )
    op.create_index(
        "ix_audit_logs_account_created",
        "audit_logs",
        ["account_id", sa.text("created_at DESC")],
    )


def downgrade() -> None:
    op.drop_table("audit_logs")
    op.drop_table("steward_listings")
    op.drop_table("products")
    op.drop_table("stewards")
    op.drop_table("promoters")
    op.drop_table("sellers")
    op.drop_table("members")
    op.drop_table("accounts")
