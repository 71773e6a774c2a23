"""initial schema

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "dealer_signups",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("dealership_name", sa.String(length=255), nullable=False),
        sa.Column("dealership_phone", sa.String(length=255), nullable=False),
        sa.Column("dealership_lead_email", sa.Text(), nullable=False),
        sa.Column("dealership_billing_email", sa.Text(), nullable=False),
        sa.Column("dealership_website", sa.String(length=512), nullable=False),
        sa.Column("dealership_additional_websites", sa.Text(), nullable=True),
        sa.Column("dealership_domain", sa.String(length=255), nullable=False),
        sa.Column("dealership_country", sa.String(length=2), nullable=False),
        sa.Column("dealer_group_domain", sa.String(length=255), nullable=True),
        sa.Column("contact_full_name", sa.String(length=255), nullable=False),
        sa.Column("contact_email", sa.String(length=255), nullable=False),
        sa.Column("contact_phone", sa.String(length=255), nullable=False),
        sa.Column("dealership_providers", sa.JSON(), nullable=False),
        sa.Column("lead_option", sa.String(length=64), nullable=True),
        sa.Column("agent_id", sa.String(length=64), nullable=True),
        sa.Column("provisioned_email", sa.String(length=255), nullable=True),
        sa.Column("email_verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("verified_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("verification_hash", sa.String(length=255), nullable=True),
        sa.Column("verification_expires_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index(op.f("ix_dealer_signups_contact_email"), "dealer_signups", ["contact_email"], unique=True)
    op.create_index(op.f("ix_dealer_signups_dealership_domain"), "dealer_signups", ["dealership_domain"], unique=True)
    # Lookups compare lower(contact_email).
    op.create_index(
        "ix_dealer_signups_contact_email_lower",
        "dealer_signups",
        [sa.text("lower(contact_email)")],
        unique=True,
    )

    op.create_table(
        "dealer_groups",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column("type", sa.String(length=32), nullable=False),
        sa.Column("dealer_group_name", sa.String(length=255), nullable=False),
        sa.Column("dealer_group_website", sa.String(length=255), nullable=False),
        sa.Column("dealer_group_country", sa.String(length=2), nullable=True),
        sa.Column("user_created", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index(op.f("ix_dealer_groups_dealer_group_name"), "dealer_groups", ["dealer_group_name"], unique=False)
    op.create_index(op.f("ix_dealer_groups_dealer_group_website"), "dealer_groups", ["dealer_group_website"], unique=False)

    op.create_table(
        "agents",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column("agent_id", sa.String(length=64), nullable=False),
        sa.Column("agency", sa.String(length=255), nullable=True),
        sa.Column("first_name", sa.String(length=255), nullable=True),
        sa.Column("last_name", sa.String(length=255), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("phone", sa.String(length=64), nullable=True),
        sa.Column("disabled_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index(op.f("ix_agents_agent_id"), "agents", ["agent_id"], unique=True)

    op.create_table(
        "lenders",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column("code", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("country", sa.String(length=2), nullable=True),
        sa.Column("filenames", sa.JSON(), nullable=False),
        sa.Column("mapping", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index(op.f("ix_lenders_code"), "lenders", ["code"], unique=False)
    op.create_index(op.f("ix_lenders_name"), "lenders", ["name"], unique=False)

    op.create_table(
        "inventory_listings",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column("country", sa.String(length=2), nullable=False),
        sa.Column("vin", sa.String(length=32), nullable=True),
        sa.Column("listing_vdp_url", sa.String(length=1024), nullable=True),
        sa.Column("va_seller_id", sa.String(length=64), nullable=True),
        sa.Column("va_seller_name", sa.String(length=255), nullable=True),
        sa.Column("va_seller_address", sa.String(length=255), nullable=True),
        sa.Column("va_seller_city", sa.String(length=255), nullable=True),
        sa.Column("va_seller_county", sa.String(length=255), nullable=True),
        sa.Column("va_seller_state", sa.String(length=64), nullable=True),
        sa.Column("va_seller_zip", sa.String(length=32), nullable=True),
        sa.Column("va_seller_country", sa.String(length=64), nullable=True),
        sa.Column("va_seller_websites", sa.String(length=1024), nullable=True),
        sa.Column("va_seller_domains", sa.String(length=255), nullable=True),
        sa.Column("va_seller_phones", sa.String(length=255), nullable=True),
        sa.Column("va_seller_type", sa.String(length=64), nullable=True),
        sa.Column("va_seller_makes", sa.String(length=1024), nullable=True),
        sa.Column("va_seller_latitude", sa.Float(), nullable=True),
        sa.Column("va_seller_longitude", sa.Float(), nullable=True),
    )
    op.create_index(op.f("ix_inventory_listings_country"), "inventory_listings", ["country"], unique=False)
    op.create_index(
        op.f("ix_inventory_listings_va_seller_domains"),
        "inventory_listings",
        ["va_seller_domains"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index(op.f("ix_inventory_listings_va_seller_domains"), table_name="inventory_listings")
    op.drop_index(op.f("ix_inventory_listings_country"), table_name="inventory_listings")
    op.drop_table("inventory_listings")
    op.drop_index(op.f("ix_lenders_name"), table_name="lenders")
    op.drop_index(op.f("ix_lenders_code"), table_name="lenders")
    op.drop_table("lenders")
    op.drop_index(op.f("ix_agents_agent_id"), table_name="agents")
    op.drop_table("agents")
    op.drop_index(op.f("ix_dealer_groups_dealer_group_website"), table_name="dealer_groups")
    op.drop_index(op.f("ix_dealer_groups_dealer_group_name"), table_name="dealer_groups")
    op.drop_table("dealer_groups")
    op.drop_index("ix_dealer_signups_contact_email_lower", table_name="dealer_signups")
    op.drop_index(op.f("ix_dealer_signups_dealership_domain"), table_name="dealer_signups")
    op.drop_index(op.f("ix_dealer_signups_contact_email"), table_name="dealer_signups")
    op.drop_table("dealer_signups")
