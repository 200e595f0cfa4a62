"""baseline company-scoped outreach schema

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19 00:00:01
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


def _audit_columns() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def _company_column() -> sa.Column:
    return sa.Column(
        "company_id",
        sa.Integer(),
        sa.ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
    )


def upgrade() -> None:
    op.create_table(
        "companies",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("industry", sa.String(length=120), nullable=True),
        sa.Column("website", sa.String(length=500), nullable=True),
        sa.Column("subscription_tier", sa.String(length=12), nullable=False, server_default="starter"),
        sa.Column("subscription_status", sa.String(length=8), nullable=False, server_default="trial"),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "user_profiles",
        sa.Column("id", sa.Integer(), nullable=False),
        _company_column(),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("full_name", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=20), nullable=False, server_default="rep"),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )
    op.create_index("ix_user_profiles_company_id", "user_profiles", ["company_id"])
    op.create_index("idx_user_profiles_company_role", "user_profiles", ["company_id", "role"])

    op.create_table(
        "campaigns",
        sa.Column("id", sa.Integer(), nullable=False),
        _company_column(),
        sa.Column("created_by", sa.Integer(), sa.ForeignKey("user_profiles.id", ondelete="SET NULL"), nullable=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="draft"),
        sa.Column("target_criteria", sa.JSON(), nullable=False),
        sa.Column("message_template", sa.Text(), nullable=False),
        sa.Column("ai_personalization_enabled", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("ai_tone", sa.String(length=20), nullable=False, server_default="professional"),
        sa.Column("ai_max_length", sa.Integer(), nullable=False, server_default="800"),
        sa.Column("daily_contact_limit", sa.Integer(), nullable=False, server_default="20"),
        sa.Column("started_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_campaigns_company_id", "campaigns", ["company_id"])
    op.create_index("idx_campaigns_company_status", "campaigns", ["company_id", "status"])

    op.create_table(
        "prospects",
        sa.Column("id", sa.Integer(), nullable=False),
        _company_column(),
        sa.Column("campaign_id", sa.Integer(), sa.ForeignKey("campaigns.id", ondelete="SET NULL"), nullable=True),
        sa.Column("linkedin_url", sa.String(length=500), nullable=True),
        sa.Column("external_contact_id", sa.String(length=120), nullable=True),
        sa.Column("first_name", sa.String(length=120), nullable=False, server_default=""),
        sa.Column("last_name", sa.String(length=120), nullable=False, server_default=""),
        sa.Column("full_name", sa.String(length=255), nullable=False, server_default=""),
        sa.Column("title", sa.String(length=255), nullable=True),
        sa.Column("company", sa.String(length=255), nullable=True),
        sa.Column("industry", sa.String(length=120), nullable=True),
        sa.Column("location", sa.String(length=255), nullable=True),
        sa.Column("email", sa.String(length=320), nullable=True),
        sa.Column("phone", sa.String(length=60), nullable=True),
        sa.Column("headline", sa.String(length=500), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("status", sa.String(length=30), nullable=False, server_default="new"),
        sa.Column("assigned_to", sa.Integer(), sa.ForeignKey("user_profiles.id", ondelete="SET NULL"), nullable=True),
        sa.Column("last_contacted_at", sa.DateTime(timezone=True), nullable=True),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("campaign_id", "linkedin_url", name="uq_prospects_campaign_linkedin_url"),
    )
    op.create_index("ix_prospects_company_id", "prospects", ["company_id"])
    op.create_index("ix_prospects_campaign_id", "prospects", ["campaign_id"])
    op.create_index("idx_prospects_company_status", "prospects", ["company_id", "status"])
    op.create_index("idx_prospects_company_assignee", "prospects", ["company_id", "assigned_to"])

    op.create_table(
        "messages",
        sa.Column("id", sa.Integer(), nullable=False),
        _company_column(),
        sa.Column("prospect_id", sa.Integer(), sa.ForeignKey("prospects.id", ondelete="CASCADE"), nullable=False),
        sa.Column("campaign_id", sa.Integer(), sa.ForeignKey("campaigns.id", ondelete="SET NULL"), nullable=True),
        sa.Column("subject", sa.String(length=255), nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("variations", sa.JSON(), nullable=True),
        sa.Column("message_type", sa.String(length=30), nullable=False, server_default="connection_request"),
        sa.Column("sent_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("sent_by", sa.Integer(), sa.ForeignKey("user_profiles.id", ondelete="SET NULL"), nullable=True),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_messages_company_id", "messages", ["company_id"])
    op.create_index("idx_messages_company_sent_at", "messages", ["company_id", "sent_at"])
    op.create_index("idx_messages_prospect", "messages", ["prospect_id"])


def downgrade() -> None:
    op.drop_table("messages")
    op.drop_table("prospects")
    op.drop_table("campaigns")
    op.drop_table("user_profiles")
    op.drop_table("companies")
