"""initial_schema

Create the schema for artist activation:
- Artist invites (single-use, email-bound)
- Profiles (fields written when onboarding completes)
- Activation accounts (one payment processor account per identity)

Revision ID: 3c1f0a9d7e42
Revises:
Create Date: 2026-09-28 14:05:12.412083

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f0a9d7e42"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # Create ENUM types (idempotent)
    op.execute("""
        DO $$ BEGIN
            CREATE TYPE artist_invite_status AS ENUM
                ('pending', 'redeemed', 'revoked', 'expired');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    op.execute("""
        DO $$ BEGIN
            CREATE TYPE activation_status AS ENUM
                ('created', 'incomplete', 'pending', 'active', 'failed');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    # ========================================================================
    # ARTIST INVITES table
    # ========================================================================
    op.create_table(
        "artist_invites",
        sa.Column("token", sa.String(255), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),  # Stored lowercased
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("message", sa.Text(), nullable=True),
        sa.Column(
            "status",
            postgresql.ENUM(name="artist_invite_status", create_type=False),
            nullable=False,
            server_default="pending",
        ),
        sa.Column(
            "issued_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column("issued_by", sa.String(255), nullable=True),
        sa.Column("expires_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("last_accessed_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("redeemed_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("redeemed_by", sa.String(255), nullable=True),
        sa.Column("revoked_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("token"),
        sa.CheckConstraint(
            "(status = 'redeemed') = "
            "(redeemed_at IS NOT NULL AND redeemed_by IS NOT NULL)",
            name="redeemed_fields_match_status",
        ),
    )
    op.create_index("idx_artist_invites_email", "artist_invites", ["email"])
    op.create_index("idx_artist_invites_status", "artist_invites", ["status"])

    # ========================================================================
    # PROFILES table
    # ========================================================================
    op.create_table(
        "profiles",
        sa.Column("identity_id", sa.String(255), nullable=False),
        sa.Column("display_name", sa.String(255), nullable=True),
        sa.Column("handle", sa.String(30), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("statement", sa.Text(), nullable=True),
        sa.Column("location", sa.String(255), nullable=True),
        sa.Column(
            "links",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        sa.Column("account_role", sa.String(50), nullable=True),
        sa.Column("artist_invite_token", sa.String(255), nullable=True),
        sa.Column(
            "onboarding_completed_at", sa.TIMESTAMP(timezone=True), nullable=True
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("identity_id"),
    )
    op.create_index("idx_profiles_handle", "profiles", ["handle"])

    # ========================================================================
    # ACTIVATION ACCOUNTS table
    # ========================================================================
    op.create_table(
        "activation_accounts",
        sa.Column("identity_id", sa.String(255), nullable=False),
        sa.Column("account_id", sa.String(255), nullable=False),
        sa.Column(
            "status",
            postgresql.ENUM(name="activation_status", create_type=False),
            nullable=False,
            server_default="created",
        ),
        sa.Column(
            "charges_enabled", sa.Boolean(), nullable=False, server_default="false"
        ),
        sa.Column(
            "payouts_enabled", sa.Boolean(), nullable=False, server_default="false"
        ),
        sa.Column(
            "details_submitted", sa.Boolean(), nullable=False, server_default="false"
        ),
        sa.Column("onboarding_url", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("identity_id"),  # One account per identity
        sa.UniqueConstraint("account_id"),
        sa.CheckConstraint(
            "(status = 'active') = (charges_enabled AND payouts_enabled)",
            name="active_requires_both_flags",
        ),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("activation_accounts")
    op.drop_table("profiles")
    op.drop_table("artist_invites")

    # Drop ENUM types
    op.execute("DROP TYPE IF EXISTS activation_status")
    op.execute("DROP TYPE IF EXISTS artist_invite_status")
