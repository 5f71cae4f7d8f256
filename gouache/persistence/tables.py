"""SQLAlchemy table definitions for Gouache activation.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Enum,
    Index,
    MetaData,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# ARTIST INVITES TABLE
# ============================================================================
artist_invites_table = Table(
    "artist_invites",
    metadata,
    Column("token", String(255), primary_key=True),  # URL-safe token, also the id
    Column("email", String(320), nullable=False),  # Stored lowercased
    Column("name", String(255), nullable=True),
    Column("message", Text, nullable=True),
    Column(
        "status",
        Enum(
            "pending",
            "redeemed",
            "revoked",
            "expired",
            name="artist_invite_status",
            create_type=False,
        ),
        nullable=False,
        server_default="pending",
    ),
    Column(
        "issued_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("issued_by", String(255), nullable=True),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=True),
    Column("last_accessed_at", TIMESTAMP(timezone=True), nullable=True),
    Column("redeemed_at", TIMESTAMP(timezone=True), nullable=True),
    Column("redeemed_by", String(255), nullable=True),
    Column("revoked_at", TIMESTAMP(timezone=True), nullable=True),
    CheckConstraint(
        "(status = 'redeemed') = (redeemed_at IS NOT NULL AND redeemed_by IS NOT NULL)",
        name="redeemed_fields_match_status",
    ),
)

Index("idx_artist_invites_email", artist_invites_table.c.email)
Index("idx_artist_invites_status", artist_invites_table.c.status)

# ============================================================================
# PROFILES TABLE (fields onboarding writes)
# ============================================================================
profiles_table = Table(
    "profiles",
    metadata,
    Column("identity_id", String(255), primary_key=True),
    Column("display_name", String(255), nullable=True),
    Column("handle", String(30), nullable=True),
    Column("bio", Text, nullable=True),
    Column("statement", Text, nullable=True),
    Column("location", String(255), nullable=True),
    Column("links", JSONB, nullable=False, server_default="{}"),
    Column("account_role", String(50), nullable=True),
    Column("artist_invite_token", String(255), nullable=True),
    Column("onboarding_completed_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_profiles_handle", profiles_table.c.handle)

# ============================================================================
# ACTIVATION ACCOUNTS TABLE
# ============================================================================
activation_accounts_table = Table(
    "activation_accounts",
    metadata,
    Column("identity_id", String(255), primary_key=True),  # One account per identity
    Column("account_id", String(255), nullable=False, unique=True),  # Processor id
    Column(
        "status",
        Enum(
            "created",
            "incomplete",
            "pending",
            "active",
            "failed",
            name="activation_status",
            create_type=False,
        ),
        nullable=False,
        server_default="created",
    ),
    Column("charges_enabled", Boolean, nullable=False, server_default="false"),
    Column("payouts_enabled", Boolean, nullable=False, server_default="false"),
    Column("details_submitted", Boolean, nullable=False, server_default="false"),
    Column("onboarding_url", Text, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(
        "(status = 'active') = (charges_enabled AND payouts_enabled)",
        name="active_requires_both_flags",
    ),
)
