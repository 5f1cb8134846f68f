"""SQLAlchemy table definitions for the language ranking.

These Core tables are used by the repositories for queries. They match the
schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("external_id", String(64), nullable=False),  # GitHub account ID
    Column("display_name", String(255), nullable=False),  # GitHub login
    Column("avatar_url", Text, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_users_external_id", users_table.c.external_id, unique=True)

# ============================================================================
# LANGUAGES TABLE (seeded catalog)
# ============================================================================
languages_table = Table(
    "languages",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("name", String(100), nullable=False),
    Column("description", Text, nullable=True),
    Column("color", String(16), nullable=True),
    Column("is_featured", Boolean, nullable=False, server_default="false"),
    # Denormalized lifetime total, rewritten from allocations on every vote
    Column("total_points", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("total_points >= 0", name="total_points_non_negative"),
)

Index("idx_languages_name", languages_table.c.name, unique=True)
Index("idx_languages_total_points", languages_table.c.total_points.desc())

# ============================================================================
# ALLOCATIONS TABLE (append-only ledger)
# ============================================================================
# No unique constraint on (user_id, language_id, period): top-ups insert
# additional rows.
allocations_table = Table(
    "allocations",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column(
        "language_id",
        UUID,
        ForeignKey("languages.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("points", Integer, nullable=False),
    Column("period", String(7), nullable=False),  # YYYY-MM
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("points >= 1 AND points <= 5", name="points_in_range"),
)

Index("idx_allocations_user_period", allocations_table.c.user_id, allocations_table.c.period)
Index(
    "idx_allocations_language_period",
    allocations_table.c.language_id,
    allocations_table.c.period,
)
