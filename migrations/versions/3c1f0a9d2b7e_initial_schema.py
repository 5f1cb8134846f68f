"""initial_schema

Create the schema for the language ranking:
- Users (GitHub identities)
- Languages (seeded catalogue with a denormalized lifetime total)
- Allocations (append-only ledger of monthly point spends)

Revision ID: 3c1f0a9d2b7e
Revises:
Create Date: 2025-01-06 19:12:04.518233

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f0a9d2b7e"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    op.create_table(
        "users",
        sa.Column(
            "id",
            postgresql.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("external_id", sa.String(length=64), nullable=False),
        sa.Column("display_name", sa.String(length=255), nullable=False),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_users_external_id", "users", ["external_id"], unique=True)

    op.create_table(
        "languages",
        sa.Column(
            "id",
            postgresql.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("color", sa.String(length=16), nullable=True),
        sa.Column(
            "is_featured", sa.Boolean(), server_default=sa.text("false"), nullable=False
        ),
        sa.Column(
            "total_points", sa.Integer(), server_default=sa.text("0"), nullable=False
        ),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("total_points >= 0", name="total_points_non_negative"),
    )
    op.create_index("idx_languages_name", "languages", ["name"], unique=True)
    op.create_index(
        "idx_languages_total_points",
        "languages",
        [sa.text("total_points DESC")],
    )

    op.create_table(
        "allocations",
        sa.Column(
            "id",
            postgresql.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("user_id", postgresql.UUID(), nullable=False),
        sa.Column("language_id", postgresql.UUID(), nullable=False),
        sa.Column("points", sa.Integer(), nullable=False),
        sa.Column("period", sa.String(length=7), nullable=False),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["language_id"], ["languages.id"], ondelete="CASCADE"),
        sa.CheckConstraint("points >= 1 AND points <= 5", name="points_in_range"),
    )
    op.create_index(
        "idx_allocations_user_period", "allocations", ["user_id", "period"]
    )
    op.create_index(
        "idx_allocations_language_period", "allocations", ["language_id", "period"]
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_allocations_language_period", table_name="allocations")
    op.drop_index("idx_allocations_user_period", table_name="allocations")
    op.drop_table("allocations")

    op.drop_index("idx_languages_total_points", table_name="languages")
    op.drop_index("idx_languages_name", table_name="languages")
    op.drop_table("languages")

    op.drop_index("idx_users_external_id", table_name="users")
    op.drop_table("users")
