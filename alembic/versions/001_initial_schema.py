"""Initial schema - permission, permission_code, trigger.

Revision ID: 001
Revises:
Create Date: 2026-10-17

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "permission",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("rev", sa.String(64), nullable=False),
        sa.Column("type", sa.String(16), nullable=False),
        sa.Column("source_id", sa.String(255), nullable=False),
        sa.Column("permissions", JSONB(), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("codes", JSONB(), nullable=False, server_default=sa.text("'{}'::jsonb")),
        sa.CheckConstraint(
            "type IN ('register', 'app', 'share', 'oauth')", name="ck_permission_type"
        ),
    )
    op.create_index("ix_permission_source_type", "permission", ["source_id", "type"])
    # At most one app permission per source: makes create-if-absent atomic
    op.create_index(
        "ux_permission_app_source",
        "permission",
        ["source_id"],
        unique=True,
        postgresql_where=sa.text("type = 'app'"),
    )

    op.create_table(
        "permission_code",
        sa.Column(
            "permission_id",
            sa.String(64),
            sa.ForeignKey("permission.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("key", sa.String(255), primary_key=True),
        sa.Column("code", sa.String(255), nullable=False),
    )
    # Not unique: duplicates must stay visible so lookups can report them
    op.create_index("ix_permission_code_code", "permission_code", ["code"])

    op.create_table(
        "trigger",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("type", sa.String(32), nullable=False),
        sa.Column("worker_type", sa.String(64), nullable=False),
        sa.Column("domain", sa.String(255), nullable=False),
        sa.Column("arguments", sa.Text(), nullable=False),
        sa.Column("message", JSONB(), nullable=False),
        sa.Column("options", JSONB(), nullable=False, server_default=sa.text("'{}'::jsonb")),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_trigger_worker_type", "trigger", ["worker_type"])


def downgrade() -> None:
    op.drop_table("trigger")
    op.drop_table("permission_code")
    op.drop_table("permission")
