"""Initial schema - document, version ledger, access grants, activity log, fired reminders.

Revision ID: 001
Revises:
Create Date: 2026-10-17

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

STATUSES = ("draft", "pending_approval", "approved", "published", "rejected", "archived", "expired")


def upgrade() -> None:
    op.create_table(
        "document",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("title", sa.String(500), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("category", sa.String(255), nullable=False),
        sa.Column("status", sa.String(32), nullable=False),
        sa.Column("current_version", sa.Integer(), nullable=False),
        sa.Column("file_name", sa.String(500), nullable=False),
        sa.Column("file_size", sa.BigInteger(), nullable=False),
        sa.Column("file_type", sa.String(255), nullable=False),
        sa.Column("file_path", sa.Text(), nullable=False),
        sa.Column("created_by", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("expiry_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("custom_notification_days", postgresql.ARRAY(sa.Integer()), nullable=True),
        sa.Column("lock_holder_id", sa.String(255), nullable=True),
        sa.Column("locked_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("tags", postgresql.ARRAY(sa.Text()), nullable=False, server_default="{}"),
        sa.Column("approved_by", sa.String(255), nullable=True),
        sa.Column("approved_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("rejection_reason", sa.Text(), nullable=True),
        sa.Column("last_action", sa.Text(), nullable=True),
        sa.Column("pending_since", sa.DateTime(timezone=True), nullable=True),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint(
            "status IN (" + ", ".join(f"'{s}'" for s in STATUSES) + ")",
            name="ck_document_status",
        ),
        sa.CheckConstraint("current_version >= 1", name="ck_document_current_version"),
        sa.CheckConstraint(
            "(lock_holder_id IS NULL) = (locked_at IS NULL)", name="ck_document_lock"
        ),
    )
    op.create_index("ix_document_status", "document", ["status"])
    op.create_index("ix_document_category", "document", ["category"])
    op.create_index(
        "ix_document_expiry_date",
        "document",
        ["expiry_date"],
        postgresql_where=sa.text("expiry_date IS NOT NULL AND deleted_at IS NULL"),
    )
    op.create_index("ix_document_tags", "document", ["tags"], postgresql_using="gin")

    op.create_table(
        "document_version",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("document_id", sa.UUID(), sa.ForeignKey("document.id", ondelete="CASCADE"), nullable=False),
        sa.Column("version_number", sa.Integer(), nullable=False),
        sa.Column("file_name", sa.String(500), nullable=False),
        sa.Column("file_size", sa.BigInteger(), nullable=False),
        sa.Column("file_type", sa.String(255), nullable=False),
        sa.Column("blob_locator", sa.Text(), nullable=False),
        sa.Column("created_by", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("change_notes", sa.Text(), nullable=True),
    )
    op.create_index(
        "ix_document_version_document_number",
        "document_version",
        ["document_id", "version_number"],
        unique=True,
    )

    op.create_table(
        "document_access",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("document_id", sa.UUID(), sa.ForeignKey("document.id", ondelete="CASCADE"), nullable=False),
        sa.Column("user_id", sa.String(255), nullable=False),
        sa.Column("permission_level", sa.String(32), nullable=False),
        sa.Column("granted_by", sa.String(255), nullable=False),
        sa.Column("granted_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            "permission_level IN ('read', 'write', 'approve', 'admin')",
            name="ck_document_access_level",
        ),
    )
    op.create_index(
        "ix_document_access_document_user", "document_access", ["document_id", "user_id"], unique=True
    )
    op.create_index("ix_document_access_user", "document_access", ["user_id"])

    op.create_table(
        "document_activity",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("document_id", sa.UUID(), sa.ForeignKey("document.id", ondelete="CASCADE"), nullable=False),
        sa.Column("action", sa.String(32), nullable=False),
        sa.Column("actor_id", sa.String(255), nullable=False),
        sa.Column("occurred_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("comment", sa.Text(), nullable=True),
        sa.Column("from_status", sa.String(32), nullable=True),
        sa.Column("to_status", sa.String(32), nullable=True),
        sa.Column("version_number", sa.Integer(), nullable=True),
    )
    op.create_index(
        "ix_document_activity_document_time", "document_activity", ["document_id", "occurred_at"]
    )

    op.create_table(
        "document_notification",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("document_id", sa.UUID(), sa.ForeignKey("document.id", ondelete="CASCADE"), nullable=False),
        sa.Column("due_in_days", sa.Integer(), nullable=False),
        sa.Column("triggered_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index(
        "ix_document_notification_document_days",
        "document_notification",
        ["document_id", "due_in_days"],
        unique=True,
    )


def downgrade() -> None:
    op.drop_table("document_notification")
    op.drop_table("document_activity")
    op.drop_table("document_access")
    op.drop_table("document_version")
    op.drop_table("document")
