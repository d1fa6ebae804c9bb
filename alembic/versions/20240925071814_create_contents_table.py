"""Create contents table referencing users (author) and templates.

Revision ID: 20240925071814
Revises: 20240925000000
Create Date: 2024-09-25

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "20240925071814"
down_revision: Union[str, None] = "20240925000000"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "contents",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("slug", sa.String(length=255), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="draft"),
        sa.Column("author_id", sa.Uuid(), nullable=False),
        sa.Column("template_id", sa.Uuid(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint("status IN ('draft', 'published')", name="ck_contents_status"),
        sa.ForeignKeyConstraint(
            ["author_id"], ["users.id"], onupdate="CASCADE", ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["template_id"], ["templates.id"], onupdate="CASCADE", ondelete="SET NULL"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_contents_slug"), "contents", ["slug"], unique=True)
    op.create_index(op.f("ix_contents_author_id"), "contents", ["author_id"], unique=False)
    op.create_index(op.f("ix_contents_template_id"), "contents", ["template_id"], unique=False)
    op.create_index(op.f("ix_contents_deleted_at"), "contents", ["deleted_at"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_contents_deleted_at"), table_name="contents")
    op.drop_index(op.f("ix_contents_template_id"), table_name="contents")
    op.drop_index(op.f("ix_contents_author_id"), table_name="contents")
    op.drop_index(op.f("ix_contents_slug"), table_name="contents")
    op.drop_table("contents")
