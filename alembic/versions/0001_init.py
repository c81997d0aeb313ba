"""init

Revision ID: 0001_init
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None

JSONType = sa.JSON().with_variant(postgresql.JSONB(astext_type=sa.Text()), "postgresql")


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "projects",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_projects_name", "projects", ["name"])

    op.create_table(
        "tutorials",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column(
            "project_id", sa.Integer(), sa.ForeignKey("projects.id", ondelete="CASCADE"), nullable=False
        ),
        *_timestamps(),
    )
    op.create_index("ix_tutorials_project_id", "tutorials", ["project_id"])

    op.create_table(
        "articles",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("content", JSONType, nullable=True),
        sa.Column(
            "project_id", sa.Integer(), sa.ForeignKey("projects.id", ondelete="CASCADE"), nullable=False
        ),
        *_timestamps(),
    )
    op.create_index("ix_articles_project_id", "articles", ["project_id"])

    op.create_table(
        "steps",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("title", sa.String(length=255), nullable=True),
        sa.Column("order", sa.Integer(), nullable=True),
        sa.Column("content", JSONType, nullable=True),
        sa.Column(
            "tutorial_id", sa.Integer(), sa.ForeignKey("tutorials.id", ondelete="CASCADE"), nullable=False
        ),
        *_timestamps(),
    )
    op.create_index("ix_steps_tutorial_id", "steps", ["tutorial_id"])
    op.create_index("ix_steps_tutorial_order", "steps", ["tutorial_id", "order"])


def downgrade() -> None:
    op.drop_index("ix_steps_tutorial_order", table_name="steps")
    op.drop_index("ix_steps_tutorial_id", table_name="steps")
    op.drop_table("steps")
    op.drop_index("ix_articles_project_id", table_name="articles")
    op.drop_table("articles")
    op.drop_index("ix_tutorials_project_id", table_name="tutorials")
    op.drop_table("tutorials")
    op.drop_index("ix_projects_name", table_name="projects")
    op.drop_table("projects")
