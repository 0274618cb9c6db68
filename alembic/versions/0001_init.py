"""tasks, posts and saved views
Revision ID: 0001_init
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa

revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None

TASK_STATUSES = "'todo', 'in-progress', 'done', 'canceled'"


def upgrade():
    op.create_table(
        "tasks",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True, server_default=sa.func.now()),
        sa.Column("code", sa.String(length=256), nullable=False, unique=True),
        sa.Column("title", sa.String(length=256), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=False, server_default="todo"),
        sa.Column("label", sa.String(length=32), nullable=False, server_default="bug"),
        sa.Column("priority", sa.String(length=32), nullable=False, server_default="low"),
        sa.CheckConstraint(f"status IN ({TASK_STATUSES})", name="ck_tasks_status"),
        sa.CheckConstraint("label IN ('bug', 'feature', 'enhancement', 'documentation')", name="ck_tasks_label"),
        sa.CheckConstraint("priority IN ('low', 'medium', 'high')", name="ck_tasks_priority"),
    )
    op.create_index("ix_tasks_created_at", "tasks", ["created_at"])

    op.create_table(
        "posts",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True, server_default=sa.func.now()),
        sa.Column("title", sa.String(length=256), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False, server_default="in-progress"),
        sa.Column("author", sa.Text(), nullable=False),
        sa.Column("nb_comments", sa.Integer(), nullable=False, server_default="0"),
        sa.CheckConstraint(f"status IN ({TASK_STATUSES})", name="ck_posts_status"),
    )
    op.create_index("ix_posts_created_at", "posts", ["created_at"])

    op.create_table(
        "views",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True, server_default=sa.func.now()),
        sa.Column("name", sa.Text(), nullable=False, unique=True),
        sa.Column("columns", sa.JSON(), nullable=True),
        sa.Column("filter_params", sa.JSON(), nullable=True),
    )


def downgrade():
    op.drop_table("views")
    op.drop_index("ix_posts_created_at", table_name="posts")
    op.drop_table("posts")
    op.drop_index("ix_tasks_created_at", table_name="tasks")
    op.drop_table("tasks")
