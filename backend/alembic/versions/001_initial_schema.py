"""Initial schema — users, task_lists, task_list_members, todos.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("password_hash", sa.String(128), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("avatar", sa.String(2048), nullable=True),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "task_lists",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("title", sa.Text, nullable=False),
        sa.Column("created_at", sa.String(40), nullable=False),
    )

    op.create_table(
        "task_list_members",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "task_list_id", UUID(as_uuid=True),
            sa.ForeignKey("task_lists.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column(
            "user_id", UUID(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.UniqueConstraint(
            "task_list_id", "user_id", name="uq_task_list_members_list_user",
        ),
    )
    op.create_index(
        "ix_task_list_members_task_list_id", "task_list_members", ["task_list_id"],
    )
    op.create_index(
        "ix_task_list_members_user_id", "task_list_members", ["user_id"],
    )

    op.create_table(
        "todos",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "task_list_id", UUID(as_uuid=True),
            sa.ForeignKey("task_lists.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("content", sa.Text, nullable=False),
        sa.Column("is_completed", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.String(40), nullable=False),
    )
    op.create_index("ix_todos_task_list_id", "todos", ["task_list_id"])


def downgrade() -> None:
    op.drop_index("ix_todos_task_list_id", table_name="todos")
    op.drop_table("todos")
    op.drop_index("ix_task_list_members_user_id", table_name="task_list_members")
    op.drop_index("ix_task_list_members_task_list_id", table_name="task_list_members")
    op.drop_table("task_list_members")
    op.drop_table("task_lists")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
