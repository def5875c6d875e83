"""TaskListMember ORM — one row per (task list, collaborator).

Invariants:
    - (task_list_id, user_id) is unique: the collaborator set has no duplicates
    - Autoincrement id orders the set; the creator's row is always first

Design Decisions:
    - Join table over an array column: the unique constraint lets
      INSERT ... ON CONFLICT DO NOTHING act as an atomic add-to-set
"""

import uuid

from sqlalchemy import ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from taskshare.db.base import Base


class TaskListMember(Base):
    __tablename__ = "task_list_members"
    __table_args__ = (
        UniqueConstraint(
            "task_list_id", "user_id", name="uq_task_list_members_list_user",
        ),
    )

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    task_list_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("task_lists.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
