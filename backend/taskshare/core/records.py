"""Store Records — typed, immutable shapes for everything read from the store.

Invariants:
    - Repositories map ORM rows to these records at the boundary; services
      never touch ORM objects or undeclared fields
    - TaskListRecord.collaborator_ids is ordered, duplicate-free, creator first
    - UserRecord.password_hash is a bcrypt digest, never plaintext

Design Decisions:
    - frozen dataclasses: a record is a snapshot, changes go through the store
    - created_at kept as the ISO-8601 string written at creation
"""

from dataclasses import dataclass, replace

from taskshare.core.domain_types import UserId, TaskListId, ToDoId


@dataclass(frozen=True)
class UserRecord:
    id: UserId
    email: str
    password_hash: str
    name: str
    avatar: str | None = None


@dataclass(frozen=True)
class TaskListRecord:
    id: TaskListId
    title: str
    created_at: str
    collaborator_ids: tuple[UserId, ...] = ()

    def has_member(self, user_id: UserId) -> bool:
        return user_id in self.collaborator_ids

    def with_member(self, user_id: UserId) -> "TaskListRecord":
        """Copy with user_id appended to the collaborator set (no-op if present)."""
        if self.has_member(user_id):
            return self
        return replace(
            self, collaborator_ids=(*self.collaborator_ids, user_id),
        )


@dataclass(frozen=True)
class ToDoRecord:
    id: ToDoId
    task_list_id: TaskListId
    content: str
    is_completed: bool
    created_at: str
