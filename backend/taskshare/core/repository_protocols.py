"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All store IO accessed through Protocol types returning records
    - Implementations provided by shell via dependency injection (RequestContext)

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - add_member is the store's atomic "append if absent" primitive; callers
      never implement check-then-write membership updates themselves
"""

from typing import Protocol, Sequence

from taskshare.core.domain_types import UserId, TaskListId, ToDoId
from taskshare.core.records import UserRecord, TaskListRecord, ToDoRecord


class UserRepository(Protocol):
    """Contract for user persistence — implemented by shell."""
    async def create(
        self, email: str, password_hash: str, name: str, avatar: str | None,
    ) -> UserRecord: ...
    async def get(self, user_id: UserId) -> UserRecord | None: ...
    async def get_by_email(self, email: str) -> UserRecord | None: ...
    async def get_many(self, user_ids: Sequence[UserId]) -> list[UserRecord]: ...


class TaskListRepository(Protocol):
    """Contract for task list + collaborator-set persistence — implemented by shell."""
    async def create(
        self, title: str, created_at: str, creator_id: UserId,
    ) -> TaskListRecord: ...
    async def get(self, task_list_id: TaskListId) -> TaskListRecord | None: ...
    async def list_for_member(self, user_id: UserId) -> list[TaskListRecord]: ...
    async def update_title(self, task_list_id: TaskListId, title: str) -> None: ...
    async def delete(self, task_list_id: TaskListId) -> None: ...
    async def add_member(self, task_list_id: TaskListId, user_id: UserId) -> bool: ...


class ToDoRepository(Protocol):
    """Contract for to-do persistence — implemented by shell."""
    async def create(
        self, task_list_id: TaskListId, content: str, created_at: str,
    ) -> ToDoRecord: ...
    async def get(self, todo_id: ToDoId) -> ToDoRecord | None: ...
    async def list_for_task_list(self, task_list_id: TaskListId) -> list[ToDoRecord]: ...
    async def update(
        self, todo_id: ToDoId, content: str | None, is_completed: bool | None,
    ) -> ToDoRecord | None: ...
    async def delete(self, todo_id: ToDoId) -> None: ...
