"""Membership Projection — shapes records into public output models.

Invariants:
    - derive_users preserves collaborator-set order
    - Collaborator ids without a matching user are dropped (and logged),
      never returned as null entries and never abort the projection
    - derive_progress delegates to the configured strategy; result in [0, 1]
    - Output never includes password digests
"""

import logging

from taskshare.core.domain_types import Progress
from taskshare.core.records import TaskListRecord, ToDoRecord, UserRecord
from taskshare.infrastructure.observability import log_fields
from taskshare.schemas.outputs import AuthPayloadOut, TaskListOut, ToDoOut, UserOut
from taskshare.services.handle_auth import AuthResult
from taskshare.services.request_context import RequestContext

logger = logging.getLogger(__name__)


class MembershipProjection:
    def __init__(self, ctx: RequestContext):
        self.ctx = ctx

    async def derive_users(self, task_list: TaskListRecord) -> list[UserRecord]:
        """One batched lookup for all collaborator ids; same result as a lookup per id
        (collaborator order kept, unknown ids dropped) without N round trips."""
        users = await self.ctx.users.get_many(task_list.collaborator_ids)
        if len(users) != len(task_list.collaborator_ids):
            found = {u.id for u in users}
            missing = [str(uid) for uid in task_list.collaborator_ids if uid not in found]
            logger.warning(
                f"Dropping unresolvable collaborator ids: {missing}",
                extra=log_fields(task_list_id=task_list.id),
            )
        return users

    async def derive_progress(
        self, task_list: TaskListRecord, todos: list[ToDoRecord] | None = None,
    ) -> Progress:
        if todos is None:
            todos = await self.ctx.todos.list_for_task_list(task_list.id)
        return self.ctx.progress_strategy(todos)

    # ─── Presenters (record → JSON-ready dict) ───────────────────

    @staticmethod
    def _user_out(user: UserRecord) -> UserOut:
        return UserOut(id=user.id, name=user.name, email=user.email, avatar=user.avatar)

    @staticmethod
    def _todo_out(todo: ToDoRecord) -> ToDoOut:
        return ToDoOut(
            id=todo.id,
            content=todo.content,
            is_completed=todo.is_completed,
            task_list_id=todo.task_list_id,
        )

    async def _task_list_out(self, task_list: TaskListRecord) -> TaskListOut:
        todos = await self.ctx.todos.list_for_task_list(task_list.id)
        users = await self.derive_users(task_list)
        return TaskListOut(
            id=task_list.id,
            created_at=task_list.created_at,
            title=task_list.title,
            progress=await self.derive_progress(task_list, todos),
            users=[self._user_out(u) for u in users],
            todos=[self._todo_out(t) for t in todos],
        )

    async def present_task_list(self, task_list: TaskListRecord | None) -> dict | None:
        if task_list is None:
            return None
        out = await self._task_list_out(task_list)
        return out.model_dump(by_alias=True, mode="json")

    async def present_task_lists(self, task_lists: list[TaskListRecord]) -> list[dict]:
        return [await self.present_task_list(t) for t in task_lists]

    async def present_todo(self, todo: ToDoRecord | None) -> dict | None:
        if todo is None:
            return None
        return self._todo_out(todo).model_dump(by_alias=True, mode="json")

    async def present_auth(self, result: AuthResult) -> dict:
        out = AuthPayloadOut(user=self._user_out(result.user), token=result.token)
        return out.model_dump(by_alias=True, mode="json")

    async def present_scalar(self, value: bool) -> bool:
        return value
