"""To-Do Handlers — create, update, delete items of a task list (3 methods).

Invariants:
    - Every method calls require_user first
    - Access to a to-do requires membership of its task list
    - create on an unknown list returns None; update on an unknown to-do
      raises ResourceNotFoundError; delete is idempotent and returns True
"""

import logging
from datetime import datetime, timezone

from taskshare.core.authorization import require_member, require_user
from taskshare.core.domain_types import GuardedAction
from taskshare.core.errors import ResourceNotFoundError
from taskshare.core.records import ToDoRecord
from taskshare.infrastructure.observability import log_fields
from taskshare.schemas.operations import (
    CreateToDoArguments, ToDoIdArguments, UpdateToDoArguments,
)
from taskshare.services.request_context import RequestContext

logger = logging.getLogger(__name__)


class ToDoHandlers:
    def __init__(self, ctx: RequestContext):
        self.ctx = ctx

    async def create_todo(self, args: CreateToDoArguments) -> ToDoRecord | None:
        user = require_user(self.ctx.acting_user, GuardedAction.CREATE_TODO)
        task_list = await self.ctx.task_lists.get(args.task_list_id)
        if task_list is None:
            return None
        require_member(task_list, user)
        todo = await self.ctx.todos.create(
            task_list_id=task_list.id,
            content=args.content,
            created_at=datetime.now(timezone.utc).isoformat(),
        )
        logger.info("To-do created", extra=log_fields(task_list_id=task_list.id))
        return todo

    async def update_todo(self, args: UpdateToDoArguments) -> ToDoRecord:
        user = require_user(self.ctx.acting_user, GuardedAction.UPDATE_TODO)
        todo = await self.ctx.todos.get(args.id)
        task_list = (
            await self.ctx.task_lists.get(todo.task_list_id) if todo else None
        )
        if todo is None or task_list is None:
            raise ResourceNotFoundError("ToDo", str(args.id))
        require_member(task_list, user)
        updated = await self.ctx.todos.update(
            args.id, content=args.content, is_completed=args.is_completed,
        )
        if updated is None:
            raise ResourceNotFoundError("ToDo", str(args.id))
        return updated

    async def delete_todo(self, args: ToDoIdArguments) -> bool:
        user = require_user(self.ctx.acting_user, GuardedAction.DELETE_TODO)
        todo = await self.ctx.todos.get(args.id)
        if todo is None:
            return True
        task_list = await self.ctx.task_lists.get(todo.task_list_id)
        if task_list is not None:
            require_member(task_list, user)
        await self.ctx.todos.delete(args.id)
        return True
