"""Task List Handlers — list, read, create, rename, delete, share (6 methods).

Invariants:
    - Every method calls require_user first: a rejected call touches nothing
    - Read/update/delete/share on an existing list also require membership
    - Unknown list ids never raise: get/update/share return None, delete returns True
    - add_user_to_task_list is idempotent: an existing member leaves the
      collaborator set unchanged

Design Decisions:
    - Membership append goes through TaskListRepository.add_member (atomic
      add-to-set), not a check-then-write in this module; the pre-check only
      short-circuits the common already-a-member case
    - create returns the inserted record; update re-reads by id
"""

import logging
from datetime import datetime, timezone

from taskshare.core.authorization import require_member, require_user
from taskshare.core.domain_types import GuardedAction, UserId
from taskshare.core.errors import ResourceNotFoundError
from taskshare.core.records import TaskListRecord
from taskshare.infrastructure.observability import log_fields
from taskshare.schemas.operations import (
    AddUserToTaskListArguments,
    CreateTaskListArguments,
    NoArguments,
    TaskListIdArguments,
    UpdateTaskListArguments,
)
from taskshare.services.request_context import RequestContext

logger = logging.getLogger(__name__)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class TaskListHandlers:
    def __init__(self, ctx: RequestContext):
        self.ctx = ctx

    async def my_task_lists(self, args: NoArguments) -> list[TaskListRecord]:
        """All lists whose collaborator set contains the acting user."""
        user = require_user(self.ctx.acting_user, GuardedAction.LIST_TASK_LISTS)
        return await self.ctx.task_lists.list_for_member(user.id)

    async def get_task_list(self, args: TaskListIdArguments) -> TaskListRecord | None:
        user = require_user(self.ctx.acting_user, GuardedAction.READ_TASK_LIST)
        task_list = await self.ctx.task_lists.get(args.id)
        if task_list is None:
            return None
        require_member(task_list, user)
        return task_list

    async def create_task_list(self, args: CreateTaskListArguments) -> TaskListRecord:
        user = require_user(self.ctx.acting_user, GuardedAction.CREATE_TASK_LIST)
        task_list = await self.ctx.task_lists.create(
            title=args.title, created_at=_now_iso(), creator_id=user.id,
        )
        logger.info(
            "Task list created",
            extra=log_fields(task_list_id=task_list.id, user_id=user.id),
        )
        return task_list

    async def update_task_list(
        self, args: UpdateTaskListArguments,
    ) -> TaskListRecord | None:
        user = require_user(self.ctx.acting_user, GuardedAction.UPDATE_TASK_LIST)
        task_list = await self.ctx.task_lists.get(args.id)
        if task_list is None:
            return None
        require_member(task_list, user)
        await self.ctx.task_lists.update_title(args.id, args.title)
        return await self.ctx.task_lists.get(args.id)

    async def delete_task_list(self, args: TaskListIdArguments) -> bool:
        user = require_user(self.ctx.acting_user, GuardedAction.DELETE_TASK_LIST)
        task_list = await self.ctx.task_lists.get(args.id)
        if task_list is not None:
            require_member(task_list, user)
            await self.ctx.task_lists.delete(args.id)
            logger.info(
                "Task list deleted",
                extra=log_fields(task_list_id=args.id, user_id=user.id),
            )
        return True

    async def add_user_to_task_list(
        self, args: AddUserToTaskListArguments,
    ) -> TaskListRecord | None:
        user = require_user(self.ctx.acting_user, GuardedAction.ADD_COLLABORATOR)
        task_list = await self.ctx.task_lists.get(args.task_list_id)
        if task_list is None:
            return None
        require_member(task_list, user)

        new_member = UserId(args.user_id)
        log_extra = log_fields(task_list_id=task_list.id, user_id=new_member)
        if task_list.has_member(new_member):
            logger.info("User already a collaborator", extra=log_extra)
            return task_list
        if await self.ctx.users.get(new_member) is None:
            raise ResourceNotFoundError("User", str(new_member))

        added = await self.ctx.task_lists.add_member(task_list.id, new_member)
        if not added:
            # a concurrent request appended the same user first
            return await self.ctx.task_lists.get(task_list.id)
        logger.info("Collaborator added", extra=log_extra)
        return task_list.with_member(new_member)
