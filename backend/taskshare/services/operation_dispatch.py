"""Operation Dispatch — explicit routing from operation name to handler.

Invariants:
    - Every operation->handler mapping is visible — no getattr magic, no auto-discovery
    - Unknown operations raise UnknownOperationError
    - Arguments validated against the operation's schema before the handler runs
    - Handlers return records; the projection turns them into JSON-ready output
    - Public operations (signUp, signIn) never look at the bearer token; every
      other operation resolves it before its handler runs

Design Decisions:
    - Explicit dict over getattr: every mapping visible in one place
    - Handlers split by resource: max ~6 methods per class
    - Handlers instantiated per-dispatch with the request's context
"""

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from pydantic import BaseModel, ValidationError

from taskshare.core.errors import (
    ErrorContext, OperationArgumentsError, UnknownOperationError,
    validation_details,
)
from taskshare.infrastructure.observability import log_fields
from taskshare.schemas.operations import (
    AddUserToTaskListArguments,
    CreateTaskListArguments,
    CreateToDoArguments,
    NoArguments,
    SignInArguments,
    SignUpArguments,
    TaskListIdArguments,
    ToDoIdArguments,
    UpdateTaskListArguments,
    UpdateToDoArguments,
)
from taskshare.services.handle_auth import AuthHandlers
from taskshare.services.handle_task_lists import TaskListHandlers
from taskshare.services.handle_todos import ToDoHandlers
from taskshare.services.identity import resolve_acting_user
from taskshare.services.projection import MembershipProjection
from taskshare.services.request_context import RequestContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Operation:
    arguments: type[BaseModel]
    handler: Callable[[Any], Awaitable[Any]]
    present: Callable[[Any], Awaitable[Any]]
    public: bool = False


class OperationDispatch:
    """Routes operation name -> handler. Explicit registration, no auto-discovery."""

    def __init__(self, ctx: RequestContext):
        self._ctx = ctx
        auth = AuthHandlers(ctx)
        task_lists = TaskListHandlers(ctx)
        todos = ToDoHandlers(ctx)
        projection = MembershipProjection(ctx)

        # every mapping explicit — adding an operation requires editing this dict
        self._operations: dict[str, _Operation] = {
            # Queries
            "myTaskLists": _Operation(
                NoArguments, task_lists.my_task_lists, projection.present_task_lists,
            ),
            "getTaskList": _Operation(
                TaskListIdArguments, task_lists.get_task_list, projection.present_task_list,
            ),

            # Auth
            "signUp": _Operation(
                SignUpArguments, auth.sign_up, projection.present_auth, public=True,
            ),
            "signIn": _Operation(
                SignInArguments, auth.sign_in, projection.present_auth, public=True,
            ),

            # Task lists
            "createTaskList": _Operation(
                CreateTaskListArguments, task_lists.create_task_list,
                projection.present_task_list,
            ),
            "updateTaskList": _Operation(
                UpdateTaskListArguments, task_lists.update_task_list,
                projection.present_task_list,
            ),
            "deleteTaskList": _Operation(
                TaskListIdArguments, task_lists.delete_task_list,
                projection.present_scalar,
            ),
            "addUserToTaskList": _Operation(
                AddUserToTaskListArguments, task_lists.add_user_to_task_list,
                projection.present_task_list,
            ),

            # To-dos
            "createToDo": _Operation(
                CreateToDoArguments, todos.create_todo, projection.present_todo,
            ),
            "updateToDo": _Operation(
                UpdateToDoArguments, todos.update_todo, projection.present_todo,
            ),
            "deleteToDo": _Operation(
                ToDoIdArguments, todos.delete_todo, projection.present_scalar,
            ),
        }

    @property
    def operation_names(self) -> list[str]:
        return list(self._operations)

    async def execute(self, operation_name: str, arguments: dict) -> Any:
        """Validate arguments, run the handler, project the result."""
        operation = self._operations.get(operation_name)
        if operation is None:
            raise UnknownOperationError(
                operation_name, ErrorContext(operation=operation_name),
            )
        try:
            args = operation.arguments.model_validate(arguments)
        except ValidationError as e:
            raise OperationArgumentsError(
                operation_name, validation_details(e.errors()),
                ErrorContext(operation=operation_name),
            ) from e
        if not operation.public:
            await self._resolve_acting_user()
        logger.debug(
            f"Dispatching {operation_name}", extra=log_fields(operation=operation_name),
        )
        result = await operation.handler(args)
        return await operation.present(result)

    async def _resolve_acting_user(self) -> None:
        ctx = self._ctx
        if ctx.acting_user is not None or not ctx.raw_token:
            return
        ctx.acting_user = await resolve_acting_user(
            ctx.raw_token, ctx.users, ctx.codec, strict=ctx.strict_tokens,
        )
