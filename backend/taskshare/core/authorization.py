"""Authorization Guard — login and membership checks for protected operations.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - require_user raises UnauthenticatedError with the action's own message
    - require_member raises ForbiddenError when the acting user is not in the
      list's collaborator set
    - Both run before any store mutation, so a rejection has no side effects

Design Decisions:
    - Exceptions (not error dicts): operations surface straight to the HTTP
      error handler, there is no agent loop consuming results
"""

from taskshare.core.domain_types import GuardedAction
from taskshare.core.errors import (
    ErrorContext, ForbiddenError, UnauthenticatedError,
)
from taskshare.core.records import TaskListRecord, UserRecord


def require_user(
    acting_user: UserRecord | None, action: GuardedAction,
) -> UserRecord:
    """Return the acting user or reject the action as unauthenticated."""
    if acting_user is None:
        raise UnauthenticatedError(action.value)
    return acting_user


def require_member(task_list: TaskListRecord, user: UserRecord) -> None:
    """Reject users who are not collaborators on task_list."""
    if not task_list.has_member(user.id):
        raise ForbiddenError(
            "You are not a collaborator on this task list",
            ErrorContext(user_id=str(user.id), task_list_id=str(task_list.id)),
        )
