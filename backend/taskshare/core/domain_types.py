"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, TaskListId, ToDoId wrap UUIDs — never use bare UUID in domain logic
    - Progress is bounded 0.0–1.0
    - Every guarded action has its own user-facing rejection message

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)
TaskListId = NewType("TaskListId", UUID)
ToDoId = NewType("ToDoId", UUID)


# ─── Value Types ─────────────────────────────────────────────────

Progress = NewType("Progress", float)   # 0.0–1.0


# ─── Enums ───────────────────────────────────────────────────────

class GuardedAction(str, Enum):
    """Protected operations — each value is the user-facing rejection message."""
    LIST_TASK_LISTS = "To list your task lists you need to be authenticated"
    READ_TASK_LIST = "To get a task list by id you need to be authenticated"
    CREATE_TASK_LIST = "To create a task list you need to be authenticated"
    UPDATE_TASK_LIST = "To update a task list you need to be authenticated"
    DELETE_TASK_LIST = "To delete a task list you need to be authenticated"
    ADD_COLLABORATOR = "To add a user to a task list you need to be authenticated"
    CREATE_TODO = "To create a to-do you need to be authenticated"
    UPDATE_TODO = "To update a to-do you need to be authenticated"
    DELETE_TODO = "To delete a to-do you need to be authenticated"


class ProgressStrategyName(str, Enum):
    """Selectable progress computations (PROGRESS_STRATEGY setting)."""
    CONSTANT = "constant"
    COMPLETED_RATIO = "completed_ratio"
