"""Operation Schemas — request envelope and per-operation argument models.

Invariants:
    - Arguments are validated for presence and type only (no field-level rules
      beyond non-empty required strings)
    - Identifiers are UUIDs: a malformed id fails validation, never reaches the store
    - Extra argument keys are rejected so typos surface as VALIDATION_ERROR
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class OperationRequest(BaseModel):
    """Body of POST /api/v1/operations."""
    operation: str = Field(min_length=1)
    arguments: dict = Field(default_factory=dict)


class _Arguments(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="forbid",
    )


class NoArguments(_Arguments):
    pass


class SignUpArguments(_Arguments):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)
    name: str = Field(min_length=1)
    avatar: str | None = None


class SignInArguments(_Arguments):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class TaskListIdArguments(_Arguments):
    id: UUID


class CreateTaskListArguments(_Arguments):
    title: str = Field(min_length=1)


class UpdateTaskListArguments(_Arguments):
    id: UUID
    title: str = Field(min_length=1)


class AddUserToTaskListArguments(_Arguments):
    task_list_id: UUID
    user_id: UUID


class CreateToDoArguments(_Arguments):
    task_list_id: UUID
    content: str = Field(min_length=1)


class UpdateToDoArguments(_Arguments):
    id: UUID
    content: str | None = Field(None, min_length=1)
    is_completed: bool | None = None


class ToDoIdArguments(_Arguments):
    id: UUID
