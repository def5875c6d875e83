"""Output Schemas — public shapes of User, TaskList, ToDo and auth payloads.

Invariants:
    - User output never includes the password digest
    - TaskList.progress is a float in [0, 1]
    - Serialized by alias (camelCase) via model_dump(by_alias=True, mode="json")
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _Output(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserOut(_Output):
    id: UUID
    name: str
    email: str
    avatar: str | None = None


class ToDoOut(_Output):
    id: UUID
    content: str
    is_completed: bool
    task_list_id: UUID


class TaskListOut(_Output):
    id: UUID
    created_at: str
    title: str
    progress: float
    users: list[UserOut]
    todos: list[ToDoOut]


class AuthPayloadOut(_Output):
    user: UserOut
    token: str
