"""Request Context — per-request bundle of store access and acting user.

Invariants:
    - Built once per inbound request by the API dependency, never module-level
    - acting_user is None for anonymous callers, and stays None until the
      dispatcher resolves raw_token for a protected operation
    - Repositories share the request's AsyncSession
"""

from dataclasses import dataclass

from taskshare.core.progress import ProgressStrategy, constant_progress
from taskshare.core.records import UserRecord
from taskshare.core.repository_protocols import (
    UserRepository, TaskListRepository, ToDoRepository,
)
from taskshare.core.token_codec import TokenCodec


@dataclass
class RequestContext:
    users: UserRepository
    task_lists: TaskListRepository
    todos: ToDoRepository
    codec: TokenCodec
    acting_user: UserRecord | None = None
    raw_token: str | None = None
    strict_tokens: bool = False
    progress_strategy: ProgressStrategy = constant_progress
