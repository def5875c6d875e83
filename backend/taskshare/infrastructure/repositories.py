"""SQL Repositories — UserRepository / TaskListRepository / ToDoRepository over AsyncSession.

Invariants:
    - Every public method returns core records (core/records.py), never ORM rows
    - Each write commits on its own: multi-step operations are not transactional
    - add_member is a single INSERT ... ON CONFLICT DO NOTHING statement — the
      unique (task_list_id, user_id) constraint makes it an atomic add-to-set
    - Collaborator ids are always read back ordered by membership row id

Design Decisions:
    - Collaborator ids loaded with a column query (not a relationship): reads
      never see a stale identity-map collection after add_member
    - Dialect-specific insert chosen from the bound engine (PostgreSQL in
      production, SQLite in tests); both support on_conflict_do_nothing
"""

from collections import defaultdict
from typing import Sequence

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from taskshare.core.domain_types import UserId, TaskListId, ToDoId
from taskshare.core.errors import EmailAlreadyRegisteredError
from taskshare.core.records import UserRecord, TaskListRecord, ToDoRecord
from taskshare.models.user import User
from taskshare.models.task_list import TaskList
from taskshare.models.task_list_member import TaskListMember
from taskshare.models.todo import ToDo


_INSERT_BY_DIALECT = {
    "postgresql": postgresql_insert,
    "sqlite": sqlite_insert,
}


def _to_user_record(row: User) -> UserRecord:
    return UserRecord(
        id=UserId(row.id),
        email=row.email,
        password_hash=row.password_hash,
        name=row.name,
        avatar=row.avatar,
    )


def _to_todo_record(row: ToDo) -> ToDoRecord:
    return ToDoRecord(
        id=ToDoId(row.id),
        task_list_id=TaskListId(row.task_list_id),
        content=row.content,
        is_completed=row.is_completed,
        created_at=row.created_at,
    )


class SqlUserRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(
        self, email: str, password_hash: str, name: str, avatar: str | None,
    ) -> UserRecord:
        """Insert a user; a taken email raises EmailAlreadyRegisteredError."""
        row = User(
            email=email, password_hash=password_hash, name=name, avatar=avatar,
        )
        self.db.add(row)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise EmailAlreadyRegisteredError(email)
        return _to_user_record(row)

    async def get(self, user_id: UserId) -> UserRecord | None:
        row = await self.db.get(User, user_id)
        return _to_user_record(row) if row else None

    async def get_by_email(self, email: str) -> UserRecord | None:
        result = await self.db.execute(select(User).where(User.email == email))
        row = result.scalar_one_or_none()
        return _to_user_record(row) if row else None

    async def get_many(self, user_ids: Sequence[UserId]) -> list[UserRecord]:
        """Users for user_ids in the given order; unknown ids are skipped."""
        if not user_ids:
            return []
        result = await self.db.execute(select(User).where(User.id.in_(user_ids)))
        by_id = {row.id: row for row in result.scalars().all()}
        return [_to_user_record(by_id[uid]) for uid in user_ids if uid in by_id]


class SqlTaskListRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _member_ids(
        self, task_list_ids: Sequence[TaskListId],
    ) -> dict[TaskListId, tuple[UserId, ...]]:
        result = await self.db.execute(
            select(TaskListMember.task_list_id, TaskListMember.user_id)
            .where(TaskListMember.task_list_id.in_(task_list_ids))
            .order_by(TaskListMember.id),
        )
        members: dict[TaskListId, list[UserId]] = defaultdict(list)
        for task_list_id, user_id in result.all():
            members[TaskListId(task_list_id)].append(UserId(user_id))
        return {k: tuple(v) for k, v in members.items()}

    def _to_record(
        self, row: TaskList, collaborator_ids: tuple[UserId, ...],
    ) -> TaskListRecord:
        return TaskListRecord(
            id=TaskListId(row.id),
            title=row.title,
            created_at=row.created_at,
            collaborator_ids=collaborator_ids,
        )

    async def create(
        self, title: str, created_at: str, creator_id: UserId,
    ) -> TaskListRecord:
        """Insert list + creator membership; returns the inserted record directly."""
        row = TaskList(title=title, created_at=created_at)
        self.db.add(row)
        await self.db.flush()
        self.db.add(TaskListMember(task_list_id=row.id, user_id=creator_id))
        await self.db.commit()
        return self._to_record(row, (creator_id,))

    async def get(self, task_list_id: TaskListId) -> TaskListRecord | None:
        row = await self.db.get(TaskList, task_list_id)
        if row is None:
            return None
        members = await self._member_ids([task_list_id])
        return self._to_record(row, members.get(task_list_id, ()))

    async def list_for_member(self, user_id: UserId) -> list[TaskListRecord]:
        result = await self.db.execute(
            select(TaskList)
            .join(TaskListMember, TaskListMember.task_list_id == TaskList.id)
            .where(TaskListMember.user_id == user_id)
            .order_by(TaskList.created_at),
        )
        rows = result.scalars().all()
        if not rows:
            return []
        members = await self._member_ids([TaskListId(r.id) for r in rows])
        return [self._to_record(r, members.get(TaskListId(r.id), ())) for r in rows]

    async def update_title(self, task_list_id: TaskListId, title: str) -> None:
        row = await self.db.get(TaskList, task_list_id)
        if row is None:
            return
        row.title = title
        await self.db.commit()

    async def delete(self, task_list_id: TaskListId) -> None:
        """Delete list with its members and to-dos (no-op when absent)."""
        await self.db.execute(
            delete(TaskListMember).where(TaskListMember.task_list_id == task_list_id),
        )
        await self.db.execute(delete(ToDo).where(ToDo.task_list_id == task_list_id))
        await self.db.execute(delete(TaskList).where(TaskList.id == task_list_id))
        await self.db.commit()

    async def add_member(self, task_list_id: TaskListId, user_id: UserId) -> bool:
        """Atomically append user_id if absent. True if a row was inserted."""
        insert = _INSERT_BY_DIALECT[self.db.get_bind().dialect.name]
        stmt = (
            insert(TaskListMember)
            .values(task_list_id=task_list_id, user_id=user_id)
            .on_conflict_do_nothing(index_elements=["task_list_id", "user_id"])
        )
        result = await self.db.execute(stmt)
        await self.db.commit()
        return result.rowcount == 1


class SqlToDoRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(
        self, task_list_id: TaskListId, content: str, created_at: str,
    ) -> ToDoRecord:
        row = ToDo(
            task_list_id=task_list_id, content=content,
            is_completed=False, created_at=created_at,
        )
        self.db.add(row)
        await self.db.commit()
        return _to_todo_record(row)

    async def get(self, todo_id: ToDoId) -> ToDoRecord | None:
        row = await self.db.get(ToDo, todo_id)
        return _to_todo_record(row) if row else None

    async def list_for_task_list(self, task_list_id: TaskListId) -> list[ToDoRecord]:
        result = await self.db.execute(
            select(ToDo)
            .where(ToDo.task_list_id == task_list_id)
            .order_by(ToDo.created_at),
        )
        return [_to_todo_record(row) for row in result.scalars().all()]

    async def update(
        self, todo_id: ToDoId, content: str | None, is_completed: bool | None,
    ) -> ToDoRecord | None:
        """Apply the non-None fields; None when the to-do doesn't exist."""
        row = await self.db.get(ToDo, todo_id)
        if row is None:
            return None
        if content is not None:
            row.content = content
        if is_completed is not None:
            row.is_completed = is_completed
        await self.db.commit()
        return _to_todo_record(row)

    async def delete(self, todo_id: ToDoId) -> None:
        await self.db.execute(delete(ToDo).where(ToDo.id == todo_id))
        await self.db.commit()
