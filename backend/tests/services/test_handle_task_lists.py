"""Task List Handlers — create, read, rename, delete, share.

Invariants:
    - Anonymous callers are rejected before any store access
    - create then get returns the title, a timestamp, and the creator as sole member
    - add_user_to_task_list is idempotent and null for unknown lists
    - Non-members cannot read, rename, delete or share a list
"""

from uuid import uuid4

import pytest
from sqlalchemy import func, select

from taskshare.core.errors import (
    ForbiddenError, ResourceNotFoundError, UnauthenticatedError,
)
from taskshare.models.task_list import TaskList
from taskshare.models.task_list_member import TaskListMember
from taskshare.models.todo import ToDo
from taskshare.schemas.operations import (
    AddUserToTaskListArguments,
    CreateTaskListArguments,
    CreateToDoArguments,
    NoArguments,
    TaskListIdArguments,
    UpdateTaskListArguments,
)
from taskshare.services.handle_task_lists import TaskListHandlers
from taskshare.services.handle_todos import ToDoHandlers


@pytest.fixture
async def alice(ctx, sign_up):
    user = await sign_up("alice@x.com", "Alice")
    ctx.acting_user = user
    return user


@pytest.fixture
async def bob(sign_up):
    return await sign_up("bob@x.com", "Bob")


async def _create(ctx, title="Groceries"):
    return await TaskListHandlers(ctx).create_task_list(
        CreateTaskListArguments(title=title),
    )


# ─── authentication ──────────────────────────────────────────────

@pytest.mark.parametrize("method, args", [
    ("my_task_lists", NoArguments()),
    ("get_task_list", TaskListIdArguments(id=uuid4())),
    ("create_task_list", CreateTaskListArguments(title="T")),
    ("update_task_list", UpdateTaskListArguments(id=uuid4(), title="T")),
    ("delete_task_list", TaskListIdArguments(id=uuid4())),
    ("add_user_to_task_list", AddUserToTaskListArguments(
        task_list_id=uuid4(), user_id=uuid4(),
    )),
])
async def test_anonymous_caller_is_rejected(ctx, method, args):
    handlers = TaskListHandlers(ctx)
    with pytest.raises(UnauthenticatedError):
        await getattr(handlers, method)(args)


async def test_anonymous_create_writes_nothing(ctx, test_db):
    with pytest.raises(UnauthenticatedError):
        await _create(ctx)
    count = await test_db.scalar(select(func.count()).select_from(TaskList))
    assert count == 0


# ─── create / read ───────────────────────────────────────────────

async def test_create_then_get(ctx, alice):
    created = await _create(ctx, "T")

    fetched = await TaskListHandlers(ctx).get_task_list(
        TaskListIdArguments(id=created.id),
    )

    assert fetched.title == "T"
    assert fetched.created_at
    assert fetched.collaborator_ids == (alice.id,)


async def test_get_unknown_list_returns_none(ctx, alice):
    result = await TaskListHandlers(ctx).get_task_list(
        TaskListIdArguments(id=uuid4()),
    )
    assert result is None


async def test_get_by_non_member_is_forbidden(ctx, alice, bob):
    created = await _create(ctx)
    ctx.acting_user = bob
    with pytest.raises(ForbiddenError):
        await TaskListHandlers(ctx).get_task_list(TaskListIdArguments(id=created.id))


async def test_my_task_lists_returns_only_member_lists(ctx, alice, bob):
    mine = await _create(ctx, "Mine")
    ctx.acting_user = bob
    await _create(ctx, "Bob's")
    ctx.acting_user = alice

    lists = await TaskListHandlers(ctx).my_task_lists(NoArguments())

    assert [t.id for t in lists] == [mine.id]


async def test_duplicate_titles_return_their_own_records(ctx, alice):
    first = await _create(ctx, "Same")
    second = await _create(ctx, "Same")
    assert first.id != second.id


# ─── update / delete ─────────────────────────────────────────────

async def test_update_title(ctx, alice):
    created = await _create(ctx, "Old")

    updated = await TaskListHandlers(ctx).update_task_list(
        UpdateTaskListArguments(id=created.id, title="New"),
    )

    assert updated.title == "New"
    assert updated.created_at == created.created_at


async def test_update_unknown_list_returns_none(ctx, alice):
    result = await TaskListHandlers(ctx).update_task_list(
        UpdateTaskListArguments(id=uuid4(), title="New"),
    )
    assert result is None


async def test_update_by_non_member_is_forbidden(ctx, alice, bob):
    created = await _create(ctx, "Old")
    ctx.acting_user = bob
    with pytest.raises(ForbiddenError):
        await TaskListHandlers(ctx).update_task_list(
            UpdateTaskListArguments(id=created.id, title="Hijacked"),
        )


async def test_delete_removes_list_members_and_todos(ctx, alice, test_db):
    created = await _create(ctx)
    await ToDoHandlers(ctx).create_todo(
        CreateToDoArguments(task_list_id=created.id, content="Milk"),
    )

    deleted = await TaskListHandlers(ctx).delete_task_list(
        TaskListIdArguments(id=created.id),
    )

    assert deleted is True
    assert await ctx.task_lists.get(created.id) is None
    members = await test_db.scalar(
        select(func.count()).select_from(TaskListMember)
        .where(TaskListMember.task_list_id == created.id),
    )
    todos = await test_db.scalar(
        select(func.count()).select_from(ToDo).where(ToDo.task_list_id == created.id),
    )
    assert members == 0
    assert todos == 0


async def test_delete_unknown_list_returns_true(ctx, alice):
    assert await TaskListHandlers(ctx).delete_task_list(
        TaskListIdArguments(id=uuid4()),
    ) is True


async def test_delete_by_non_member_is_forbidden(ctx, alice, bob):
    created = await _create(ctx)
    ctx.acting_user = bob
    with pytest.raises(ForbiddenError):
        await TaskListHandlers(ctx).delete_task_list(TaskListIdArguments(id=created.id))
    assert await ctx.task_lists.get(created.id) is not None


# ─── add collaborator ────────────────────────────────────────────

async def test_add_user_appends_collaborator(ctx, alice, bob):
    created = await _create(ctx)

    shared = await TaskListHandlers(ctx).add_user_to_task_list(
        AddUserToTaskListArguments(task_list_id=created.id, user_id=bob.id),
    )

    assert shared.collaborator_ids == (alice.id, bob.id)
    stored = await ctx.task_lists.get(created.id)
    assert stored.collaborator_ids == (alice.id, bob.id)


async def test_add_user_twice_is_idempotent(ctx, alice, bob):
    created = await _create(ctx)
    handlers = TaskListHandlers(ctx)
    args = AddUserToTaskListArguments(task_list_id=created.id, user_id=bob.id)

    once = await handlers.add_user_to_task_list(args)
    twice = await handlers.add_user_to_task_list(args)

    assert twice.collaborator_ids == once.collaborator_ids
    stored = await ctx.task_lists.get(created.id)
    assert stored.collaborator_ids == (alice.id, bob.id)


async def test_add_creator_again_changes_nothing(ctx, alice):
    created = await _create(ctx)
    result = await TaskListHandlers(ctx).add_user_to_task_list(
        AddUserToTaskListArguments(task_list_id=created.id, user_id=alice.id),
    )
    assert result.collaborator_ids == (alice.id,)


async def test_add_user_to_unknown_list_returns_none_and_mutates_nothing(
    ctx, alice, bob,
):
    existing = await _create(ctx)

    result = await TaskListHandlers(ctx).add_user_to_task_list(
        AddUserToTaskListArguments(task_list_id=uuid4(), user_id=bob.id),
    )

    assert result is None
    stored = await ctx.task_lists.get(existing.id)
    assert stored.collaborator_ids == (alice.id,)


async def test_add_unknown_user_is_not_found(ctx, alice):
    created = await _create(ctx)
    with pytest.raises(ResourceNotFoundError):
        await TaskListHandlers(ctx).add_user_to_task_list(
            AddUserToTaskListArguments(task_list_id=created.id, user_id=uuid4()),
        )


async def test_add_user_by_non_member_is_forbidden(ctx, alice, bob, sign_up):
    created = await _create(ctx)
    carol = await sign_up("carol@x.com", "Carol")
    ctx.acting_user = bob
    with pytest.raises(ForbiddenError):
        await TaskListHandlers(ctx).add_user_to_task_list(
            AddUserToTaskListArguments(task_list_id=created.id, user_id=carol.id),
        )


async def test_added_collaborator_sees_shared_list(ctx, alice, bob):
    created = await _create(ctx)
    await TaskListHandlers(ctx).add_user_to_task_list(
        AddUserToTaskListArguments(task_list_id=created.id, user_id=bob.id),
    )
    ctx.acting_user = bob

    lists = await TaskListHandlers(ctx).my_task_lists(NoArguments())

    assert [t.id for t in lists] == [created.id]


async def test_store_add_member_reports_duplicates(ctx, alice, bob):
    created = await _create(ctx)
    assert await ctx.task_lists.add_member(created.id, bob.id) is True
    assert await ctx.task_lists.add_member(created.id, bob.id) is False
