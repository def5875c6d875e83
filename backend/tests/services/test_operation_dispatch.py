"""Operation Dispatch — name routing and argument validation."""

import pytest

from taskshare.core.errors import (
    OperationArgumentsError, TokenInvalidError, UnknownOperationError,
)
from taskshare.services.operation_dispatch import OperationDispatch


def test_every_operation_is_registered(ctx):
    assert set(OperationDispatch(ctx).operation_names) == {
        "myTaskLists", "getTaskList", "signUp", "signIn",
        "createTaskList", "updateTaskList", "deleteTaskList", "addUserToTaskList",
        "createToDo", "updateToDo", "deleteToDo",
    }


async def test_unknown_operation_raises(ctx):
    with pytest.raises(UnknownOperationError) as exc_info:
        await OperationDispatch(ctx).execute("dropDatabase", {})
    assert exc_info.value.context.operation == "dropDatabase"


async def test_missing_argument_reports_field(ctx):
    with pytest.raises(OperationArgumentsError) as exc_info:
        await OperationDispatch(ctx).execute("signIn", {"email": "a@x.com"})
    fields = [d["field"] for d in exc_info.value.details]
    assert fields == ["password"]


async def test_malformed_id_is_a_validation_error(ctx):
    with pytest.raises(OperationArgumentsError):
        await OperationDispatch(ctx).execute("getTaskList", {"id": "not-a-uuid"})


async def test_unexpected_argument_is_rejected(ctx):
    with pytest.raises(OperationArgumentsError):
        await OperationDispatch(ctx).execute("createTaskList", {"title": "T", "x": 1})


async def test_camel_case_arguments_reach_handler(ctx, sign_up):
    alice = await sign_up("alice@x.com", "Alice")
    ctx.acting_user = alice
    dispatch = OperationDispatch(ctx)
    created = await dispatch.execute("createTaskList", {"title": "T"})

    todo = await dispatch.execute(
        "createToDo", {"taskListId": created["id"], "content": "Milk"},
    )

    assert todo["taskListId"] == created["id"]
    assert todo["isCompleted"] is False


async def test_public_operation_ignores_stale_token_in_strict_mode(ctx):
    ctx.raw_token = "not-a-jwt"
    ctx.strict_tokens = True

    payload = await OperationDispatch(ctx).execute("signUp", {
        "email": "a@x.com", "password": "pw", "name": "Alice",
    })

    assert payload["user"]["email"] == "a@x.com"
    assert ctx.acting_user is None


async def test_protected_operation_resolves_token(ctx, sign_up):
    alice = await sign_up("alice@x.com", "Alice")
    ctx.raw_token = ctx.codec.issue(alice.id)

    lists = await OperationDispatch(ctx).execute("myTaskLists", {})

    assert lists == []
    assert ctx.acting_user.id == alice.id


async def test_strict_mode_bad_token_fails_protected_operation(ctx):
    ctx.raw_token = "not-a-jwt"
    ctx.strict_tokens = True
    with pytest.raises(TokenInvalidError):
        await OperationDispatch(ctx).execute("myTaskLists", {})
