"""Operations Endpoint — single structured query/mutation entry point.

Invariants:
    - POST /api/v1/operations with {"operation", "arguments"}
    - Success → {"data": <result>}; failure → TaskShareError envelope via
      the global handler
    - Bearer token extracted by get_request_context, resolved by OperationDispatch
      only for protected operations
"""

from fastapi import APIRouter, Depends

from taskshare.api.dependencies import get_request_context
from taskshare.core.errors import TaskShareError
from taskshare.schemas.operations import OperationRequest
from taskshare.services.operation_dispatch import OperationDispatch
from taskshare.services.request_context import RequestContext

router = APIRouter(prefix="/api/v1/operations", tags=["operations"])


@router.post("")
async def run_operation(
    body: OperationRequest,
    ctx: RequestContext = Depends(get_request_context),
):
    """Dispatch one operation on behalf of the acting user."""
    dispatch = OperationDispatch(ctx)
    try:
        data = await dispatch.execute(body.operation, body.arguments)
    except TaskShareError as e:
        e.context.operation = e.context.operation or body.operation
        raise
    return {"data": data}
