"""Request Dependencies — build the per-request RequestContext.

Invariants:
    - One RequestContext per request, bound to that request's DB session
    - The Authorization header is only extracted here; the dispatcher resolves
      it once it knows whether the operation is public
    - Settings injected via get_settings (overridable in tests)
"""

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from taskshare.config import Settings, get_settings
from taskshare.core.progress import get_progress_strategy
from taskshare.core.token_codec import TokenCodec
from taskshare.infrastructure.database import get_db
from taskshare.infrastructure.repositories import (
    SqlTaskListRepository, SqlToDoRepository, SqlUserRepository,
)
from taskshare.services.identity import extract_bearer_token
from taskshare.services.request_context import RequestContext


def get_token_codec(settings: Settings = Depends(get_settings)) -> TokenCodec:
    return TokenCodec(settings.jwt_secret, settings.token_ttl)


async def get_request_context(
    authorization: str | None = Header(None),
    db: AsyncSession = Depends(get_db),
    codec: TokenCodec = Depends(get_token_codec),
    settings: Settings = Depends(get_settings),
) -> RequestContext:
    return RequestContext(
        users=SqlUserRepository(db),
        task_lists=SqlTaskListRepository(db),
        todos=SqlToDoRepository(db),
        codec=codec,
        raw_token=extract_bearer_token(authorization),
        strict_tokens=settings.strict_tokens,
        progress_strategy=get_progress_strategy(settings.progress_strategy),
    )
