"""Identity Resolver — bearer token → acting user (or anonymous).

Invariants:
    - Absent or empty token → None, always
    - Lenient mode (default): unverifiable token → None, never raises
    - Strict mode: unverifiable token → TokenInvalidError
    - Verified token for a user that no longer exists → None

Design Decisions:
    - One policy per process (STRICT_TOKENS) for every protected operation;
      signUp and signIn never resolve the token, so a stale token cannot
      block getting a fresh one
"""

import logging

from taskshare.core.records import UserRecord
from taskshare.core.repository_protocols import UserRepository
from taskshare.core.token_codec import TokenCodec
from taskshare.infrastructure.observability import log_fields

logger = logging.getLogger(__name__)

_BEARER_SCHEME = "bearer"


def extract_bearer_token(authorization: str | None) -> str | None:
    """Accept both 'Bearer <token>' and a bare token in the Authorization header.

    A scheme with nothing after it ("Bearer", "Bearer ") carries no token.
    """
    if not authorization:
        return None
    value = authorization.strip()
    scheme, _, rest = value.partition(" ")
    if scheme.lower() == _BEARER_SCHEME:
        return rest.strip() or None
    return value or None


async def resolve_acting_user(
    raw_token: str | None,
    users: UserRepository,
    codec: TokenCodec,
    strict: bool = False,
) -> UserRecord | None:
    if not raw_token:
        return None
    user_id = codec.decode(raw_token) if strict else codec.verify(raw_token)
    if user_id is None:
        return None
    user = await users.get(user_id)
    if user is None:
        logger.info(
            "Token references a user that no longer exists",
            extra=log_fields(user_id=user_id),
        )
    return user
