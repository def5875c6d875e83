"""Token Codec — signed, time-limited identity assertions (HS256 JWT).

Invariants:
    - Payload carries sub (user id), iat and exp; exp = iat + ttl
    - verify() never raises: absent, malformed, tampered or expired → None
    - decode() raises TokenInvalidError for the same inputs (strict mode)
    - Pure: no IO; the clock is read only when `now` is not supplied

Design Decisions:
    - PyJWT over hand-rolled HMAC: signature + expiry checks are the library's job
    - "require" option enforces exp/sub presence, so a signed token without
      an identity is rejected rather than resolving to an empty id
"""

import logging
from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt as pyjwt

from taskshare.core.domain_types import UserId
from taskshare.core.errors import TokenInvalidError

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
DEFAULT_TTL = timedelta(days=30)


class TokenCodec:
    """Issues and verifies bearer tokens bound to a user id."""

    def __init__(self, secret: str, ttl: timedelta = DEFAULT_TTL):
        if not secret:
            raise ValueError("token signing secret must not be empty")
        self._secret = secret
        self._ttl = ttl

    def issue(self, user_id: UserId, now: datetime | None = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "iat": issued_at,
            "exp": issued_at + self._ttl,
        }
        return pyjwt.encode(payload, self._secret, algorithm=ALGORITHM)

    def decode(self, token: str) -> UserId:
        """Decode and validate, raising TokenInvalidError on any failure."""
        try:
            payload = pyjwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                options={"require": ["exp", "sub"]},
            )
            return UserId(UUID(payload["sub"]))
        except (pyjwt.PyJWTError, ValueError) as e:
            logger.info(f"Rejected bearer token: {type(e).__name__}")
            raise TokenInvalidError() from e

    def verify(self, token: str | None) -> UserId | None:
        """Return the user id the token asserts, or None if it can't be trusted."""
        if not token:
            return None
        try:
            return self.decode(token)
        except TokenInvalidError:
            return None
