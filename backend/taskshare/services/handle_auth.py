"""Auth Handlers — sign-up and sign-in (2 methods).

Invariants:
    - Passwords are stored only as bcrypt digests
    - sign_in never reveals whether the email or the password was wrong
    - Both operations are public: no acting user required
    - sign_up returns the inserted user directly (no re-query by email)
"""

import logging
from dataclasses import dataclass

from taskshare.core.errors import InvalidCredentialsError
from taskshare.core.passwords import hash_password, verify_password
from taskshare.core.records import UserRecord
from taskshare.infrastructure.observability import log_fields
from taskshare.schemas.operations import SignInArguments, SignUpArguments
from taskshare.services.request_context import RequestContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthResult:
    user: UserRecord
    token: str


class AuthHandlers:
    def __init__(self, ctx: RequestContext):
        self.ctx = ctx

    async def sign_up(self, args: SignUpArguments) -> AuthResult:
        user = await self.ctx.users.create(
            email=args.email,
            password_hash=hash_password(args.password),
            name=args.name,
            avatar=args.avatar,
        )
        logger.info("User signed up", extra=log_fields(user_id=user.id))
        return AuthResult(user=user, token=self.ctx.codec.issue(user.id))

    async def sign_in(self, args: SignInArguments) -> AuthResult:
        user = await self.ctx.users.get_by_email(args.email)
        if user is None or not verify_password(args.password, user.password_hash):
            raise InvalidCredentialsError()
        logger.info("User signed in", extra=log_fields(user_id=user.id))
        return AuthResult(user=user, token=self.ctx.codec.issue(user.id))
