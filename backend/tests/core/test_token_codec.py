"""Token Codec — issue/verify round trip and every rejection path.

Tests cover:
    - issued token verifies back to the same user id
    - absent, malformed, wrong-secret, expired tokens verify to None
    - decode raises TokenInvalidError where verify returns None
    - exp is exactly the configured ttl after iat
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import jwt as pyjwt
import pytest

from taskshare.core.domain_types import UserId
from taskshare.core.errors import TokenInvalidError
from taskshare.core.token_codec import TokenCodec

SECRET = "codec-secret"


def _codec(**kwargs) -> TokenCodec:
    return TokenCodec(SECRET, **kwargs)


def test_issued_token_verifies_to_same_user():
    user_id = UserId(uuid4())
    token = _codec().issue(user_id)
    assert _codec().verify(token) == user_id


@pytest.mark.parametrize("token", [None, ""])
def test_absent_token_verifies_to_none(token):
    assert _codec().verify(token) is None


def test_malformed_token_verifies_to_none():
    assert _codec().verify("not.a.jwt") is None


def test_malformed_token_decode_raises():
    with pytest.raises(TokenInvalidError):
        _codec().decode("not.a.jwt")


def test_token_signed_with_other_secret_is_rejected():
    token = TokenCodec("other-secret").issue(UserId(uuid4()))
    assert _codec().verify(token) is None


def test_expired_token_is_rejected():
    issued = datetime.now(timezone.utc) - timedelta(days=31)
    token = _codec().issue(UserId(uuid4()), now=issued)
    assert _codec().verify(token) is None


def test_short_ttl_token_expires():
    codec = _codec(ttl=timedelta(seconds=1))
    issued = datetime.now(timezone.utc) - timedelta(seconds=10)
    assert codec.verify(codec.issue(UserId(uuid4()), now=issued)) is None


def test_token_without_subject_is_rejected():
    token = pyjwt.encode(
        {"exp": datetime.now(timezone.utc) + timedelta(days=1)},
        SECRET, algorithm="HS256",
    )
    assert _codec().verify(token) is None


def test_token_with_non_uuid_subject_is_rejected():
    token = pyjwt.encode(
        {"sub": "user-123", "exp": datetime.now(timezone.utc) + timedelta(days=1)},
        SECRET, algorithm="HS256",
    )
    with pytest.raises(TokenInvalidError):
        _codec().decode(token)


def test_validity_window_is_thirty_days_by_default():
    token = _codec().issue(UserId(uuid4()))
    payload = pyjwt.decode(token, SECRET, algorithms=["HS256"])
    assert payload["exp"] - payload["iat"] == 30 * 24 * 3600


def test_empty_secret_is_refused():
    with pytest.raises(ValueError):
        TokenCodec("")
