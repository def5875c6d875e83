"""Password Hashing — salted one-way digests via bcrypt.

Invariants:
    - Stored credential is never equal to the plaintext
    - Same password hashed twice yields different digests (fresh salt per call)
    - Only the first 72 bytes of a password are significant (bcrypt limit)
"""

import bcrypt

_BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    return bcrypt.hashpw(_encode(password), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time comparison; a corrupt stored digest counts as a mismatch."""
    try:
        return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
    except ValueError:
        return False
