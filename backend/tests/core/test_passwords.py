"""Password Hashing — salted, one-way, verifiable."""

from taskshare.core.passwords import hash_password, verify_password


def test_digest_is_not_plaintext():
    assert hash_password("hunter2") != "hunter2"


def test_same_password_gets_different_digests():
    assert hash_password("hunter2") != hash_password("hunter2")


def test_correct_password_verifies():
    digest = hash_password("hunter2")
    assert verify_password("hunter2", digest) is True


def test_wrong_password_fails():
    digest = hash_password("hunter2")
    assert verify_password("hunter3", digest) is False


def test_corrupt_digest_counts_as_mismatch():
    assert verify_password("hunter2", "not-a-bcrypt-digest") is False


def test_unicode_password_round_trips():
    digest = hash_password("contraseña-ñ")
    assert verify_password("contraseña-ñ", digest) is True
