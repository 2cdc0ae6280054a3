"""Tests for Argon2 password hashing."""

from realworld_db.core import security


def test_hash_and_verify() -> None:
    hashed = security.hash_password("correct horse battery staple")

    assert hashed.startswith("$argon2id$")
    assert security.verify_password(hashed, "correct horse battery staple")
    assert not security.verify_password(hashed, "Correct horse battery staple")


def test_hashes_are_salted() -> None:
    assert security.hash_password("same") != security.hash_password("same")


def test_malformed_hash_does_not_verify() -> None:
    assert not security.verify_password("not-a-hash", "anything")


def test_needs_rehash_detects_parameter_drift() -> None:
    current = security.hash_password("pw")
    assert not security.needs_rehash(current)

    stronger = "$argon2id$v=19$m=65536,t=3,p=4$c29tZXNhbHQ$RdescudvJCsgt3ub+b+dWRWJTmaaJObG"
    assert security.needs_rehash(stronger)
