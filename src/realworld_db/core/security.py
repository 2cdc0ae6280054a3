"""Password hashing built on Argon2id."""
from __future__ import annotations

from functools import lru_cache

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

from realworld_db.core.settings import settings


@lru_cache(maxsize=1)
def get_password_hasher() -> PasswordHasher:
    """Return the shared hasher configured from settings."""
    return PasswordHasher(
        time_cost=settings.argon2_time_cost,
        memory_cost=settings.argon2_memory_cost,
        parallelism=settings.argon2_parallelism,
    )


def hash_password(password: str) -> str:
    """Return a PHC-formatted Argon2id hash of ``password``."""
    return get_password_hasher().hash(password)


def verify_password(password_hash: str, password: str) -> bool:
    """Check ``password`` against a stored hash.

    Returns:
        True if the password matches; False on mismatch or a malformed hash.
    """
    try:
        return get_password_hasher().verify(password_hash, password)
    except (VerificationError, InvalidHashError):
        return False


def needs_rehash(password_hash: str) -> bool:
    """Return True when the hash was produced with outdated parameters."""
    return get_password_hasher().check_needs_rehash(password_hash)
