"""Password hashing for locally stored accounts."""

from passlib.hash import argon2


def hash_password(raw: str) -> str:
    return argon2.hash(raw)


def verify_password(raw: str, hashed: str) -> bool:
    """Check ``raw`` against an argon2 hash. A malformed hash never matches."""
    try:
        return argon2.verify(raw, hashed)
    except ValueError:
        return False
